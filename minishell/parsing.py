"""Turning an input line into commands: statements, pipes and redirections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from minishell.textutils import split

MISSING_NAME = "Missing name for redirect."
NULL_COMMAND = "Invalid null command."


class ParseError(Exception):
    """A statement that cannot be run; the message is shown to the user."""


@dataclass(frozen=True)
class RedirectionCounts:
    """How many pipe and redirection tokens a statement holds.

    ``doubles`` counts both ``>>`` and ``<<`` tokens; any of them makes an
    output redirection append instead of truncate.
    """

    pipes: int = 0
    outputs: int = 0
    inputs: int = 0
    doubles: int = 0


@dataclass
class Command:
    """One statement ready to run.

    ``pipe_args`` holds the command reading from this one's output,
    ``output`` and ``input`` the files redirected to and from.
    """

    args: list[str]
    pipe_args: list[str] | None = None
    output: str | None = None
    append: bool = False
    input: str | None = None

    @property
    def name(self) -> str:
        return self.args[0]


def count_redirections(args: Iterable[str]) -> RedirectionCounts:
    """Count tokens starting with '|', '>' and '<', and the doubled forms."""
    pipes = outputs = inputs = doubles = 0
    for arg in args:
        if arg.startswith("|"):
            pipes += 1
        if arg.startswith(">"):
            outputs += 1
        elif arg.startswith("<"):
            inputs += 1
        if arg in (">>", "<<"):
            doubles += 1
    return RedirectionCounts(pipes, outputs, inputs, doubles)


def tokenize(line: str) -> list[str]:
    """Split a line on single spaces, keeping empty fields."""
    return split(line, " ")


def split_statements(tokens: Iterable[str]) -> list[list[str]]:
    """Split tokens into statements at tokens that start with ';'.

    Empty statements are dropped. A statement holding a ';' inside one of
    its tokens is misplaced: it and everything after it are discarded.
    """
    statements: list[list[str]] = []
    current: list[str] = []
    for token in [*tokens, ";"]:
        if not token.startswith(";"):
            current.append(token)
            continue
        if any(";" in item for item in current):
            break
        if current:
            statements.append(current)
        current = []
    return statements


def missing_redirect_name(args: Sequence[str]) -> bool:
    """True when the statement ends with a bare '<' or '>'."""
    return bool(args) and args[-1] in ("<", ">")


def _split_at(tokens: Sequence[str], operators: tuple[str, ...]) -> tuple[list[str], str]:
    """Return the tokens before the first operator and the token after it."""
    for index, token in enumerate(tokens):
        if token in operators:
            if index + 1 >= len(tokens):
                raise ParseError(MISSING_NAME)
            return list(tokens[:index]), tokens[index + 1]
    raise ParseError(MISSING_NAME)


def _require_args(args: list[str]) -> list[str]:
    if not args:
        raise ParseError(NULL_COMMAND)
    return args


def parse_statement(tokens: Sequence[str]) -> Command:
    """Build a command from one statement's tokens.

    A pipe takes precedence over an output redirection, which takes
    precedence over an input redirection.
    """
    if not tokens:
        raise ParseError(NULL_COMMAND)
    counts = count_redirections(tokens)
    if counts.pipes:
        index = next(i for i, token in enumerate(tokens) if token.startswith("|"))
        return Command(
            _require_args(list(tokens[:index])),
            pipe_args=_require_args(list(tokens[index + 1 :])),
        )
    if counts.outputs:
        if missing_redirect_name(tokens):
            raise ParseError(MISSING_NAME)
        args, target = _split_at(tokens, (">", ">>"))
        return Command(_require_args(args), output=target, append=counts.doubles > 0)
    if counts.inputs:
        if missing_redirect_name(tokens):
            raise ParseError(MISSING_NAME)
        args, source = _split_at(tokens, ("<", "<<"))
        return Command(_require_args(args), input=source)
    return Command(list(tokens))


def parse_line(line: str) -> list[Command]:
    """Parse a whole line into its commands; an empty line gives none."""
    if not line:
        return []
    return [parse_statement(statement) for statement in split_statements(tokenize(line))]