"""The interactive loop: prompt, read a line, run its statements."""

from __future__ import annotations

import os
import sys
from typing import Iterable, Mapping, TextIO

from minishell.builtins import ShellExit
from minishell.environment import Environment
from minishell.executor import Executor
from minishell.parsing import ParseError, parse_statement, split_statements, tokenize
from minishell.textutils import read_line

PROMPT = "$>"


class Shell:
    """A small command shell reading lines from ``stdin``."""

    def __init__(
        self,
        environ: Environment | Mapping[str, str] | Iterable[str] | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        if environ is None:
            environ = os.environ
        if isinstance(environ, Environment):
            self.env = environ
        elif isinstance(environ, Mapping):
            self.env = Environment.from_mapping(environ)
        else:
            self.env = Environment(environ)
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.executor = Executor(self.env, self.stdout)

    def run_line(self, line: str) -> bool:
        """Run every statement of a line; return whether the last succeeded.

        A statement that cannot be parsed reports its error and is skipped.
        ShellExit raised by ``exit`` propagates to the caller.
        """
        if not line:
            return True
        succeeded = True
        for statement in split_statements(tokenize(line)):
            try:
                command = parse_statement(statement)
            except ParseError as error:
                self.stdout.write(f"{error}\n")
                succeeded = False
                continue
            succeeded = self.executor.run(command)
        return succeeded

    def loop(self) -> int:
        """Prompt and run lines until end of input or ``exit``; return the status."""
        while True:
            self.stdout.write(PROMPT)
            self.stdout.flush()
            line = read_line(self.stdin)
            if line is None:
                return 0
            try:
                self.run_line(line)
            except ShellExit as leave:
                return leave.status


def main(argv: list[str] | None = None) -> int:
    """Start an interactive shell on the process's standard streams."""
    return Shell(os.environ, sys.stdin, sys.stdout).loop()


if __name__ == "__main__":
    raise SystemExit(main())