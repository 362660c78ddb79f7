"""Commands the shell runs itself: cd, setenv and exit."""

from __future__ import annotations

import os
from typing import Callable, Sequence, TextIO

from minishell.environment import Environment

Builtin = Callable[[Sequence[str], Environment, TextIO], bool]


class ShellExit(Exception):
    """Raised to leave the shell with the given status."""

    def __init__(self, status: int = 0) -> None:
        super().__init__(status)
        self.status = status


def _go_home(env: Environment) -> bool:
    home = env.get("HOME")
    if home is None:
        return False
    try:
        os.chdir(home)
    except OSError:
        return False
    return True


def cd(args: Sequence[str], env: Environment, out: TextIO) -> bool:
    """Change directory; no argument or '~' goes to HOME."""
    if len(args) > 2:
        out.write("cd: Too many arguments.\n")
        return False
    if len(args) == 1 or args[1] == "~":
        return _go_home(env)
    try:
        os.chdir(args[1])
    except OSError:
        out.write(f"{args[1]}: Not a directory.\n")
        return False
    return True


def setenv(args: Sequence[str], env: Environment, out: TextIO) -> bool:
    """Append one raw NAME=value entry to the environment."""
    if len(args) != 2:
        out.write("setenv: Bad argument.\n")
        return False
    env.add(args[1])
    return True


def exit_shell(args: Sequence[str], env: Environment, out: TextIO) -> bool:
    """Flush pending output and leave the shell with status 0."""
    out.flush()
    raise ShellExit(0)


_BUILTINS: dict[str, Builtin] = {
    "setenv": setenv,
    "cd": cd,
    "exit": exit_shell,
}


def lookup(name: str) -> Builtin | None:
    """Return the builtin called name, or None."""
    return _BUILTINS.get(name)