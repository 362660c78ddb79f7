"""Running parsed commands: builtins, programs, pipes and redirections."""

from __future__ import annotations

import os
import subprocess
from typing import IO, Sequence, TextIO

from minishell.builtins import lookup
from minishell.environment import Environment
from minishell.parsing import Command

_FILE_MODE = 0o775


class Executor:
    """Runs commands against an environment, writing messages to ``out``.

    When ``out`` is backed by a real file descriptor, programs write to it
    directly; otherwise their output is collected and written to ``out``.
    """

    def __init__(self, env: Environment, out: TextIO) -> None:
        self.env = env
        self.out = out

    def run(self, command: Command) -> bool:
        """Run one command and report whether it succeeded."""
        if command.pipe_args is not None:
            return self.run_pipeline(command)
        if command.output is not None:
            return self._run_redirected_output(command)
        if command.input is not None:
            return self._run_redirected_input(command)
        builtin = lookup(command.name)
        if builtin is not None:
            return builtin(command.args, self.env, self.out)
        return self._spawn(command.args)

    def run_pipeline(self, command: Command) -> bool:
        """Run ``args | pipe_args``, the second reading the first's output."""
        if command.pipe_args is None:
            return self._spawn(command.args)
        writer_path = self._resolve(command.args)
        if writer_path is None:
            return False
        reader_path = self._resolve(command.pipe_args)
        if reader_path is None:
            return False
        target = self._stdout()
        child_env = self.env.as_dict()
        try:
            with subprocess.Popen(
                list(command.args),
                executable=writer_path,
                env=child_env,
                stdout=subprocess.PIPE,
            ) as writer:
                with subprocess.Popen(
                    list(command.pipe_args),
                    executable=reader_path,
                    env=child_env,
                    stdin=writer.stdout,
                    stdout=target,
                ) as reader:
                    if writer.stdout is not None:
                        writer.stdout.close()
                    output, _ = reader.communicate()
                writer.wait()
        except OSError:
            self._not_found(command.name)
            return False
        self._emit(output)
        return reader.returncode == 0

    def _run_redirected_output(self, command: Command) -> bool:
        assert command.output is not None
        flags = os.O_RDWR | os.O_CREAT
        flags |= os.O_APPEND if command.append else os.O_TRUNC
        try:
            fd = os.open(command.output, flags, _FILE_MODE)
        except OSError as error:
            self.out.write(f"{command.output}: {error.strerror}.\n")
            return False
        try:
            return self._spawn(command.args, stdout=fd)
        finally:
            os.close(fd)

    def _run_redirected_input(self, command: Command) -> bool:
        assert command.input is not None
        try:
            source = open(command.input, "rb")
        except OSError:
            self.out.write(f"{command.input}: No such file or directory.\n")
            return False
        with source:
            return self._spawn(command.args, stdin=source)

    def _spawn(
        self,
        args: Sequence[str],
        stdin: IO[bytes] | None = None,
        stdout: int | None = None,
    ) -> bool:
        path = self._resolve(args)
        if path is None:
            return False
        target = stdout if stdout is not None else self._stdout()
        try:
            completed = subprocess.run(
                list(args),
                executable=path,
                env=self.env.as_dict(),
                stdin=stdin,
                stdout=target,
                check=False,
            )
        except OSError:
            self._not_found(args[0])
            return False
        if target == subprocess.PIPE:
            self._emit(completed.stdout)
        return completed.returncode == 0

    def _resolve(self, args: Sequence[str]) -> str | None:
        path = self.env.resolve(args[0])
        if path is None:
            self._not_found(args[0])
        return path

    def _not_found(self, name: str) -> None:
        if name != "exit":
            self.out.write(f"{name}: Command not found.\n")

    def _stdout(self) -> int:
        try:
            fd = self.out.fileno()
        except (AttributeError, OSError, ValueError):
            return subprocess.PIPE
        self.out.flush()
        return fd

    def _emit(self, output: bytes | None) -> None:
        if output:
            self.out.write(output.decode(errors="replace"))