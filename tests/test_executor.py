import io
import os

import pytest

from minishell.environment import Environment
from minishell.executor import Executor
from minishell.parsing import Command, parse_statement

SYSTEM_PATH = "PATH=/bin:/usr/bin:/nonexistent"


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def executor(out):
    return Executor(Environment([SYSTEM_PATH, "HOME=/"]), out)


def test_runs_program_and_collects_output(executor, out):
    assert executor.run(Command(["echo", "hello", "world"])) is True
    assert out.getvalue() == "hello world\n"


def test_unknown_command_reports_not_found(executor, out):
    assert executor.run(Command(["nosuchcommand"])) is False
    assert out.getvalue() == "nosuchcommand: Command not found.\n"


def test_failing_program_reports_failure(executor, out):
    assert executor.run(Command(["false"])) is False
    assert out.getvalue() == ""


def test_output_redirection_truncates(executor, out, tmp_path):
    target = tmp_path / "out.txt"
    target.write_text("old content that should vanish\n")
    assert executor.run(parse_statement(["echo", "fresh", ">", str(target)]))
    assert target.read_text() == "fresh\n"
    assert out.getvalue() == ""


def test_output_redirection_appends(executor, tmp_path):
    target = tmp_path / "log.txt"
    executor.run(parse_statement(["echo", "one", ">>", str(target)]))
    executor.run(parse_statement(["echo", "two", ">>", str(target)]))
    assert target.read_text() == "one\ntwo\n"


def test_output_redirection_creates_file_with_mode(executor, tmp_path):
    target = tmp_path / "new.txt"
    old_umask = os.umask(0)
    try:
        executor.run(parse_statement(["echo", "x", ">", str(target)]))
    finally:
        os.umask(old_umask)
    assert target.stat().st_mode & 0o777 == 0o775


def test_input_redirection_feeds_file(executor, out, tmp_path):
    source = tmp_path / "in.txt"
    source.write_text("line from file\n")
    assert executor.run(parse_statement(["cat", "<", str(source)]))
    assert out.getvalue() == "line from file\n"


def test_missing_input_file(executor, out, tmp_path):
    missing = tmp_path / "absent.txt"
    assert executor.run(parse_statement(["cat", "<", str(missing)])) is False
    assert out.getvalue() == f"{missing}: No such file or directory.\n"


def test_pipeline_connects_commands(executor, out):
    command = parse_statement(["echo", "piped", "|", "cat"])
    assert executor.run_pipeline(command) is True
    assert out.getvalue() == "piped\n"


def test_run_dispatches_pipeline(executor, out, tmp_path):
    source = tmp_path / "words.txt"
    source.write_text("b\na\n")
    assert executor.run(parse_statement(["cat", str(source), "|", "sort"]))
    assert out.getvalue() == "a\nb\n"


def test_pipeline_with_unknown_reader(executor, out):
    command = parse_statement(["echo", "x", "|", "nosuchreader"])
    assert executor.run(command) is False
    assert out.getvalue() == "nosuchreader: Command not found.\n"


def test_builtin_setenv_changes_environment(executor):
    assert executor.run(Command(["setenv", "GREETING=hi"])) is True
    assert executor.env.get("GREETING") == "hi"


def test_setenv_reaches_child_environment(executor, out):
    assert executor.run(Command(["setenv", "MARKER=visible"])) is True
    assert executor.run(Command(["env"])) is True
    assert "MARKER=visible" in out.getvalue().splitlines()


def test_builtin_cd(executor, tmp_path, monkeypatch):
    monkeypatch.chdir("/")
    assert executor.run(Command(["cd", str(tmp_path)])) is True
    assert os.getcwd() == os.path.realpath(tmp_path)


def test_last_path_directory_is_not_searched(out, tmp_path):
    bindir = tmp_path / "bin"
    bindir.mkdir()
    script = bindir / "greet"
    script.write_text("#!/bin/sh\necho greeted\n")
    script.chmod(0o755)
    only_last = Executor(Environment([f"PATH={bindir}"]), out)
    assert only_last.run(Command(["greet"])) is False
    searched = Executor(Environment([f"PATH={bindir}:/nonexistent"]), io.StringIO())
    assert searched.run(Command(["greet"])) is True
    assert searched.out.getvalue() == "greeted\n"