# minishell

A small interactive command shell. It shows a `$>` prompt, reads one line at a
time and runs it. It supports:

- external programs, found through the directories listed in `PATH`;
- several statements on one line, separated by a `;` token;
- one pipe between two commands: `ls | grep py`;
- output redirection with `>` (truncate) and `>>` (append);
- input redirection from a file with `<`;
- the built-in commands `cd`, `setenv` and `exit`.

## Installing

```
pip install .
```

## Running

```
mysh
```

Type commands at the prompt. The shell ends on `exit` or at end of input
(Ctrl-D).

```
$>ls -l > listing.txt
$>wc -l < listing.txt
$>setenv GREETING=hello
$>cd /tmp ; pwd
```

Words are separated by single spaces, so operators such as `;`, `|`, `>` and
`<` must stand as words of their own.

### Built-in commands

- `cd` with no argument, or `cd ~`, goes to `HOME`; `cd DIR` goes to `DIR`.
  More than one argument prints `cd: Too many arguments.`; a directory that
  cannot be entered prints `DIR: Not a directory.`
- `setenv NAME=value` appends the entry to the environment; later entries win
  over earlier ones. Any other number of arguments prints
  `setenv: Bad argument.`
- `exit` leaves the shell with status 0.

### Messages

- `foo: Command not found.` when a program is not found in `PATH`;
- `Missing name for redirect.` when a statement ends with a bare `<` or `>`;
- `Invalid null command.` when a statement, or a side of a pipe, is empty;
- `FILE: No such file or directory.` when an input file cannot be opened.

A statement that holds `;` inside one of its words (as in `ls;`) is dropped,
together with everything after it on the line.

## Using it from Python

```python
import os
import sys

from minishell.shell import Shell

shell = Shell(dict(os.environ), sys.stdin, sys.stdout)
shell.run_line("echo hello ; echo world")
```

`Shell.run_line()` runs every statement of a line and returns whether the
last one succeeded; `Shell.loop()` runs the interactive prompt over the input
stream and returns the exit status.

The lower-level pieces are:

- `minishell.parsing.parse_line`, which turns a line into `Command` objects
  and raises `ParseError` for a statement that cannot run;
- `minishell.executor.Executor`, which runs a `Command` against an
  environment;
- `minishell.environment.Environment`, a list of `NAME=value` entries with
  `get`, `add`, `resolve` and `as_dict`;
- `minishell.builtins`, with `cd`, `setenv`, `exit_shell` and `lookup`;
- `minishell.textutils`, with `split`, `read_line` and small number parsers.

## What it does not do

- No quoting, escaping, variable expansion or wildcard expansion.
- At most one pipe per statement; a statement does not combine a pipe with a
  redirection.
- `<<` reads from a file named after it, like `<`; there are no
  here-documents. A `>>` or `<<` anywhere in a statement makes an output
  redirection append.
- Built-in commands are not run inside pipes or redirections.
- The last directory listed in `PATH` is not searched.
- No job control, history or line editing, and no `unsetenv` or `env`.

## Tests

```
pip install .[test]
pytest
```