# minish

The parts of a small command shell, in plain Python with no third-party
dependencies: a lexer for command lines, `$NAME` / `$?` expansion, the usual
builtins (`echo`, `cd`, `pwd`, `export`, `unset`, `env`, `exit`), `<`, `>`,
`>>` and `<<` redirections, and pipelines of commands. Running external
programs needs a POSIX system.

## Modules

| Module | Contents |
| --- | --- |
| `minish.tokens` | `TokenType`, `QuoteType`, the frozen dataclass `Token`, and `get_token_type`, `is_operator`, `is_redirection_token` |
| `minish.lexer` | `lexer(line)` and its helpers `skip_whitespace`, `get_operator_length`, `extract_word` |
| `minish.expand` | `expand_variables(line, exit_status=0, env=None)` and `expand_exit_status(exit_status)` |
| `minish.commands` | the dataclasses `Command` and `Redirection`, and `format_commands` / `debug_print_cmd` |
| `minish.builtins` | the builtins, `is_builtin`, `execute_builtin`, `is_valid_identifier`, `set_env_var`, `print_export_error`, and `ShellExit` |
| `minish.interactive` | `reader` for prompting, and `handle_signals`, `setup_sigint`, `setup_sigquit`, `handle_sigint` |
| `minish.executor` | `find_executable_in_path`, `search_in_paths`, here-documents, `execute_external_command`, `execute_command`, `execute_pipeline` |

## Tokenizing

```python
from minish.lexer import lexer

for token in lexer("echo 'hello world' | wc -c > out.txt"):
    print(token.type, token.value, token.quote_type)
```

`lexer` returns a list of `Token`. Operators `|`, `<`, `>`, `<<` and `>>`
get their own types; every other word is `TokenType.ARGUMENT`. A word that
begins with `'` or `"` runs to the matching quote, which is dropped, and its
`quote_type` records the quoting. An empty line gives an empty list.

## Expanding variables

```python
from minish.expand import expand_variables

expand_variables("home is $HOME, last status $?", 0, {"HOME": "/home/user"})
# 'home is /home/user, last status 0'
```

Without `env` the process environment is used. An unknown variable expands
to the empty string; a `$` not followed by a letter, `_` or `?` is kept.

## Builtins

Builtins take the full argument list, command name first, write to
`sys.stdout` / `sys.stderr`, and return an exit status:

```python
from minish.builtins import builtin_echo, execute_builtin, is_builtin

builtin_echo(["echo", "-n", "no newline"])
execute_builtin(is_builtin("pwd"), ["pwd"])
```

`is_builtin` returns the builtin's index or `-1`. `export` with no arguments
lists the environment as `declare -x NAME="value"` lines and rejects names
that are not valid identifiers; `env` leaves out `COLUMNS` and `LINES`.
`builtin_exit` raises `ShellExit` (a `SystemExit`) with the status to leave
with: `0` with no argument, `2` for a non-numeric argument, otherwise the
number modulo 256. With more than one argument it returns `1` and does not
leave.

## Running commands

```python
from minish.commands import Command, Redirection
from minish.executor import execute_pipeline
from minish.tokens import TokenType

first = Command(args=["printf", "a\\nb\\n"])
second = Command(args=["wc", "-l"])
second.redirections.append(Redirection(TokenType.REDIRECT_OUT, "count.txt"))

status = execute_pipeline([first, second])
```

`execute_pipeline` takes a sequence of `Command` and returns the status of
the last one. A program that cannot be found gives `127`, one killed by a
signal gives `128 + signal`. A single builtin without redirections runs in
the current process, so `cd` and `export` take effect; a builtin with
redirections or inside a pipeline runs so that its changes to the working
directory and environment are undone afterwards.

A `<<` redirection reads lines up to its delimiter (by `input("> ")`, or a
`read_line(prompt)` callable passed to `handle_heredoc` / `consume_heredocs`
that returns `None` at end of input), expanding variables when the
redirection's `expand` is true. The text goes through a temporary file
`/tmp/heredoc_<n>` that is removed once opened. `consume_heredocs` reads and
discards every here-document of a list of redirections and returns how many
there were.

## Interactive helpers

`reader(exit_status)` reads one line, with the prompt `minishell$ ` when
standard input is a terminal, and raises `ShellExit(exit_status)` at end of
input. `handle_signals()` makes Ctrl-C print a new line and ignores the quit
signal.

## What is not included

There is no parser that turns a token list into `Command` objects, and no
read–parse–run loop or `minish` command to start a shell: a caller builds
`Command` lists itself and hands them to `execute_pipeline`.