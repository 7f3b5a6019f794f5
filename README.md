# taskfile

A small task runner. Tasks live in a file named `Taskfile`, and each task body
is plain bash. The `task` command finds the nearest `Taskfile` in the current
directory or in one of its parent directories and runs the task you name.

The package has no dependencies outside the standard library. Running tasks
requires `bash` on the `PATH`.

## Writing a Taskfile

```
# Comments start with '#'.

export PROJECT="myapp"
alias dc="docker compose"
dotenv ".env"

include "tasks/docker.Taskfile"

@description Say hello
task hello {
  echo "Hello from $PROJECT!"
}

@description Greet someone by name
task greet [name="world"] {
  echo "Hello, $name!"
}

@description Build after cleaning
task build depends=[clean] {
  echo "Building $PROJECT..."
}

task clean {
  echo "Cleaning..."
}

@description Run checks side by side
task ci depends_parallel=[lint, test] {
  echo "all checks passed"
}

@confirm Are you sure you want to nuke everything?
task nuke {
  echo "Nuking..."
}
```

The statements are:

- `export KEY="value"`: an environment variable set in every task of this file
  and of the files it includes.
- `alias name="command"`: turned into a shell function, `name() { command "$@"; }`,
  inside each task.
- `dotenv "path"`: a file sourced (with `set -a`) before each task, if it
  exists. The path is taken relative to the file that names it.
- `include "path"`: pulls in another Taskfile, relative to the including file.
  Its file name without the extension becomes a namespace, so
  `tasks/docker.Taskfile` gives `docker:up`, `docker:down` and so on. Nested
  includes chain: `docker:compose:ps`. Exports, aliases and dotenv files flow
  from a file to the files it includes, never to their siblings or parents. A
  file reached twice through different includes is read only once.
- `task name [params] depends=[...] depends_parallel=[...] { ... }`: a task.
  Task names may hold letters, digits, `-` and `_`. The opening brace may also
  sit on the next line. Braces inside quoted strings and after `#` do not count
  towards closing the body.
  - `[name]` is a required parameter, `[name="default"]` an optional one.
    Parameter names must be identifiers (letters, digits, underscores).
  - `depends=[a, b]` runs `a` then `b` before the task.
  - `depends_parallel=[a, b]` runs `a` and `b` at the same time, without
    parameters.
  - A dependency without a `:` is looked up in the task's own namespace.
- `@description text`: shown in the task list.
- `@confirm text`: asks before running the task (`Are you sure?` when no text
  is given). Only `y` or `yes` lets the task run.

`@description` and `@confirm` must be followed by a task; anything else after
them is a syntax error.

Every script starts with `set -euo pipefail`, followed by the dotenv, export,
alias and parameter lines, then the task body. The first failing command stops
the task.

## Running tasks

```
task                      # show usage and the list of tasks
task --list               # list tasks (also -l)
task hello                # run a task
task greet -- --name=Ada  # pass parameters as --key=value after --
task build --dry-run      # print the generated script instead of running it
task --file path/to/Taskfile hello   # also -f
task --init               # write a starter Taskfile in this directory
task --version            # also -v
```

Arguments after `--` that do not start with `--` are ignored with a warning;
`--flag` without a value sets the parameter to an empty string.

When no Taskfile is found and no task, `--list` or `--dry-run` was given, `task`
offers to write a starter Taskfile in the current directory.

An unknown task name is reported together with up to three close matches.
Circular dependencies, circular includes, duplicate task names, missing
includes and missing required parameters are reported as errors.

Exit codes: a failing task's exit code becomes the exit code of `task`; a task
declined at its `@confirm` prompt exits with 0; other errors exit with 1.

Colour is used when stdout is a terminal. `NO_COLOR` or `CLICOLOR=0` turn it
off, `CLICOLOR_FORCE` turns it on.

## Using it from Python

- `taskfile.parser.parse(text, filepath)` returns an `Ast` of tasks, aliases,
  exports, includes and dotenv entries, raising `TaskfileSyntaxError` on bad
  input.
- `taskfile.resolver.resolve(path)` reads a Taskfile and its includes and
  returns a dict of qualified names to `ResolvedTask`.
- `taskfile.script.build_script(resolved, param_values)` returns the bash
  script for a task.
- `taskfile.executor.execute_task(name, task_args, registry, runner, dry_run, confirm)`
  runs a task and its dependencies with a `TaskRunner` such as
  `taskfile.runner.BashRunner`, raising an `ExecError` subclass on failure.

## What it does not do

The help screen lists `--discover`, `--completions` and `--update`, but the
`task` command does not accept them: it cannot generate tasks from existing
project files, generate shell completion scripts, or update itself.