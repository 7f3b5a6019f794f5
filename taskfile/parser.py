"""Parser for the Taskfile format."""

from __future__ import annotations

from collections.abc import Sequence
from os import PathLike
from typing import Union

from .ast import Alias, Ast, DotEnv, Export, Include, Param, Task
from .errors import TaskfileSyntaxError

_PathArg = Union[str, "PathLike[str]"]

_ANNOTATION_ERROR = "@description/@confirm must be followed by a task definition"
_DEFAULT_CONFIRM = "Are you sure?"


def _split_lines(text: str) -> list[str]:
    """Split on newlines, dropping a trailing empty line and any trailing CR."""
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse(text: str, filepath: _PathArg) -> Ast:
    """Parse Taskfile source ``text``; ``filepath`` is used in error messages."""
    ast = Ast()
    lines = _split_lines(text)
    pending_description: str | None = None
    pending_confirm: str | None = None
    i = 0

    while i < len(lines):
        line_num = i + 1
        line = lines[i].strip()

        if not line or line.startswith("#"):
            i += 1
            continue

        has_pending = pending_description is not None or pending_confirm is not None

        if line.startswith("@description "):
            pending_description = line[len("@description "):].strip()
            i += 1
        elif line.startswith("@confirm"):
            message = line[len("@confirm"):].strip()
            pending_confirm = message or _DEFAULT_CONFIRM
            i += 1
        elif line.startswith("task "):
            task, i = _parse_task(lines, i, filepath)
            if pending_description is not None:
                task.description = pending_description
                pending_description = None
            if pending_confirm is not None:
                task.confirm = pending_confirm
                pending_confirm = None
            ast.tasks.append(task)
        else:
            statement = _statement_for(line)
            if statement is None:
                raise TaskfileSyntaxError(filepath, line_num, f"unexpected line: {line}")
            if has_pending:
                raise TaskfileSyntaxError(filepath, line_num, _ANNOTATION_ERROR)
            kind, rest = statement
            if kind == "export":
                key, value = _parse_assignment(rest, "export", "export key", filepath, line_num)
                ast.exports.append(Export(key=key, value=value))
            elif kind == "alias":
                name, value = _parse_assignment(rest, "alias", "alias name", filepath, line_num)
                ast.aliases.append(Alias(name=name, value=value))
            elif kind == "include":
                path = _parse_path(rest, "include", filepath, line_num)
                ast.includes.append(Include(path=path, line=line_num))
            else:
                path = _parse_path(rest, "dotenv", filepath, line_num)
                ast.dotenv.append(DotEnv(path=path, line=line_num))
            i += 1

    return ast


def _statement_for(line: str) -> tuple[str, str] | None:
    for keyword in ("export", "alias", "include", "dotenv"):
        prefix = keyword + " "
        if line.startswith(prefix):
            return keyword, line[len(prefix):].strip()
    return None


def _parse_assignment(
    rest: str, keyword: str, what: str, filepath: _PathArg, line_num: int
) -> tuple[str, str]:
    eq_pos = rest.find("=")
    if eq_pos < 0:
        raise TaskfileSyntaxError(
            filepath, line_num, f"expected '=' in {keyword} statement"
        )
    name = rest[:eq_pos].strip()
    value = unquote(rest[eq_pos + 1:].strip())
    if not name:
        raise TaskfileSyntaxError(filepath, line_num, f"empty {what}")
    return name, value


def _parse_path(rest: str, keyword: str, filepath: _PathArg, line_num: int) -> str:
    path = unquote(rest)
    if not path:
        raise TaskfileSyntaxError(filepath, line_num, f"empty {keyword} path")
    return path


def _is_name_char(ch: str) -> bool:
    return ch.isalnum() or ch in "-_"


def _parse_task(lines: Sequence[str], start: int, filepath: _PathArg) -> tuple[Task, int]:
    line_num = start + 1
    rest = lines[start].strip()[len("task "):]

    name_end = next(
        (pos for pos, ch in enumerate(rest) if not _is_name_char(ch)), len(rest)
    )
    name = rest[:name_end]
    if not name:
        raise TaskfileSyntaxError(filepath, line_num, "expected task name")

    task = Task(name=name, line=line_num)
    cursor = rest[name_end:].lstrip()
    found_open_brace = False

    while cursor:
        if cursor.startswith("{"):
            found_open_brace = True
            break
        if cursor.startswith("["):
            task.params, cursor = _parse_params(cursor, filepath, line_num)
        elif cursor.startswith("depends_parallel=["):
            task.parallel_dependencies, cursor = _parse_depends(
                cursor, "depends_parallel=[", filepath, line_num
            )
        elif cursor.startswith("depends=["):
            task.dependencies, cursor = _parse_depends(
                cursor, "depends=[", filepath, line_num
            )
        else:
            raise TaskfileSyntaxError(
                filepath, line_num, f"unexpected token in task header: {cursor}"
            )
        cursor = cursor.lstrip()

    i = start + 1
    if not found_open_brace:
        while i < len(lines):
            stripped = lines[i].strip()
            if not stripped or stripped.startswith("#"):
                i += 1
                continue
            if stripped.startswith("{"):
                found_open_brace = True
                i += 1
                break
            raise TaskfileSyntaxError(filepath, i + 1, "expected '{' to open task body")

    if not found_open_brace:
        raise TaskfileSyntaxError(filepath, line_num, f"expected '{{' for task '{name}'")

    depth = 1
    body_lines: list[str] = []
    while i < len(lines):
        current = lines[i]
        depth += count_braces(current)
        i += 1
        if depth == 0:
            if current.strip() != "}":
                pos = current.rfind("}")
                if pos >= 0:
                    before = current[:pos]
                    if before.strip():
                        body_lines.append(before)
            break
        body_lines.append(current)

    if depth != 0:
        raise TaskfileSyntaxError(filepath, line_num, f"unclosed '{{' for task '{name}'")

    task.body = dedent_body(body_lines)
    return task, i


def _parse_params(text: str, filepath: _PathArg, line_num: int) -> tuple[list[Param], str]:
    end = text.find("]")
    if end < 0:
        raise TaskfileSyntaxError(filepath, line_num, "unterminated parameter list")

    inner = text[1:end]
    params: list[Param] = []
    pos = 0
    length = len(inner)

    while pos < length:
        while pos < length and inner[pos].isspace():
            pos += 1
        if pos >= length:
            break

        name_start = pos
        while pos < length and inner[pos] != "=" and not inner[pos].isspace():
            pos += 1
        name = inner[name_start:pos]
        if not name:
            break

        if not is_valid_identifier(name):
            raise TaskfileSyntaxError(
                filepath,
                line_num,
                f"invalid parameter name '{name}' — must be a valid identifier "
                "(letters, digits, underscores)",
            )

        if pos < length and inner[pos] == "=":
            pos += 1
            if pos < length and inner[pos] == '"':
                pos += 1
                chars: list[str] = []
                escaped = False
                while pos < length:
                    ch = inner[pos]
                    pos += 1
                    if escaped:
                        chars.append(ch)
                        escaped = False
                    elif ch == "\\":
                        escaped = True
                    elif ch == '"':
                        break
                    else:
                        chars.append(ch)
                default = "".join(chars)
            else:
                value_start = pos
                while pos < length and not inner[pos].isspace():
                    pos += 1
                default = inner[value_start:pos]
            params.append(Param(name=name, default=default))
        else:
            params.append(Param(name=name))

    return params, text[end + 1:]


def _parse_depends(
    text: str, prefix: str, filepath: _PathArg, line_num: int
) -> tuple[list[str], str]:
    rest = text[len(prefix):]
    end = rest.find("]")
    if end < 0:
        raise TaskfileSyntaxError(filepath, line_num, "unterminated depends list")
    deps = [part.strip() for part in rest[:end].split(",") if part.strip()]
    return deps, rest[end + 1:]


def unquote(s: str) -> str:
    """Strip surrounding whitespace and one pair of matching single or double quotes."""
    s = s.strip()
    if len(s) >= 2 and s[0] == s[-1] and s[0] in "\"'":
        return s[1:-1]
    return s


def count_braces(line: str) -> int:
    """Return the net brace depth change of ``line``.

    Braces inside single- or double-quoted strings and after a ``#`` comment
    are not counted.
    """
    delta = 0
    in_single = False
    in_double = False
    prev = "\0"
    for ch in line:
        if not in_single and not in_double and ch == "#":
            break
        if ch == "'" and not in_double and prev != "\\":
            in_single = not in_single
        elif ch == '"' and not in_single and prev != "\\":
            in_double = not in_double
        elif not in_single and not in_double:
            if ch == "{":
                delta += 1
            elif ch == "}":
                delta -= 1
        prev = ch
    return delta


def is_valid_identifier(name: str) -> bool:
    """True for ASCII identifiers: a letter or underscore, then letters, digits, underscores."""
    if not name or not name.isascii():
        return False
    first = name[0]
    if not (first.isalpha() or first == "_"):
        return False
    return all(ch.isalnum() or ch == "_" for ch in name)


def dedent_body(lines: Sequence[str]) -> str:
    """Remove the common leading indentation of non-blank lines and join them."""
    if not lines:
        return ""
    min_indent = min(
        (len(line) - len(line.lstrip()) for line in lines if line.strip()),
        default=0,
    )
    return "\n".join(
        line[min_indent:] if len(line) >= min_indent else line.strip()
        for line in lines
    )