"""Assembly of the bash script that runs a task."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Optional

from .ast import Alias, DotEnv, Export
from .resolver import ResolvedTask

SHELL_OPTIONS = "set -euo pipefail"


def build_script(
    resolved: ResolvedTask, param_values: Optional[Mapping[str, str]] = None
) -> str:
    """Build the full script: shell options, dotenv, exports, aliases, params, body."""
    sections = [
        SHELL_OPTIONS,
        _dotenv_section(resolved.dotenv),
        _export_section(resolved.exports),
        _alias_section(resolved.aliases),
        _param_section(param_values or {}),
        resolved.task.body,
    ]
    return "\n".join(section for section in sections if section)


def _dotenv_section(dotenv_files: Iterable[DotEnv]) -> str:
    lines = []
    for entry in dotenv_files:
        quoted = shell_quote(entry.path)
        lines.append(f"if [ -f {quoted} ]; then set -a; source {quoted}; set +a; fi")
    return "\n".join(lines)


def _export_section(exports: Iterable[Export]) -> str:
    return "\n".join(f"export {e.key}={shell_quote(e.value)}" for e in exports)


def _alias_section(aliases: Iterable[Alias]) -> str:
    return "\n".join(f'{a.name}() {{ {a.value} "$@"; }}' for a in aliases)


def _param_section(param_values: Mapping[str, str]) -> str:
    return "\n".join(
        f"{name}={shell_quote(value)}" for name, value in sorted(param_values.items())
    )


def shell_quote(s: str) -> str:
    """Wrap ``s`` in double quotes, escaping backslash, quote, dollar and backtick."""
    escaped = (
        s.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("$", "\\$")
        .replace("`", "\\`")
    )
    return f'"{escaped}"'