from __future__ import annotations

from typing import Optional

TAB_WIDTH = 4
_CONTEXT_PATH = "context-path"


def indent_width(line: str) -> int:
    width = 0
    for ch in line:
        if ch == " ":
            width += 1
        elif ch == "\t":
            width += TAB_WIDTH
        else:
            break
    return width


def strip_value(trimmed: str) -> Optional[str]:
    """
    "port: 9090"  -> "9090"
    "path: '/x'"  -> "/x"
    "port:"       -> None
    """
    idx = trimmed.find(":")
    if idx == -1 or idx == len(trimmed) - 1:
        return None
    value = trimmed[idx + 1:].strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        value = value[1:-1]
    return value


def extract_yaml_property(content: str, dotted_key: str) -> Optional[str]:
    """
    Pull one dotted key out of YAML-like text without building a document.

    Nesting is inferred from indentation only: each section of the key
    ("server", "servlet" for server.servlet.context-path) is tracked with
    the indent it was opened at. A keyed line at or left of that indent
    closes the section and every section below it.

    A "context-path" leaf is also accepted directly under the first
    section, so server.context-path and server.servlet.context-path are
    both found by the same lookup.
    """
    parts = dotted_key.split(".")
    sections, leaf = parts[:-1], parts[-1]
    if not sections:
        return None

    opened_at = [-1] * len(sections)
    inside = [False] * len(sections)

    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue

        indent = indent_width(line)

        for level, key in enumerate(sections):
            if trimmed == key + ":":
                inside[level] = True
                opened_at[level] = indent
                for deeper in range(level + 1, len(sections)):
                    inside[deeper] = False
                    opened_at[deeper] = -1
                break
            if inside[level] and indent <= opened_at[level] and ":" in trimmed:
                for closed in range(level, len(sections)):
                    inside[closed] = False
                    opened_at[closed] = -1
                break

        if all(inside) and trimmed.startswith(leaf + ":"):
            value = strip_value(trimmed)
            if value is not None:
                return value

        if leaf == _CONTEXT_PATH and inside[0] and trimmed.startswith(_CONTEXT_PATH + ":"):
            value = strip_value(trimmed)
            if value is not None:
                return value

    return None
