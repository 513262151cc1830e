"""
JSON Lines reading shared by the lexicon and history loaders.

Each non-blank line must decode to a JSON object. The whole file is
rejected on the first malformed line.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

from .errors import LoadError, ParseError


def read_json_lines(path: Path) -> Iterator[tuple[int, dict]]:
    """
    Yield (line_number, record) for every non-blank line of a file.

    Args:
        path: JSON Lines file

    Raises:
        LoadError: If the file cannot be opened
        ParseError: If a line is not UTF-8 text holding a JSON object
    """
    try:
        f = open(path, "rb")
    except FileNotFoundError as e:
        raise LoadError(f"Could not open {path}: file does not exist") from e
    except OSError as e:
        raise LoadError(f"Could not open {path}: {e}") from e

    with f:
        for line_number, raw in enumerate(f, 1):
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ParseError(path, line_number, f"invalid UTF-8 ({e.reason})") from e
            if not line.strip():
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as e:
                raise ParseError(path, line_number, f"invalid JSON ({e.msg})") from e
            if not isinstance(record, dict):
                raise ParseError(path, line_number, "record is not a JSON object")
            yield line_number, record


def require_field(record: dict, key: str, kind: type | tuple[type, ...]) -> object:
    """
    Fetch a typed field from a decoded record.

    bool is rejected where int or float is expected, since JSON true/false
    would otherwise pass as 1/0.

    Raises:
        KeyError: If the field is missing
        TypeError: If the field has the wrong type
    """
    value = record[key]
    kinds = kind if isinstance(kind, tuple) else (kind,)
    if isinstance(value, bool) and bool not in kinds:
        raise TypeError(f"field '{key}' must not be a boolean")
    if not isinstance(value, kinds):
        names = " or ".join(k.__name__ for k in kinds)
        raise TypeError(f"field '{key}' must be {names}, got {type(value).__name__}")
    return value
