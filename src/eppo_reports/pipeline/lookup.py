from __future__ import annotations

import math
import re
from typing import Any, Iterable, Mapping, Optional, Sequence

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def resolve_path(record: Any, path: str) -> Any:
    """Follow a plain key or a dotted path ("metadata.team_id") into nested mappings.

    Returns None as soon as a segment is missing or an intermediate value is
    not a mapping.
    """

    current = record
    for part in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


def first_present(record: Any, paths: Sequence[str]) -> Any:
    """Return the first value among `paths` that is set.

    A value counts as set when it is neither None nor an empty string.
    Returns None when no path resolves.
    """

    for path in paths:
        value = resolve_path(record, path)
        if value is None or value == "":
            continue
        return value
    return None


def distinct_values(records: Iterable[Any], paths: Sequence[str]) -> list:
    """Unique resolved values in first-seen order."""

    seen: list = []
    for record in records:
        value = first_present(record, paths)
        if value is None or value in seen:
            continue
        seen.append(value)
    return seen


def coerce_int(value: Any) -> Optional[int]:
    """Leading-integer coercion.

    Strings parse their leading sign and digits (" 42abc" -> 42), finite
    floats truncate, ints pass through. Everything else, bools included,
    yields None. None is the "not a number" marker and must never be treated
    as equal to another None.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match is None:
            return None
        return int(match.group(1))
    return None
