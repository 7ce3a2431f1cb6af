"""Alias-tolerant lookups for loosely shaped provider records."""
from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Optional

_MISSING = object()


def lookup(record: Any, path: str) -> Any:
    """Follow a dotted ``path`` through nested mappings and sequences.

    Numeric path segments index into lists, so ``"weather.0.description"``
    reads the description of the first weather item.  Returns ``None`` when
    any step is missing.
    """
    current = record
    for part in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(part, _MISSING)
        elif isinstance(current, (list, tuple)) and part.isdigit():
            index = int(part)
            current = current[index] if index < len(current) else _MISSING
        else:
            return None
        if current is _MISSING:
            return None
    return current


def first_present(record: Any, candidates: Iterable[str], default: Any = None) -> Any:
    """Return the value of the first candidate path that is present and not blank."""
    for path in candidates:
        value = lookup(record, path)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return default


def first_number(record: Any, candidates: Iterable[str], default: Optional[float] = None) -> Optional[float]:
    """Like :func:`first_present` but skips values that are not numeric."""
    for path in candidates:
        value = safe_float(lookup(record, path))
        if value is not None:
            return value
    return default


def safe_float(value: Optional[object]) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


__all__ = ["first_number", "first_present", "lookup", "safe_float"]
