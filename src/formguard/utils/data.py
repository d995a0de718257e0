"""
Small data helpers used around form handling: nested lookups, partial updates,
dedup/chunking of record lists and cleaning of numeric input.
"""

from __future__ import annotations

import datetime as _dt
import math
import re
from typing import Any, Callable, List, Mapping, MutableMapping, Sequence, TypeVar

from ..rules.validators import to_number

T = TypeVar("T")


def check_type(target: Any) -> str:
    """
    Name the JSON-ish kind of a value.

    Returns one of: string, number, boolean, array, object, function, null,
    regexp, date, other.
    """
    if target is None:
        return "null"
    if isinstance(target, bool):
        return "boolean"
    if isinstance(target, (int, float)):
        return "number"
    if isinstance(target, str):
        return "string"
    if isinstance(target, (list, tuple)):
        return "array"
    if isinstance(target, Mapping):
        return "object"
    if isinstance(target, re.Pattern):
        return "regexp"
    if isinstance(target, (_dt.date, _dt.datetime)):
        return "date"
    if callable(target):
        return "function"
    return "other"


def modify_data(target: MutableMapping[str, Any], value: Mapping[str, Any]) -> None:
    """
    Copy values from `value` into `target`, but only for keys `target` already has.

    Nested dicts are updated key by key and never replaced: a non-dict value
    aimed at a nested dict leaves that dict untouched.
    """
    for key, new in value.items():
        if key not in target:
            continue
        if check_type(target[key]) == "object":
            if isinstance(new, Mapping):
                modify_data(target[key], new)
        else:
            target[key] = new


def _step(target: Any, prop: str) -> Any:
    if isinstance(target, Mapping):
        return target.get(prop)
    if isinstance(target, (list, tuple)) and prop.isascii() and prop.isdigit():
        idx = int(prop)
        return target[idx] if idx < len(target) else None
    return None


def get_deep_level_value(target: Any, key: str) -> Any:
    """
    Resolve a dotted path such as ``"list.0.value"``.

    Traversal stops at the first value that is not a dict or list and that
    value is returned, so ``"a.b.c"`` on ``{"a": 1}`` yields 1. Missing keys
    yield None.
    """
    result = None
    for prop in key.split("."):
        result = _step(target, prop)
        if check_type(result) not in ("object", "array"):
            break
        target = result
    return result


def find_index(items: Sequence[T], compare: Callable[[T, int], bool]) -> int:
    for i, item in enumerate(items):
        if compare(item, i):
            return i
    return -1


def filter_repeat(items: Sequence[T], compare: Callable[[T, T], bool]) -> List[T]:
    """Order-preserving dedup where `compare(a, b)` decides equality."""
    return [
        item for i, item in enumerate(items)
        if find_index(items, lambda other, _: compare(other, item)) == i
    ]


def chunk(items: Sequence[T], size: int) -> List[List[T]]:
    """Split a flat sequence into lists of `size` (the last may be shorter)."""
    if size < 1:
        raise ValueError("chunk size must be >= 1")
    if not items:
        return [[]]
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def json_to_form_data(params: Mapping[str, Any]) -> str:
    """``{"name": "a", "id": 1}`` -> ``"name=a&id=1"`` (values are not escaped)."""
    return "&".join(f"{k}={v}" for k, v in params.items())


def input_only_number(value: Any, decimal: bool = False, negative: bool = False) -> str:
    """
    Strip everything that cannot be part of a number from a live input value.

    Only the first decimal point survives, and a leading minus is kept only when
    `negative` is set.
    """
    result = str(value).strip()
    if not result:
        return ""
    minus = "-" if negative and result[0] == "-" else ""
    if decimal:
        result = re.sub(r"[^0-9.]+", "", result)
        parts = result.split(".")
        if len(parts) > 1:
            result = parts[0] + "." + parts[1]
    else:
        result = re.sub(r"[^0-9]+", "", result)
    return minus + result


_UNITS = ("", "万", "亿", "万亿")


def formatter_number(num: Any) -> str:
    """
    Abbreviate large counts with 10^4 units: 12345 -> "1.23万".

    Values below 10000 are returned unchanged (as text). Blank input counts
    as 0, like browser number coercion.

    Raises:
        ValueError: if `num` is not a finite number.
    """
    if not num:
        return "0"
    value = to_number(num)
    if value is None or math.isinf(value):
        raise ValueError(f"not a finite number: {num!r}")
    k = 10000
    if value < k:
        return str(int(value)) if value.is_integer() else str(value)
    i = min(int(math.floor(math.log(value) / math.log(k))), len(_UNITS) - 1)
    return f"{value / k ** i:.2f}{_UNITS[i]}"


def plain_number(x: float) -> Any:
    """Drop a float's trailing ``.0`` so 5.0 renders as 5 in messages."""
    return int(x) if float(x).is_integer() else x
