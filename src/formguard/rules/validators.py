"""
Field validators used by forms, the rule-set engine and the CLI.

Why this file exists
--------------------
Every form in an application ends up re-checking the same handful of fields
(phone, email, amounts, ID numbers, passwords, SMS codes). These functions give
one deterministic answer per value, expressed as an `Outcome` instead of a
callback, so they can be reused from any framework.

Design principles
-----------------
- **Pure functions**: no logging, no I/O, no shared mutable state.
- **Total**: any input (None, numbers, odd strings) yields an Outcome; nothing raises.
- **Early return on empty**: an optional field that is empty is valid and no
  further checks run.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict, Optional, Tuple

from ..errors import UnknownRuleError
from . import id_card
from .outcome import VALID, Outcome, Reason
from .patterns import (
    DECIMAL_RE,
    EMAIL_RE,
    ID_CARD_EASY_RE,
    IMAGE_CODE_RE,
    NON_NEGATIVE_INT_RE,
    NUMERIC_RE,
    PASSWORD_RE,
    PHONE_CODE_RE,
    PHONE_RE,
    RADIX_RE,
)


# ---- Coercion helpers ------------------------------------------------------------------

def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def _is_zero(value: Any) -> bool:
    # Only a real numeric zero short-circuits; the string "0" goes through the regex.
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0


def _text(value: Any) -> str:
    """Render a value the way a form input would hold it."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_number(value: Any) -> Optional[float]:
    """
    Loosely coerce a form value to a number.

    Follows browser `Number()`: blank strings (and None) count as 0, only the
    exact spelling `Infinity` is infinite, and hex/binary/octal literals are
    read by their prefix. Returns None when the value is not numeric at all
    (including NaN).
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return None if math.isnan(value) else float(value)
    if value is None:
        return 0.0
    s = str(value).strip()
    if not s:
        return 0.0
    if RADIX_RE.fullmatch(s):
        return float(int(s, 0))
    if NUMERIC_RE.fullmatch(s):
        return float(s)
    return None


def _match(pattern, value: Any) -> Outcome:
    if _is_empty(value):
        return Outcome.invalid(Reason.EMPTY_INPUT)
    if not pattern.fullmatch(_text(value)):
        return Outcome.invalid(Reason.FORMAT_ERROR)
    return VALID


# ---- Validators ------------------------------------------------------------------------

def validate_phone(value: Any) -> Outcome:
    """Mobile number (11 digits starting 13-19) or landline with area code."""
    return _match(PHONE_RE, value)


def validate_email(value: Any) -> Outcome:
    return _match(EMAIL_RE, value)


def validate_password(value: Any) -> Outcome:
    """6 to 20 characters of anything (no newlines)."""
    return _match(PASSWORD_RE, value)


def validate_phone_code(value: Any) -> Outcome:
    """6-digit SMS verification code."""
    return _match(PHONE_CODE_RE, value)


def validate_image_code(value: Any) -> Outcome:
    """4-character image captcha."""
    return _match(IMAGE_CODE_RE, value)


def validate_positive_number(value: Any, allow_empty: bool = False) -> Outcome:
    """
    Non-negative integer check.

    Args:
        value:       Form value (string or number).
        allow_empty: Accept None/"" as "not filled in".

    Returns:
        VALID, or EMPTY_INPUT / NOT_A_NUMBER / NOT_INTEGER.
    """
    if _is_zero(value):
        return VALID
    if _is_empty(value):
        return VALID if allow_empty else Outcome.invalid(Reason.EMPTY_INPUT)
    if to_number(value) is None:
        return Outcome.invalid(Reason.NOT_A_NUMBER)
    if not NON_NEGATIVE_INT_RE.fullmatch(_text(value)):
        return Outcome.invalid(Reason.NOT_INTEGER)
    return VALID


def validate_number(value: Any, allow_empty: bool = False) -> Outcome:
    """
    Decimal check: at most 8 integer digits and 5 decimal places.

    Returns:
        VALID, or EMPTY_INPUT / FORMAT_ERROR.
    """
    if _is_zero(value):
        return VALID
    if _is_empty(value):
        return VALID if allow_empty else Outcome.invalid(Reason.EMPTY_INPUT)
    if to_number(value) is None or not DECIMAL_RE.fullmatch(_text(value)):
        return Outcome.invalid(Reason.FORMAT_ERROR)
    return VALID


def validate_number_by_min(value: Any, minimum: float = 1) -> Outcome:
    """Reject negatives and values below `minimum`, then apply `validate_number`."""
    n = to_number(value)
    if n is not None and n < 0:
        return Outcome.invalid(Reason.NEGATIVE)
    if n is not None and n < minimum:
        return Outcome.invalid(Reason.BELOW_MIN)
    return validate_number(value)


def validate_number_by_max(value: Any, maximum: float = 100, tip: str = "") -> Outcome:
    """
    Reject negatives and values above `maximum`, then apply `validate_number`.

    `tip`, when given, is carried as the Outcome detail for ABOVE_MAX so the
    caller's own wording wins over the message catalog.
    """
    n = to_number(value)
    if n is not None and n < 0:
        return Outcome.invalid(Reason.NEGATIVE)
    if n is not None and n > maximum:
        return Outcome.invalid(Reason.ABOVE_MAX, detail=tip)
    return validate_number(value)


def validate_id_card_easy(value: Any, allow_empty: bool = False) -> Outcome:
    """Shape-only ID check (15 digits, 18 digits, or 17 digits + X)."""
    if _is_empty(value):
        return VALID if allow_empty else Outcome.invalid(Reason.EMPTY_INPUT)
    if not ID_CARD_EASY_RE.fullmatch(_text(value)):
        return Outcome.invalid(Reason.FORMAT_ERROR)
    return VALID


def validate_id_card_strict(value: Any, allow_empty: bool = False) -> Outcome:
    """Format, region and checksum check; see `formguard.rules.id_card`."""
    if not _is_empty(value) and not isinstance(value, str):
        value = _text(value)
    return id_card.validate(value, allow_empty=allow_empty)


# ---- Registry --------------------------------------------------------------------------

# Map rule names (as used in YAML rule sets and on the CLI) to callables.
RULES: Dict[str, Callable[..., Outcome]] = {
    "phone": validate_phone,
    "email": validate_email,
    "password": validate_password,
    "phone_code": validate_phone_code,
    "image_code": validate_image_code,
    "number": validate_number,
    "positive_number": validate_positive_number,
    "number_min": validate_number_by_min,
    "number_max": validate_number_by_max,
    "id_card": validate_id_card_easy,
    "id_card_strict": validate_id_card_strict,
}

# Keyword options each rule understands; everything else is dropped by `run_rule`.
_OPTIONS: Dict[str, Tuple[str, ...]] = {
    "number": ("allow_empty",),
    "positive_number": ("allow_empty",),
    "number_min": ("minimum",),
    "number_max": ("maximum", "tip"),
    "id_card": ("allow_empty",),
    "id_card_strict": ("allow_empty",),
}


def get_rule(name: str) -> Callable[..., Outcome]:
    try:
        return RULES[name]
    except KeyError:
        raise UnknownRuleError(name) from None


def run_rule(name: str, value: Any, **options: Any) -> Outcome:
    """
    Run a registered rule with whichever options it accepts.

    Rules without their own empty handling still honour `allow_empty=True`:
    an empty value is then valid without running the rule.
    """
    fn = get_rule(name)
    accepted = _OPTIONS.get(name, ())
    if options.get("allow_empty") and "allow_empty" not in accepted and _is_empty(value):
        return VALID
    kwargs = {k: v for k, v in options.items() if k in accepted}
    return fn(value, **kwargs)
