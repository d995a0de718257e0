"""
Compiled field patterns.

All patterns are meant for `fullmatch` (so a trailing newline never sneaks through
the way it would with `$`) and are compiled with `re.ASCII` so `\\d`/`\\w` never
accept non-Latin digits or letters.
"""

from __future__ import annotations

import re

# Mobile (1[3-9] + 9 digits) or landline with area code (0xx[x]-xxxxxxx[x]).
PHONE_RE = re.compile(r"(0\d{2,3}-\d{7,8})|(1[3-9]\d{9})", re.ASCII)

# Word runs are joined by exactly one separator; the last domain label is 2-3
# word characters.
EMAIL_RE = re.compile(r"\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*\.\w{2,3}", re.ASCII)

# What browser `Number()` accepts, after trimming: decimal/exponent forms,
# signed Infinity, and unsigned hex/binary/octal literals.
NUMERIC_RE = re.compile(
    r"[+-]?(?:\d+(?:\.\d*)?(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|Infinity)",
    re.ASCII,
)
RADIX_RE = re.compile(r"0[xX][0-9a-fA-F]+|0[bB][01]+|0[oO][0-7]+", re.ASCII)

# At most 8 integer digits and 5 decimal places; no leading zeros, no "-0".
DECIMAL_RE = re.compile(r"-?[1-9]\d{0,7}(\.\d{1,5})?|0(\.\d{1,5})?", re.ASCII)

NON_NEGATIVE_INT_RE = re.compile(r"0|[1-9][0-9]*", re.ASCII)

PASSWORD_RE = re.compile(r".{6,20}")

PHONE_CODE_RE = re.compile(r"\d{6}", re.ASCII)

IMAGE_CODE_RE = re.compile(r".{4}")

# Shape-only ID check: 15 digits, or 17 digits plus a digit/X.
ID_CARD_EASY_RE = re.compile(r"\d{15}|\d{17}[\dXx]", re.ASCII)

_MONTH = r"(0[1-9]|1[0-2])"
_DAY = r"(0[1-9]|[12]\d|3[01])"

# 18 chars: region(6) century(2) yy mm dd seq(3) check; 15 chars: region(6) yy mm dd seq(3).
ID_CARD_STRICT_RE = re.compile(
    rf"\d{{6}}(18|19|20)\d{{2}}{_MONTH}{_DAY}\d{{3}}[\dX]"
    rf"|\d{{6}}\d{{2}}{_MONTH}{_DAY}\d{{3}}",
    re.ASCII | re.IGNORECASE,
)
