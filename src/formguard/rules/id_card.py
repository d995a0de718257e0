"""
Strict national ID-card validation.

What this does
--------------
Decides whether a string is a well-formed resident identity number, either the
18-character modern form (with a check character) or the 15-digit legacy form
(without one). Checks run in a fixed order and the first failure wins:

  1) empty      -> valid if the field is optional, else EMPTY_INPUT
  2) format     -> positional pattern (region, date tokens, sequence, check char)
  3) region     -> first two digits must be a known province-level code
  4) checksum   -> 18-char only: Σ(a[i] × W[i]) mod 11 mapped through PARITY_MAP

The region check always runs before the checksum, so an unknown region is
reported as REGION_ERROR even when the check character happens to be right.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from .outcome import VALID, Outcome, Reason
from .patterns import ID_CARD_STRICT_RE

# Province-level administrative codes; only membership matters.
REGION_CODES: Mapping[str, str] = MappingProxyType({
    "11": "北京",
    "12": "天津",
    "13": "河北",
    "14": "山西",
    "15": "内蒙古",
    "21": "辽宁",
    "22": "吉林",
    "23": "黑龙江",
    "31": "上海",
    "32": "江苏",
    "33": "浙江",
    "34": "安徽",
    "35": "福建",
    "36": "江西",
    "37": "山东",
    "41": "河南",
    "42": "湖北",
    "43": "湖南",
    "44": "广东",
    "45": "广西",
    "46": "海南",
    "50": "重庆",
    "51": "四川",
    "52": "贵州",
    "53": "云南",
    "54": "西藏",
    "61": "陕西",
    "62": "甘肃",
    "63": "青海",
    "64": "宁夏",
    "65": "新疆",
    "71": "台湾",
    "81": "香港",
    "82": "澳门",
    "91": "国外",
})

# Positional weights for the first 17 digits.
WEIGHT_FACTORS = (7, 9, 10, 5, 8, 4, 2, 1, 6, 3, 7, 9, 10, 5, 8, 4, 2)

# Index is the weighted sum mod 11.
PARITY_MAP = ("1", "0", "X", "9", "8", "7", "6", "5", "4", "3", "2")


def region_name(code: str) -> Optional[str]:
    """Return the region name for a 2-digit code, or None if unknown."""
    return REGION_CODES.get(code)


def checksum_char(first17: str) -> str:
    """
    Compute the expected 18th character from the first 17 digits.

    Args:
        first17: Exactly 17 ASCII digits.

    Raises:
        ValueError: if the input is not 17 ASCII digits.
    """
    if len(first17) != 17 or not (first17.isascii() and first17.isdigit()):
        raise ValueError("checksum needs exactly 17 ASCII digits")
    total = 0
    for ch, weight in zip(first17, WEIGHT_FACTORS):
        total += (ord(ch) - 48) * weight
    return PARITY_MAP[total % 11]


def validate(value: Optional[str], allow_empty: bool = False) -> Outcome:
    """
    Validate a national ID number.

    Args:
        value:       Candidate string; None or "" counts as empty.
        allow_empty: Treat an empty value as "not required" (valid).

    Returns:
        VALID, or an invalid Outcome with EMPTY_INPUT / FORMAT_ERROR /
        REGION_ERROR / CHECKSUM_ERROR.
    """
    if value is None or value == "":
        return VALID if allow_empty else Outcome.invalid(Reason.EMPTY_INPUT)

    if not isinstance(value, str) or not ID_CARD_STRICT_RE.fullmatch(value):
        return Outcome.invalid(Reason.FORMAT_ERROR)

    if value[:2] not in REGION_CODES:
        return Outcome.invalid(Reason.REGION_ERROR)

    # Legacy 15-digit numbers carry no check character.
    if len(value) == 18 and checksum_char(value[:17]) != value[17].upper():
        return Outcome.invalid(Reason.CHECKSUM_ERROR)

    return VALID
