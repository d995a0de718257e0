"""
Result model shared by every validator.

Validators never raise to report a bad value. They return an `Outcome`, which is
either valid or carries exactly one `Reason`. Turning a reason into user-facing
text is the caller's job (see `formguard.engine.adapters`).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Reason(str, Enum):
    EMPTY_INPUT = "EMPTY_INPUT"
    FORMAT_ERROR = "FORMAT_ERROR"
    REGION_ERROR = "REGION_ERROR"
    CHECKSUM_ERROR = "CHECKSUM_ERROR"
    NOT_A_NUMBER = "NOT_A_NUMBER"
    NOT_INTEGER = "NOT_INTEGER"
    NEGATIVE = "NEGATIVE"
    BELOW_MIN = "BELOW_MIN"
    ABOVE_MAX = "ABOVE_MAX"


@dataclass(frozen=True)
class Outcome:
    """
    Tagged pass/fail value.

    Attributes:
        ok:     True when the value passed every check.
        reason: Why it failed; always None when `ok` is True.
        detail: Optional caller-supplied message that overrides catalog text
                (e.g. the `tip` of an upper-bound check).
    """
    ok: bool
    reason: Optional[Reason] = None
    detail: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def valid(cls) -> "Outcome":
        return VALID

    @classmethod
    def invalid(cls, reason: Reason, detail: Optional[str] = None) -> "Outcome":
        return cls(ok=False, reason=reason, detail=detail or None)


VALID = Outcome(ok=True)
