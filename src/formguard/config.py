from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import Dict, Literal, Optional

import yaml
from pydantic import BaseModel, Field

from .rules.outcome import Reason

# ---- Rule names understood by the registry ----
RuleName = Literal[
    "phone", "email", "password", "phone_code", "image_code",
    "number", "positive_number", "number_min", "number_max",
    "id_card", "id_card_strict",
]

# ---- Message catalog (what the user reads for each failure) ----
DEFAULT_MESSAGES: Dict[Reason, str] = {
    Reason.EMPTY_INPUT: "This field is required",
    Reason.FORMAT_ERROR: "Invalid format",
    Reason.REGION_ERROR: "Invalid region code",
    Reason.CHECKSUM_ERROR: "Invalid check digit",
    Reason.NOT_A_NUMBER: "Not a number",
    Reason.NOT_INTEGER: "Enter a non-negative integer",
    Reason.NEGATIVE: "Negative numbers are not allowed",
    Reason.BELOW_MIN: "Enter a number no less than {min}",
    Reason.ABOVE_MAX: "Enter a number no greater than {max}",
}

DEFAULT_RULE_MESSAGES: Dict[str, Dict[Reason, str]] = {
    "phone": {
        Reason.EMPTY_INPUT: "Please enter a phone number",
        Reason.FORMAT_ERROR: "Invalid phone number",
    },
    "email": {
        Reason.EMPTY_INPUT: "Please enter an email address",
        Reason.FORMAT_ERROR: "Invalid email address",
    },
    "number": {Reason.EMPTY_INPUT: "Please enter a number", Reason.FORMAT_ERROR: "Invalid number"},
    "positive_number": {Reason.EMPTY_INPUT: "Please enter a number"},
    "number_min": {Reason.FORMAT_ERROR: "Invalid number"},
    "number_max": {Reason.FORMAT_ERROR: "Invalid number"},
    "id_card": {
        Reason.EMPTY_INPUT: "Please enter an ID number",
        Reason.FORMAT_ERROR: "Invalid ID number",
    },
    "id_card_strict": {
        Reason.EMPTY_INPUT: "Please enter an ID number",
        Reason.FORMAT_ERROR: "Invalid ID number format",
        Reason.REGION_ERROR: "Invalid ID region code",
        Reason.CHECKSUM_ERROR: "Invalid ID check digit",
    },
    "password": {Reason.FORMAT_ERROR: "Password must be 6 to 20 characters"},
    "phone_code": {Reason.FORMAT_ERROR: "Enter the 6-digit code"},
    "image_code": {Reason.FORMAT_ERROR: "Enter the 4-character code"},
}


class Messages(BaseModel):
    defaults: Dict[Reason, str] = Field(default_factory=lambda: dict(DEFAULT_MESSAGES))
    rules: Dict[str, Dict[Reason, str]] = Field(
        default_factory=lambda: {k: dict(v) for k, v in DEFAULT_RULE_MESSAGES.items()}
    )


# ---- Per-field rule (toggle and tune without code changes) ----
class FieldRule(BaseModel):
    rule: RuleName
    allow_empty: bool = False
    min: float = 1
    max: float = 100
    tip: str = ""
    message: Optional[str] = None  # overrides every catalog entry for this field


# ---- Root config ----
class FormConfig(BaseModel):
    fields: Dict[str, FieldRule] = Field(default_factory=dict)
    messages: Messages = Field(default_factory=Messages)


# ---- Loaders ----
def load_config(path: Optional[Path]) -> FormConfig:
    if not path:
        return FormConfig()
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    return FormConfig(**data)


def load_ruleset(name: str) -> FormConfig:
    """Load a rule set shipped under `formguard/rulesets/<name>.yaml`."""
    text = resources.files("formguard.rulesets").joinpath(f"{name}.yaml").read_text(encoding="utf-8")
    return FormConfig(**(yaml.safe_load(text) or {}))
