from __future__ import annotations


class FormguardError(Exception):
    """Base class for errors raised by formguard (never for a failed validation)."""


class UnknownRuleError(FormguardError, KeyError):
    """A rule name that is not present in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown rule: {self.name!r}"


class RecordFormatError(FormguardError):
    """A records file that is neither JSON, JSON Lines nor a YAML list."""
