"""
Bridge between pure `Outcome` values and form frameworks.

Many form libraries call a validator as ``fn(rule, value, callback)`` and expect
``callback()`` on success or ``callback(error)`` on failure. Validators in this
package return an `Outcome` instead; this module resolves the user-facing text
for a failure and adapts to the callback convention.

Message resolution order (first hit wins):
  1) `Outcome.detail`        -> caller-supplied text carried by the validator
  2) field override          -> `FieldRule.message` / `field_message=`
  3) per-rule catalog entry  -> `Messages.rules[rule][reason]`
  4) generic catalog entry   -> `Messages.defaults[reason]`
  5) built-in default        -> `DEFAULT_MESSAGES[reason]`
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from ..config import DEFAULT_MESSAGES, Messages
from ..rules.outcome import Outcome, Reason
from ..rules.validators import get_rule, run_rule


class FieldValidationError(ValueError):
    """Raised (or passed to a callback) when a field value is invalid."""

    def __init__(self, message: str, reason: Reason) -> None:
        super().__init__(message)
        self.message = message
        self.reason = reason


class MessageCatalog:
    """Resolve failure text for a (rule, reason) pair."""

    def __init__(self, messages: Optional[Messages] = None) -> None:
        self.messages = messages or Messages()

    def resolve(
        self,
        rule: str,
        outcome: Outcome,
        field_message: Optional[str] = None,
        **fmt: Any,
    ) -> Optional[str]:
        """
        Return the message for an invalid outcome, or None if it is valid.

        `fmt` fills placeholders such as ``{min}``/``{max}`` in catalog text.
        """
        if outcome.ok:
            return None
        if outcome.detail:
            return outcome.detail
        if field_message:
            return field_message
        reason = outcome.reason
        text = (
            self.messages.rules.get(rule, {}).get(reason)
            or self.messages.defaults.get(reason)
            or DEFAULT_MESSAGES[reason]
        )
        try:
            return text.format(**fmt)
        except (KeyError, IndexError, ValueError):
            return text


def raise_for_outcome(
    outcome: Outcome,
    rule: str,
    catalog: Optional[MessageCatalog] = None,
    field_message: Optional[str] = None,
    **fmt: Any,
) -> None:
    """Raise `FieldValidationError` if `outcome` is invalid; do nothing otherwise."""
    if outcome.ok:
        return
    catalog = catalog or MessageCatalog()
    message = catalog.resolve(rule, outcome, field_message, **fmt)
    raise FieldValidationError(message, outcome.reason)


def as_callback(
    rule: str,
    messages: Optional[Messages] = None,
    field_message: Optional[str] = None,
    **options: Any,
) -> Callable[[Any, Any, Callable[..., Any]], None]:
    """
    Wrap a registered rule in the ``fn(rule_meta, value, callback)`` convention.

    The callback is invoked exactly once per call: with no arguments for a valid
    value, or with a `FieldValidationError` otherwise.

    Example:
        check_id = as_callback("id_card_strict", allow_empty=True)
        check_id({}, "11010519491231002X", on_done)   # on_done()
    """
    get_rule(rule)  # fail fast on unknown names
    catalog = MessageCatalog(messages)
    fmt: Dict[str, Any] = {
        "min": options.get("minimum", 1),
        "max": options.get("maximum", 100),
    }

    def validator(rule_meta: Any, value: Any, callback: Callable[..., Any]) -> None:
        outcome = run_rule(rule, value, **options)
        if outcome.ok:
            callback()
            return
        message = catalog.resolve(rule, outcome, field_message, **fmt)
        callback(FieldValidationError(message, outcome.reason))

    return validator
