"""
Validates whole form records against a rule set and collects per-field results.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

import yaml

from ..config import FieldRule, FormConfig
from ..errors import RecordFormatError
from ..rules.outcome import Outcome
from ..rules.validators import run_rule
from ..utils.data import get_deep_level_value, plain_number
from .adapters import MessageCatalog

logger = logging.getLogger(__name__)


@dataclass
class FieldResult:
    name: str
    value: Any
    outcome: Outcome
    message: Optional[str] = None


@dataclass
class FormResult:
    ok: bool
    fields: List[FieldResult] = field(default_factory=list)
    errors: Dict[str, str] = field(default_factory=dict)


class FormValidator:
    """
    Applies a `FormConfig` to records (plain dicts, e.g. parsed JSON bodies).

    Field names may be dotted paths (``buyer.phone``); a missing key is treated
    as an empty value, so `allow_empty` decides whether it passes. Keys in the
    record that the rule set does not mention are ignored.
    """

    def __init__(self, cfg: FormConfig) -> None:
        self.cfg = cfg
        self.catalog = MessageCatalog(cfg.messages)

    # ---------------- Public API ----------------

    def validate(self, record: Mapping[str, Any]) -> FormResult:
        results: List[FieldResult] = []
        errors: Dict[str, str] = {}
        for name, rule in self.cfg.fields.items():
            res = self.check_field(name, rule, self._lookup(record, name))
            results.append(res)
            if not res.outcome.ok:
                errors[name] = res.message or ""
        if errors:
            logger.debug(f"record failed on {', '.join(errors)}")
        return FormResult(ok=not errors, fields=results, errors=errors)

    def validate_many(self, records: Iterable[Mapping[str, Any]]) -> Iterator[FormResult]:
        for record in records:
            yield self.validate(record)

    def check_field(self, name: str, rule: FieldRule, value: Any) -> FieldResult:
        """Run one field rule and attach the resolved message on failure."""
        outcome = run_rule(
            rule.rule,
            value,
            allow_empty=rule.allow_empty,
            minimum=rule.min,
            maximum=rule.max,
            tip=rule.tip,
        )
        message = self.catalog.resolve(
            rule.rule, outcome, rule.message, min=plain_number(rule.min), max=plain_number(rule.max)
        )
        return FieldResult(name=name, value=value, outcome=outcome, message=message)

    # --------------- Internals ------------------

    @staticmethod
    def _lookup(record: Mapping[str, Any], name: str) -> Any:
        if name in record:
            return record[name]
        if "." in name:
            return get_deep_level_value(record, name)
        return None


def load_records(path: Path) -> List[Dict[str, Any]]:
    """
    Read records from a JSON array, a JSON Lines file or a YAML list.

    A single JSON/YAML object is accepted as a one-record list.
    """
    text = Path(path).read_text(encoding="utf-8")
    if not text.strip():
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        lines = [ln for ln in text.splitlines() if ln.strip()]
        try:
            data = [json.loads(ln) for ln in lines]
        except json.JSONDecodeError:
            try:
                data = yaml.safe_load(text)
            except yaml.YAMLError as e:
                raise RecordFormatError(f"{path}: not JSON, JSON Lines or YAML") from e
    if isinstance(data, Mapping):
        data = [data]
    if not isinstance(data, list) or not all(isinstance(r, Mapping) for r in data):
        raise RecordFormatError(f"{path}: expected a list of objects")
    return [dict(r) for r in data]
