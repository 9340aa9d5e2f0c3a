# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Synchronous validation registry — per-field rules, state and cross-field rules."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from formkit.validation.conditional import MISSING
from formkit.validation.outcome import VALID, Outcome
from formkit.validation.rule import Rule

logger = logging.getLogger(__name__)

CrossFieldValidator = Callable[[Mapping[str, Any]], Outcome]


@dataclass
class FieldEntry:
    """Mutable state of one registered field. Owned by the registry."""

    key: str
    rules: tuple[Rule, ...] = ()
    default: Any = None
    value: Any = None
    result: Outcome = VALID
    touched: bool = False
    dirty: bool = False

    def restore(self) -> None:
        self.value = self.default
        self.result = VALID
        self.touched = False
        self.dirty = False


@dataclass(frozen=True)
class CrossFieldRule:
    """A validator over several fields; failures are attributed to every key."""

    keys: tuple[str, ...]
    validator: CrossFieldValidator
    identifier: str = field(default="cross_field")

    def evaluate(self, values: Mapping[str, Any]) -> Outcome:
        return self.validator(MappingProxyType({key: values.get(key) for key in self.keys}))


class ValidationRegistry:
    """Field rule lists plus the validity of each field and of the whole form.

    Errors only start updating live once a field is touched; before that
    :meth:`set_value` records the value without validating. Operations on keys
    that were never registered are no-ops that return a neutral default, so
    adapters may validate before registration completes.

    Usage::

        registry = ValidationRegistry()
        registry.register_field("email", [required(), email()])
        registry.set_value("email", "ada@example.com")
        registry.touch_field("email")
        registry.validate_all()
    """

    def __init__(self) -> None:
        self._fields: dict[str, FieldEntry] = {}
        self._cross_field_rules: list[CrossFieldRule] = []

    # ── registration ───────────────────────────────────────────

    def register_field(self, key: str, rules: Iterable[Rule] = (), default: Any = None) -> None:
        """Create the field, or refresh the rules and default of an existing one.

        Re-registration keeps the current value and the touched/dirty flags.
        """
        entry = self._fields.get(key)
        if entry is None:
            self._fields[key] = FieldEntry(key=key, rules=tuple(rules), default=default, value=default)
            logger.debug("Registered field %s", key)
            return
        entry.rules = tuple(rules)
        entry.default = default

    def add_cross_field_rule(
        self,
        keys: Iterable[str],
        validator: CrossFieldValidator,
        *,
        identifier: str = "cross_field",
    ) -> CrossFieldRule:
        """Register a rule over several fields, evaluated by :meth:`validate_all`."""
        rule = CrossFieldRule(keys=tuple(keys), validator=validator, identifier=identifier)
        self._cross_field_rules.append(rule)
        return rule

    def is_registered(self, key: str) -> bool:
        return key in self._fields

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(self._fields)

    # ── values ─────────────────────────────────────────────────

    def set_value(self, key: str, value: Any) -> None:
        entry = self._fields.get(key)
        if entry is None:
            return
        entry.value = value
        entry.dirty = True
        if entry.touched:
            self.validate_field(key)

    def value(self, key: str, default: Any = None) -> Any:
        entry = self._fields.get(key)
        return default if entry is None else entry.value

    def accessor(self, key: str) -> Callable[[], Any]:
        """A read-through accessor for dependent rules.

        The accessor returns :data:`MISSING` while ``key`` is unregistered.
        """
        return lambda: self.value(key, MISSING)

    @property
    def values(self) -> Mapping[str, Any]:
        """Read-only snapshot of every field value."""
        return MappingProxyType({key: entry.value for key, entry in self._fields.items()})

    # ── interaction ────────────────────────────────────────────

    def touch_field(self, key: str) -> None:
        entry = self._fields.get(key)
        if entry is None:
            return
        entry.touched = True
        self.validate_field(key)

    def is_touched(self, key: str) -> bool:
        entry = self._fields.get(key)
        return entry is not None and entry.touched

    def is_dirty(self, key: str) -> bool:
        entry = self._fields.get(key)
        return entry is not None and entry.dirty

    # ── validation ─────────────────────────────────────────────

    def validate_field(self, key: str) -> bool:
        """Run the field's rules in order and store the first failure, or Valid."""
        entry = self._fields.get(key)
        if entry is None:
            return True
        entry.result = self._run_rules(entry)
        return entry.result.is_valid

    def validate_all(self) -> bool:
        """Touch and validate every field, then run every cross-field rule.

        Cross-field rules run strictly after all single-field validation so
        they always see the values committed for this pass.
        """
        all_valid = True
        for entry in self._fields.values():
            entry.touched = True
            entry.result = self._run_rules(entry)
            all_valid = all_valid and entry.result.is_valid

        if self._cross_field_rules:
            snapshot = self.values
            for rule in self._cross_field_rules:
                outcome = rule.evaluate(snapshot)
                if outcome.is_valid:
                    continue
                all_valid = False
                for key in rule.keys:
                    entry = self._fields.get(key)
                    if entry is not None and entry.result.is_valid:
                        entry.result = outcome

        logger.debug("Validated %d fields, valid=%s", len(self._fields), all_valid)
        return all_valid

    @staticmethod
    def _run_rules(entry: FieldEntry) -> Outcome:
        for rule in entry.rules:
            outcome = rule.evaluate(entry.value)
            if not outcome.is_valid:
                return outcome
        return VALID

    # ── queries ────────────────────────────────────────────────

    def result(self, key: str) -> Outcome:
        entry = self._fields.get(key)
        return VALID if entry is None else entry.result

    @property
    def is_valid(self) -> bool:
        return all(entry.result.is_valid for entry in self._fields.values())

    @property
    def validation_errors(self) -> dict[str, str]:
        """The stored error of every invalid field, touched or not."""
        return {
            key: entry.result.message
            for key, entry in self._fields.items()
            if not entry.result.is_valid and entry.result.message is not None
        }

    def error_message(self, key: str) -> str | None:
        """The error to display for ``key``; None until the field is touched."""
        entry = self._fields.get(key)
        if entry is None or not entry.touched:
            return None
        return entry.result.message

    # ── reset ──────────────────────────────────────────────────

    def reset(self) -> None:
        """Restore every field to its registered default; rules are kept."""
        for entry in self._fields.values():
            entry.restore()

    def reset_field(self, key: str) -> None:
        entry = self._fields.get(key)
        if entry is not None:
            entry.restore()

    def clear(self) -> None:
        """Forget every field and cross-field rule."""
        self._fields.clear()
        self._cross_field_rules.clear()
