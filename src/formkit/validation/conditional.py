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
"""Rules whose applicability depends on a predicate or on another field."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Final

from formkit.validation.outcome import VALID, Outcome
from formkit.validation.rule import Rule


class _Missing:
    """Sentinel type for a dependency whose value cannot be resolved."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


class ConditionalRule(Rule):
    """Apply ``then`` only when ``when(value)`` holds; otherwise a definite Valid."""

    __slots__ = ("_condition", "_rule")

    def __init__(
        self,
        when: Callable[[Any], bool],
        then: Rule,
        *,
        identifier: str | None = None,
    ) -> None:
        super().__init__(identifier or f"when_{then.identifier}", then.message)
        self._condition = when
        self._rule = then

    def evaluate(self, value: Any) -> Outcome:
        if not self._condition(value):
            return VALID
        return self._rule.evaluate(value)


class DependentRule(Rule):
    """Validate a value against another field's *current* value.

    ``dependency`` is called on every evaluation and its result is never kept,
    so the rule always sees the latest state of the other field. When the
    dependency cannot be resolved (the accessor returns :data:`MISSING` or
    raises ``LookupError``) the rule yields ``fallback`` instead of failing.

    Usage::

        confirm = DependentRule(
            dependency=registry.accessor("password"),
            validator=lambda value, password: (
                Outcome.valid() if value == password else Outcome.invalid("Passwords do not match")
            ),
        )
    """

    __slots__ = ("_dependency", "_validator", "_fallback")

    def __init__(
        self,
        dependency: Callable[[], Any],
        validator: Callable[[Any, Any], Outcome],
        *,
        fallback: Outcome = VALID,
        identifier: str = "dependent",
        message: str = "Validation failed",
    ) -> None:
        super().__init__(identifier, message)
        self._dependency = dependency
        self._validator = validator
        self._fallback = fallback

    def evaluate(self, value: Any) -> Outcome:
        try:
            dependency_value = self._dependency()
        except LookupError:
            return self._fallback
        if dependency_value is MISSING:
            return self._fallback
        return self._validator(value, dependency_value)


def matches_field(
    dependency: Callable[[], Any],
    message: str = "Values do not match",
) -> DependentRule:
    """Dependent rule requiring equality with another field (e.g. password confirmation)."""
    failure = Outcome.invalid(message)
    return DependentRule(
        dependency,
        lambda value, other: VALID if value == other else failure,
        identifier="matches_field",
        message=message,
    )
