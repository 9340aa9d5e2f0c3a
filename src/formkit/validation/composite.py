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
"""Rule combinators: quantifiers over the pass count of child rules."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from formkit.kernel.exceptions import InvalidRuleParameterException
from formkit.validation.outcome import DEFAULT_FAILURE_MESSAGE, VALID, Outcome
from formkit.validation.rule import Rule


class Quantifier(str, Enum):
    """How the number of passing children decides the composite outcome."""

    ALL = "all"
    ANY = "any"
    NONE = "none"
    EXACTLY = "exactly"
    AT_LEAST = "at_least"
    AT_MOST = "at_most"
    RANGE = "range"


@dataclass(frozen=True)
class CompositionMode:
    """A quantifier plus its bounds.

    Use the class attributes ``ALL``/``ANY``/``NONE`` or the factories
    :meth:`exactly`, :meth:`at_least`, :meth:`at_most`, :meth:`between`.
    """

    quantifier: Quantifier
    low: int = 0
    high: int = 0

    ALL: ClassVar[CompositionMode]
    ANY: ClassVar[CompositionMode]
    NONE: ClassVar[CompositionMode]

    def __post_init__(self) -> None:
        for bound in (self.low, self.high):
            if isinstance(bound, bool) or not isinstance(bound, int) or bound < 0:
                raise InvalidRuleParameterException(
                    f"Composition bounds must be non-negative integers, got {bound!r}",
                    code="INVALID_RULE_PARAMETER",
                    context={"quantifier": self.quantifier.value},
                )
        if self.low > self.high:
            raise InvalidRuleParameterException(
                f"Composition range {self.low}..{self.high} is empty",
                code="INVALID_RULE_PARAMETER",
                context={"quantifier": self.quantifier.value},
            )

    # ── factories ──────────────────────────────────────────────

    @staticmethod
    def exactly(n: int) -> CompositionMode:
        return CompositionMode(Quantifier.EXACTLY, n, n)

    @staticmethod
    def at_least(n: int) -> CompositionMode:
        return CompositionMode(Quantifier.AT_LEAST, n, n)

    @staticmethod
    def at_most(n: int) -> CompositionMode:
        return CompositionMode(Quantifier.AT_MOST, n, n)

    @staticmethod
    def between(low: int, high: int) -> CompositionMode:
        return CompositionMode(Quantifier.RANGE, low, high)

    # ── evaluation ─────────────────────────────────────────────

    def accepts(self, passing: int, total: int) -> bool:
        """Whether ``passing`` of ``total`` children satisfies this mode."""
        q = self.quantifier
        if q is Quantifier.ALL:
            return passing == total
        if q is Quantifier.ANY:
            return passing > 0
        if q is Quantifier.NONE:
            return passing == 0
        if q is Quantifier.EXACTLY:
            return passing == self.low
        if q is Quantifier.AT_LEAST:
            return passing >= self.low
        if q is Quantifier.AT_MOST:
            return passing <= self.high
        return self.low <= passing <= self.high

    def describe(self) -> str:
        if self.quantifier in (Quantifier.ALL, Quantifier.ANY, Quantifier.NONE):
            return self.quantifier.value
        if self.quantifier is Quantifier.RANGE:
            return f"range_{self.low}_{self.high}"
        return f"{self.quantifier.value}_{self.low}"


CompositionMode.ALL = CompositionMode(Quantifier.ALL)
CompositionMode.ANY = CompositionMode(Quantifier.ANY)
CompositionMode.NONE = CompositionMode(Quantifier.NONE)


class CompositeRule(Rule):
    """A rule built from child rules and a :class:`CompositionMode`.

    Every child is evaluated (no short-circuit) because the pass count is
    needed. On failure the message is, in order of preference: the override
    ``message``, the first failing child's message, the generic fallback.

    Usage::

        strong = CompositeRule(
            [pattern(r".*\\d.*"), pattern(r".*[A-Z].*"), pattern(r".*[^\\w].*")],
            mode=CompositionMode.at_least(2),
            message="Use at least two of: digit, capital, symbol",
        )
    """

    __slots__ = ("_rules", "_mode", "_override")

    def __init__(
        self,
        rules: Iterable[Rule],
        mode: CompositionMode | None = None,
        message: str | None = None,
        *,
        identifier: str | None = None,
    ) -> None:
        children = tuple(rules)
        resolved_mode = mode if mode is not None else CompositionMode.ALL
        name = identifier or "{}({})".format(
            resolved_mode.describe(), ",".join(child.identifier for child in children)
        )
        super().__init__(name, message or DEFAULT_FAILURE_MESSAGE)
        self._rules = children
        self._mode = resolved_mode
        self._override = message

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    @property
    def mode(self) -> CompositionMode:
        return self._mode

    def evaluate(self, value: Any) -> Outcome:
        outcomes = [child.evaluate(value) for child in self._rules]
        passing = sum(1 for outcome in outcomes if outcome.is_valid)
        if self._mode.accepts(passing, len(outcomes)):
            return VALID

        if self._override is not None:
            return Outcome.invalid(self._override)
        for outcome in outcomes:
            if not outcome.is_valid and outcome.message:
                return outcome
        return Outcome.invalid(DEFAULT_FAILURE_MESSAGE)


# ── convenience constructors ───────────────────────────────────


def all_of(*rules: Rule, message: str | None = None) -> CompositeRule:
    return CompositeRule(rules, CompositionMode.ALL, message)


def any_of(*rules: Rule, message: str | None = None) -> CompositeRule:
    return CompositeRule(rules, CompositionMode.ANY, message)


def none_of(*rules: Rule, message: str | None = None) -> CompositeRule:
    return CompositeRule(rules, CompositionMode.NONE, message)
