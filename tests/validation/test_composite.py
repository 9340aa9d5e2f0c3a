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
"""Tests for rule combinators."""

import pytest

from formkit.kernel.exceptions import InvalidRuleParameterException
from formkit.validation import (
    VALID,
    CompositeRule,
    CompositionMode,
    Outcome,
    Quantifier,
    all_of,
    any_of,
    none_of,
    predicate_rule,
)

PASS = predicate_rule("pass", "never shown", lambda v: True)


def failing(message: str):
    return predicate_rule(f"fail_{message}", message, lambda v: False)


def children(passing: int, total: int):
    return [PASS] * passing + [failing(f"child{i}") for i in range(total - passing)]


class TestQuantifierArithmetic:
    TOTAL = 4

    @pytest.mark.parametrize("passing", range(TOTAL + 1))
    def test_all(self, passing):
        result = CompositeRule(children(passing, self.TOTAL), CompositionMode.ALL).evaluate("x")
        assert result.is_valid == (passing == self.TOTAL)

    @pytest.mark.parametrize("passing", range(TOTAL + 1))
    def test_any(self, passing):
        result = CompositeRule(children(passing, self.TOTAL), CompositionMode.ANY).evaluate("x")
        assert result.is_valid == (passing > 0)

    @pytest.mark.parametrize("passing", range(TOTAL + 1))
    def test_none(self, passing):
        result = CompositeRule(children(passing, self.TOTAL), CompositionMode.NONE).evaluate("x")
        assert result.is_valid == (passing == 0)

    @pytest.mark.parametrize("n", range(TOTAL + 1))
    @pytest.mark.parametrize("passing", range(TOTAL + 1))
    def test_counted_modes(self, n, passing):
        rules = children(passing, self.TOTAL)
        assert CompositeRule(rules, CompositionMode.exactly(n)).evaluate("x").is_valid == (passing == n)
        assert CompositeRule(rules, CompositionMode.at_least(n)).evaluate("x").is_valid == (passing >= n)
        assert CompositeRule(rules, CompositionMode.at_most(n)).evaluate("x").is_valid == (passing <= n)

    @pytest.mark.parametrize("passing", range(TOTAL + 1))
    def test_between(self, passing):
        result = CompositeRule(children(passing, self.TOTAL), CompositionMode.between(1, 2)).evaluate("x")
        assert result.is_valid == (1 <= passing <= 2)


class TestCompositeMessages:
    def test_override_message_wins(self):
        rule = all_of(PASS, failing("first"), message="Override")
        assert rule.evaluate("x") == Outcome.invalid("Override")

    def test_first_failing_child_message(self):
        rule = all_of(PASS, failing("first"), failing("second"))
        assert rule.evaluate("x") == Outcome.invalid("first")

    def test_generic_fallback_when_no_child_failed(self):
        rule = none_of(PASS, PASS)
        assert rule.evaluate("x") == Outcome.invalid("Validation failed")

    def test_every_child_is_evaluated(self):
        calls = []

        def tracking(name, result):
            return predicate_rule(name, name, lambda v: calls.append(name) or result)

        any_of(tracking("a", True), tracking("b", False), tracking("c", True)).evaluate("x")
        assert calls == ["a", "b", "c"]

    def test_valid_outcome(self):
        assert any_of(failing("a"), PASS).evaluate("x") == VALID

    def test_empty_all_is_valid(self):
        assert CompositeRule([]).evaluate("x") == VALID

    def test_identifier_describes_mode(self):
        rule = CompositeRule([PASS], CompositionMode.at_least(1))
        assert rule.identifier == "at_least_1(pass)"
        assert rule.mode.quantifier is Quantifier.AT_LEAST

    def test_nested_composites(self):
        inner = any_of(failing("inner"), failing("inner2"))
        outer = all_of(PASS, inner)
        assert outer.evaluate("x") == Outcome.invalid("inner")


class TestCompositionModeValidation:
    def test_negative_count_is_configuration_fault(self):
        with pytest.raises(InvalidRuleParameterException):
            CompositionMode.exactly(-1)

    def test_inverted_range_is_configuration_fault(self):
        with pytest.raises(InvalidRuleParameterException):
            CompositionMode.between(3, 1)

    def test_non_integer_bound_rejected(self):
        with pytest.raises(InvalidRuleParameterException):
            CompositionMode.at_least(True)  # type: ignore[arg-type]
