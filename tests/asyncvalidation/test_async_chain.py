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
"""Tests for AsyncValidator and AsyncValidationChain."""

import pytest

from formkit.asyncvalidation import (
    AsyncOutcome,
    AsyncValidationChain,
    AsyncValidator,
    AsyncValidatorProtocol,
    ValidationSeverity,
)


def constant(name, outcome, priority=0, calls=None):
    async def check(value):
        if calls is not None:
            calls.append(name)
        return outcome

    return AsyncValidator(name, check, priority=priority)


class TestAsyncValidator:
    def test_conforms_to_protocol(self):
        assert isinstance(constant("a", AsyncOutcome.valid()), AsyncValidatorProtocol)

    @pytest.mark.asyncio
    async def test_wraps_check(self):
        validator = constant("a", AsyncOutcome.invalid("nope"), priority=5)
        assert validator.name == "a"
        assert validator.priority == 5
        assert (await validator.validate("x")).message == "nope"


class TestAsyncValidationChain:
    @pytest.mark.asyncio
    async def test_runs_in_priority_order(self):
        calls: list[str] = []
        chain = AsyncValidationChain(
            "chain",
            [
                constant("late", AsyncOutcome.valid(), priority=10, calls=calls),
                constant("early", AsyncOutcome.valid(), priority=1, calls=calls),
            ],
        )
        assert (await chain.validate("x")).is_valid
        assert calls == ["early", "late"]

    @pytest.mark.asyncio
    async def test_stops_on_first_error(self):
        calls: list[str] = []
        chain = AsyncValidationChain(
            "chain",
            [
                constant("a", AsyncOutcome.invalid("first"), calls=calls),
                constant("b", AsyncOutcome.invalid("second"), calls=calls),
            ],
        )
        assert (await chain.validate("x")).message == "first"
        assert calls == ["a"]

    @pytest.mark.asyncio
    async def test_collects_all_errors(self):
        chain = AsyncValidationChain(
            "chain",
            [
                constant("a", AsyncOutcome.invalid("first", ValidationSeverity.WARNING)),
                constant("b", AsyncOutcome.valid()),
                constant("c", AsyncOutcome.invalid("second", ValidationSeverity.CRITICAL)),
            ],
            stop_on_first_error=False,
        )
        result = await chain.validate("x")
        assert result.message == "first\nsecond"
        assert result.severity is ValidationSeverity.CRITICAL

    def test_chain_is_a_validator(self):
        chain = AsyncValidationChain("chain", [], priority=3)
        assert isinstance(chain, AsyncValidatorProtocol)
        assert chain.priority == 3
