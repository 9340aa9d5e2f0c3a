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
"""Async validator port and its default implementations."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import Any, Protocol, runtime_checkable

from formkit.asyncvalidation.types import AsyncOutcome, ValidationSeverity

AsyncCheck = Callable[[Any], Awaitable[AsyncOutcome]]


@runtime_checkable
class AsyncValidatorProtocol(Protocol):
    """Anything with a name, a priority and an awaitable ``validate``.

    Lower priorities run earlier. ``name`` keys the per-validator results.
    """

    @property
    def name(self) -> str: ...

    @property
    def priority(self) -> int: ...

    async def validate(self, value: Any) -> AsyncOutcome: ...


class AsyncValidator:
    """Wrap an async check function as a named, prioritized validator.

    Usage::

        async def username_free(value):
            taken = await directory.exists(value)
            return AsyncOutcome.invalid("Username is taken") if taken else AsyncOutcome.valid()

        state.add_validator(AsyncValidator("availability", username_free, priority=10))
    """

    def __init__(self, name: str, check: AsyncCheck, *, priority: int = 0) -> None:
        self._name = name
        self._check = check
        self._priority = priority

    @property
    def name(self) -> str:
        return self._name

    @property
    def priority(self) -> int:
        return self._priority

    async def validate(self, value: Any) -> AsyncOutcome:
        return await self._check(value)

    def __repr__(self) -> str:
        return f"AsyncValidator(name={self._name!r}, priority={self._priority})"


class AsyncValidationChain:
    """Run several validators in priority order as one validator.

    With ``stop_on_first_error`` (default) the first failing outcome is
    returned as is. Otherwise every validator runs and the failures are
    merged: messages joined by newlines, severity the highest seen.
    """

    def __init__(
        self,
        name: str,
        validators: Iterable[AsyncValidatorProtocol],
        *,
        priority: int = 0,
        stop_on_first_error: bool = True,
    ) -> None:
        self._name = name
        self._priority = priority
        self._validators = sorted(validators, key=lambda v: v.priority)
        self._stop_on_first_error = stop_on_first_error

    @property
    def name(self) -> str:
        return self._name

    @property
    def priority(self) -> int:
        return self._priority

    @property
    def validators(self) -> tuple[AsyncValidatorProtocol, ...]:
        return tuple(self._validators)

    async def validate(self, value: Any) -> AsyncOutcome:
        messages: list[str] = []
        highest = ValidationSeverity.INFO
        for validator in self._validators:
            outcome = await validator.validate(value)
            if outcome.is_valid:
                continue
            if self._stop_on_first_error:
                return outcome
            if outcome.message:
                messages.append(outcome.message)
            if outcome.severity.rank > highest.rank:
                highest = outcome.severity
        if messages:
            return AsyncOutcome.invalid("\n".join(messages), highest)
        return AsyncOutcome.valid()
