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
"""Debounced, cancellable async validation of one value stream.

Each call to :meth:`AsyncValidationState.validate` starts a *pass*: wait out
the debounce window, run every validator in ascending priority, aggregate,
publish. Starting a pass supersedes the previous one. Supersession is
tracked with a generation counter that is checked after every suspension
point, and the superseded task is also cancelled, so the last pass to start
is the only one that can publish.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import timedelta
from types import MappingProxyType
from typing import Any

from formkit.asyncvalidation.types import AsyncOutcome, ValidationSeverity, aggregate_outcomes
from formkit.asyncvalidation.validator import AsyncValidatorProtocol
from formkit.config.properties.validation import ValidationProperties
from formkit.validation.outcome import DEFAULT_FAILURE_MESSAGE

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE = timedelta(milliseconds=300)

Listener = Callable[["AsyncValidationSnapshot"], None]


@dataclass(frozen=True)
class AsyncValidationSnapshot:
    """Everything a reader may observe, published as one unit."""

    is_validating: bool = False
    results: Mapping[str, AsyncOutcome] = field(default_factory=lambda: MappingProxyType({}))
    overall_result: AsyncOutcome = field(default_factory=AsyncOutcome.valid)
    last_validated_value: Any = None

    @property
    def is_valid(self) -> bool:
        return self.overall_result.is_valid and not self.is_validating


class AsyncValidationState:
    """Orchestrates a priority-ordered list of async validators for one field.

    Must be driven from a running event loop. Readers only observe the
    published :class:`AsyncValidationSnapshot`; a validator that never resolves
    leaves ``is_validating`` set, so callers wanting a bound should wrap their
    checks with a timeout.

    Usage::

        state = AsyncValidationState([email_validator()], debounce=timedelta(milliseconds=200))
        state.validate("ada@example.com")
        snapshot = await state.wait()
    """

    def __init__(
        self,
        validators: Iterable[AsyncValidatorProtocol] = (),
        *,
        debounce: timedelta = DEFAULT_DEBOUNCE,
        fault_message: str = DEFAULT_FAILURE_MESSAGE,
    ) -> None:
        self._validators: list[AsyncValidatorProtocol] = sorted(validators, key=lambda v: v.priority)
        self._debounce_seconds = max(debounce.total_seconds(), 0.0)
        self._fault_message = fault_message or DEFAULT_FAILURE_MESSAGE
        self._snapshot = AsyncValidationSnapshot()
        self._generation = 0
        self._task: asyncio.Task[AsyncValidationSnapshot] | None = None
        self._listeners: list[Listener] = []

    @classmethod
    def from_properties(
        cls,
        properties: ValidationProperties,
        validators: Iterable[AsyncValidatorProtocol] = (),
    ) -> AsyncValidationState:
        return cls(validators, debounce=properties.debounce, fault_message=properties.fallback_message)

    # ── validators ─────────────────────────────────────────────

    def add_validator(self, validator: AsyncValidatorProtocol) -> None:
        """Insert a validator; equal priorities keep insertion order."""
        self._validators.append(validator)
        self._validators.sort(key=lambda v: v.priority)

    def clear_validators(self) -> None:
        """Drop every validator, stop the live pass and clear its results.

        The last validated value stays published.
        """
        self._validators.clear()
        self._generation += 1
        self._abandon_task()
        self._publish(
            replace(
                self._snapshot,
                is_validating=False,
                results=MappingProxyType({}),
                overall_result=AsyncOutcome.valid(),
            )
        )

    @property
    def validators(self) -> tuple[AsyncValidatorProtocol, ...]:
        return tuple(self._validators)

    @property
    def debounce(self) -> timedelta:
        return timedelta(seconds=self._debounce_seconds)

    # ── listeners ──────────────────────────────────────────────

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every published snapshot. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _publish(self, snapshot: AsyncValidationSnapshot) -> None:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot)

    # ── lifecycle ──────────────────────────────────────────────

    def validate(self, value: Any, *, force: bool = False) -> asyncio.Task[AsyncValidationSnapshot]:
        """Start a pass for ``value``, superseding any scheduled or running pass.

        ``force`` skips the debounce window. The returned task resolves to the
        published snapshot, or is cancelled if a later pass supersedes it.
        """
        self._abandon_task()
        self._generation += 1
        task = asyncio.create_task(self._run(value, self._generation, force))
        self._task = task
        return task

    def cancel(self) -> None:
        """Stop the live pass; the last published results stay visible."""
        self._generation += 1
        self._abandon_task()
        if self._snapshot.is_validating:
            self._publish(replace(self._snapshot, is_validating=False))

    def reset(self) -> None:
        """Cancel and clear every published field; validators are kept."""
        self._generation += 1
        self._abandon_task()
        self._publish(AsyncValidationSnapshot())

    async def wait(self) -> AsyncValidationSnapshot:
        """Wait until no pass is live, following any pass that supersedes the current one."""
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})
        return self._snapshot

    def _abandon_task(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _run(self, value: Any, generation: int, force: bool) -> AsyncValidationSnapshot:
        try:
            return await self._pass(value, generation, force)
        except Exception:
            logger.exception("Async validation pass %d failed", generation)
            if generation != self._generation:
                return self._snapshot
            snapshot = AsyncValidationSnapshot(
                is_validating=False,
                overall_result=AsyncOutcome.invalid(self._fault_message),
                last_validated_value=value,
            )
            self._publish(snapshot)
            return snapshot

    async def _pass(self, value: Any, generation: int, force: bool) -> AsyncValidationSnapshot:
        if not force and self._debounce_seconds > 0:
            await asyncio.sleep(self._debounce_seconds)
        if generation != self._generation:
            logger.debug("Async validation pass %d superseded during debounce", generation)
            return self._snapshot

        self._publish(replace(self._snapshot, is_validating=True, results=MappingProxyType({})))
        logger.debug("Async validation pass %d started with %d validators", generation, len(self._validators))

        results: dict[str, AsyncOutcome] = {}
        for validator in list(self._validators):
            outcome = await self._run_validator(validator, value)
            if generation != self._generation:
                logger.debug("Async validation pass %d superseded after %s", generation, validator.name)
                return self._snapshot
            results[validator.name] = outcome

        snapshot = AsyncValidationSnapshot(
            is_validating=False,
            results=MappingProxyType(results),
            overall_result=aggregate_outcomes(results.values()),
            last_validated_value=value,
        )
        self._publish(snapshot)
        logger.debug("Async validation pass %d finished, valid=%s", generation, snapshot.overall_result.is_valid)
        return snapshot

    async def _run_validator(self, validator: AsyncValidatorProtocol, value: Any) -> AsyncOutcome:
        try:
            return await validator.validate(value)
        except Exception as exc:
            logger.warning("Async validator %s raised %s: %s", validator.name, type(exc).__name__, exc)
            return AsyncOutcome.invalid(
                str(exc) or self._fault_message,
                ValidationSeverity.ERROR,
                {"exception": type(exc).__name__},
            )

    # ── published state ────────────────────────────────────────

    @property
    def snapshot(self) -> AsyncValidationSnapshot:
        return self._snapshot

    @property
    def is_validating(self) -> bool:
        return self._snapshot.is_validating

    @property
    def results(self) -> Mapping[str, AsyncOutcome]:
        return self._snapshot.results

    @property
    def overall_result(self) -> AsyncOutcome:
        return self._snapshot.overall_result

    @property
    def last_validated_value(self) -> Any:
        return self._snapshot.last_validated_value

    @property
    def is_valid(self) -> bool:
        return self._snapshot.is_valid

    @property
    def error_messages(self) -> list[str]:
        return [o.message for o in self._snapshot.results.values() if not o.is_valid and o.message]

    @property
    def warning_messages(self) -> list[str]:
        return [o.message for o in self._snapshot.results.values() if o.is_warning and o.message]

    @property
    def info_messages(self) -> list[str]:
        return [o.message for o in self._snapshot.results.values() if o.is_info and o.message]
