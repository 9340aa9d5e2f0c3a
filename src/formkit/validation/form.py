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
"""Form-level submit gate over a registry and its async field states."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from formkit.kernel.exceptions import FormValidationException
from formkit.kernel.types import FieldError
from formkit.validation.registry import ValidationRegistry

if TYPE_CHECKING:
    from formkit.asyncvalidation.state import AsyncValidationState

logger = logging.getLogger(__name__)


class FormValidator:
    """A form is submittable iff every field result and every async state is valid.

    Usage::

        form = FormValidator(registry, {"username": username_state})
        if await form.check():
            submit(registry.values)
    """

    def __init__(
        self,
        registry: ValidationRegistry,
        async_fields: Mapping[str, AsyncValidationState] | None = None,
    ) -> None:
        self._registry = registry
        self._async_fields: dict[str, AsyncValidationState] = dict(async_fields or {})

    @property
    def registry(self) -> ValidationRegistry:
        return self._registry

    @property
    def async_fields(self) -> Mapping[str, AsyncValidationState]:
        return MappingProxyType(self._async_fields)

    def attach(self, key: str, state: AsyncValidationState) -> None:
        """Attach an async state to field ``key``; its validity joins the gate."""
        self._async_fields[key] = state

    def detach(self, key: str) -> None:
        self._async_fields.pop(key, None)

    @property
    def is_submittable(self) -> bool:
        return self._registry.is_valid and all(state.is_valid for state in self._async_fields.values())

    async def check(self) -> bool:
        """Validate everything now: ``validate_all`` plus a forced pass per async field."""
        self._registry.validate_all()
        for key, state in self._async_fields.items():
            state.validate(self._registry.value(key), force=True)
        await asyncio.gather(*(state.wait() for state in self._async_fields.values()))
        submittable = self.is_submittable
        logger.debug("Form check finished, submittable=%s", submittable)
        return submittable

    def errors(self) -> list[FieldError]:
        """Every current error: synchronous results first, then async failures."""
        found = [
            FieldError(field=key, message=message, rejected_value=self._registry.value(key))
            for key, message in self._registry.validation_errors.items()
        ]
        for key, state in self._async_fields.items():
            for message in state.error_messages:
                found.append(FieldError(field=key, message=message, rejected_value=state.last_validated_value))
        return found

    def require_valid(self) -> None:
        """Raise unless the form is submittable right now.

        Raises:
            FormValidationException: With every field error in ``context["errors"]``.
        """
        if self.is_submittable:
            return
        errors = self.errors()
        raise FormValidationException(
            f"Form has {len(errors)} invalid field(s)" if errors else "Form is not submittable",
            code="FORM_INVALID",
            context={"errors": [error.to_dict() for error in errors]},
        )
