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
"""Pydantic integration helpers for schema documents."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from formkit.kernel.exceptions import SchemaException

T = TypeVar("T", bound=BaseModel)


def validate_model(model: type[T], data: Any) -> T:
    """Validate data against a Pydantic model.

    Raises:
        SchemaException: If validation fails, with structured error details.
    """
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        errors = exc.errors(include_url=False)
        detail = "; ".join(
            f"{'.'.join(str(loc) for loc in e['loc']) or '<root>'}: {e['msg']}" for e in errors
        )
        raise SchemaException(
            f"Invalid {model.__name__}: {detail}",
            code="SCHEMA_INVALID",
            context={"errors": [{"loc": list(e["loc"]), "msg": e["msg"]} for e in errors]},
        ) from exc
