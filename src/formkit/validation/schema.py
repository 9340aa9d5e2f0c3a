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
"""Declarative form schemas and the factory that turns rule specs into rules.

A schema document (JSON or YAML) looks like::

    id: signup
    title: Sign up
    fields:
      - id: email
        label: Email
        required: true
        validation:
          - {type: email, message: "Enter a valid email"}
      - id: username
        validation:
          - {type: minLength, value: 3}
          - {type: custom, value: no_reserved_names}

Every rule is resolved when the schema is applied, so an unknown type, a
missing parameter or an unregistered custom predicate fails at load time.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from formkit.kernel.exceptions import (
    InvalidRuleParameterException,
    SchemaException,
    UnknownRuleTypeException,
)
from formkit.validation import rules
from formkit.validation.helpers import validate_model
from formkit.validation.registry import ValidationRegistry
from formkit.validation.rule import Rule

logger = logging.getLogger(__name__)


class RuleType(str, Enum):
    """The closed set of rule types a schema may name."""

    REQUIRED = "required"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    MIN = "min"
    MAX = "max"
    PATTERN = "pattern"
    EMAIL = "email"
    URL = "url"
    PHONE = "phone"
    CREDIT_CARD = "creditCard"
    CUSTOM = "custom"


# ── schema models ──────────────────────────────────────────────


class RuleSpec(BaseModel):
    """One ``{type, value, message}`` entry of a field's validation list.

    ``type`` is kept as a plain string so that unknown types surface as
    :class:`UnknownRuleTypeException` from the factory.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str
    value: Any = None
    message: str | None = None


class FieldSpec(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    type: str = "text"
    label: str | None = None
    placeholder: str | None = None
    required: bool = False
    default: Any = Field(default=None, alias="defaultValue")
    options: list[str] | None = None
    validation: list[RuleSpec] = Field(default_factory=list)


class FormSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str | None = None
    description: str | None = None
    fields: list[FieldSpec] = Field(default_factory=list)

    @field_validator("fields")
    @classmethod
    def _unique_field_ids(cls, fields: list[FieldSpec]) -> list[FieldSpec]:
        seen: set[str] = set()
        for spec in fields:
            if spec.id in seen:
                raise ValueError(f"duplicate field id '{spec.id}'")
            seen.add(spec.id)
        return fields

    def field(self, field_id: str) -> FieldSpec | None:
        return next((spec for spec in self.fields if spec.id == field_id), None)


# ── loading ────────────────────────────────────────────────────


def parse_schema(text: str) -> FormSchema:
    """Parse a JSON or YAML schema document (YAML is a superset of JSON).

    Raises:
        SchemaException: If the text is not parseable or not a valid schema.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SchemaException(
            f"Schema document is not valid JSON or YAML: {exc}",
            code="SCHEMA_PARSE_ERROR",
        ) from exc
    if not isinstance(data, dict):
        raise SchemaException(
            "Schema document must be a mapping at the top level",
            code="SCHEMA_PARSE_ERROR",
            context={"type": type(data).__name__},
        )
    return validate_model(FormSchema, data)


def load_schema(path: str | Path) -> FormSchema:
    """Read and parse a schema file."""
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaException(
            f"Cannot read schema file {file_path}: {exc}",
            code="SCHEMA_NOT_FOUND",
            context={"path": str(file_path)},
        ) from exc
    except UnicodeDecodeError as exc:
        raise SchemaException(
            f"Schema file {file_path} is not valid UTF-8: {exc}",
            code="SCHEMA_UNREADABLE",
            context={"path": str(file_path)},
        ) from exc
    return parse_schema(text)


# ── rule factory ───────────────────────────────────────────────


Predicate = Callable[[Any], bool]


class RuleFactory:
    """Translate :class:`RuleSpec` entries into :class:`Rule` instances.

    Custom rules name a predicate registered on the factory::

        factory = RuleFactory(custom={"no_reserved_names": lambda v: v not in {"admin", "root"}})
        factory.build(RuleSpec(type="custom", value="no_reserved_names"))
    """

    def __init__(self, custom: Mapping[str, Predicate] | None = None) -> None:
        self._custom: dict[str, Predicate] = dict(custom or {})

    def register(self, name: str, predicate: Predicate) -> None:
        self._custom[name] = predicate

    @property
    def custom_names(self) -> tuple[str, ...]:
        return tuple(self._custom)

    def build_all(self, specs: Iterable[RuleSpec]) -> list[Rule]:
        return [self.build(spec) for spec in specs]

    def build(self, spec: RuleSpec) -> Rule:
        """Build one rule.

        Raises:
            UnknownRuleTypeException: If ``spec.type`` is outside :class:`RuleType`.
            InvalidRuleParameterException: If the parameter is missing or malformed.
        """
        try:
            rule_type = RuleType(spec.type)
        except ValueError:
            raise UnknownRuleTypeException(
                f"Unknown rule type '{spec.type}'",
                code="UNKNOWN_RULE_TYPE",
                context={"type": spec.type, "allowed": [t.value for t in RuleType]},
            ) from None

        message = spec.message
        if rule_type is RuleType.REQUIRED:
            return rules.required(message) if message else rules.required()
        if rule_type is RuleType.MIN_LENGTH:
            return rules.min_length(_count_param(spec), message)
        if rule_type is RuleType.MAX_LENGTH:
            return rules.max_length(_count_param(spec), message)
        if rule_type is RuleType.MIN:
            return rules.min_value(_number_param(spec), message)
        if rule_type is RuleType.MAX:
            return rules.max_value(_number_param(spec), message)
        if rule_type is RuleType.PATTERN:
            regex = _string_param(spec)
            return rules.pattern(regex, message) if message else rules.pattern(regex)
        if rule_type is RuleType.EMAIL:
            return rules.email(message) if message else rules.email()
        if rule_type is RuleType.URL:
            require_https = bool(spec.value) if spec.value is not None else False
            if message:
                return rules.url(message, require_https=require_https)
            return rules.url(require_https=require_https)
        if rule_type is RuleType.PHONE:
            return rules.phone(message) if message else rules.phone()
        if rule_type is RuleType.CREDIT_CARD:
            return rules.credit_card(message) if message else rules.credit_card()
        return self._build_custom(spec)

    def _build_custom(self, spec: RuleSpec) -> Rule:
        name = _string_param(spec)
        predicate = self._custom.get(name)
        if predicate is None:
            raise InvalidRuleParameterException(
                f"No custom predicate registered under '{name}'",
                code="UNKNOWN_CUSTOM_RULE",
                context={"name": name, "registered": sorted(self._custom)},
            )
        if spec.message:
            return rules.custom(predicate, spec.message, identifier=name)
        return rules.custom(predicate, identifier=name)


def _invalid_param(spec: RuleSpec, expected: str) -> InvalidRuleParameterException:
    return InvalidRuleParameterException(
        f"Rule '{spec.type}' requires {expected}, got {spec.value!r}",
        code="INVALID_RULE_PARAMETER",
        context={"type": spec.type, "value": spec.value},
    )


def _count_param(spec: RuleSpec) -> int:
    value = spec.value
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise _invalid_param(spec, "a non-negative integer value")
    return value


def _number_param(spec: RuleSpec) -> float:
    value = spec.value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _invalid_param(spec, "a numeric value")
    return float(value)


def _string_param(spec: RuleSpec) -> str:
    if not isinstance(spec.value, str) or not spec.value:
        raise _invalid_param(spec, "a non-empty string value")
    return spec.value


# ── registration ───────────────────────────────────────────────


def rules_for_field(spec: FieldSpec, factory: RuleFactory) -> list[Rule]:
    """The rule list for a field; ``required: true`` prepends the required rule."""
    built = factory.build_all(spec.validation)
    has_required = any(rule.identifier == "required" for rule in built)
    if spec.required and not has_required:
        built.insert(0, rules.required())
    return built


def apply_schema(
    registry: ValidationRegistry,
    schema: FormSchema,
    factory: RuleFactory | None = None,
) -> tuple[str, ...]:
    """Register every field of ``schema`` on ``registry``.

    All rules are built before any field is registered, so a faulty schema
    leaves the registry untouched. Returns the registered keys in order.
    """
    resolved = factory or RuleFactory()
    built = [(spec, rules_for_field(spec, resolved)) for spec in schema.fields]
    for spec, field_rules in built:
        registry.register_field(spec.id, field_rules, default=spec.default)
    logger.debug("Applied schema %s with %d fields", schema.id, len(built))
    return tuple(spec.id for spec, _ in built)
