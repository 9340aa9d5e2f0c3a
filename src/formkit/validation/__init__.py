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
"""formkit Validation — rules, combinators, the field registry and form schemas."""

from formkit.validation.cards import CardBrand, detect_card_brand, luhn_check
from formkit.validation.composite import CompositeRule, CompositionMode, Quantifier, all_of, any_of, none_of
from formkit.validation.conditional import MISSING, ConditionalRule, DependentRule, matches_field
from formkit.validation.form import FormValidator
from formkit.validation.helpers import validate_model
from formkit.validation.outcome import DEFAULT_FAILURE_MESSAGE, VALID, Outcome
from formkit.validation.registry import CrossFieldRule, FieldEntry, ValidationRegistry
from formkit.validation.rule import Rule, predicate_rule
from formkit.validation.rules import (
    credit_card,
    custom,
    email,
    equals,
    length_range,
    max_length,
    max_value,
    min_length,
    min_value,
    numeric,
    one_of,
    pattern,
    phone,
    required,
    url,
)
from formkit.validation.schema import (
    FieldSpec,
    FormSchema,
    RuleFactory,
    RuleSpec,
    RuleType,
    apply_schema,
    load_schema,
    parse_schema,
)

__all__ = [
    # Core
    "DEFAULT_FAILURE_MESSAGE",
    "Outcome",
    "Rule",
    "VALID",
    "predicate_rule",
    # Built-in rules
    "credit_card",
    "custom",
    "email",
    "equals",
    "length_range",
    "max_length",
    "max_value",
    "min_length",
    "min_value",
    "numeric",
    "one_of",
    "pattern",
    "phone",
    "required",
    "url",
    # Cards
    "CardBrand",
    "detect_card_brand",
    "luhn_check",
    # Combinators
    "CompositeRule",
    "CompositionMode",
    "Quantifier",
    "all_of",
    "any_of",
    "none_of",
    # Conditional
    "MISSING",
    "ConditionalRule",
    "DependentRule",
    "matches_field",
    # Registry
    "CrossFieldRule",
    "FieldEntry",
    "ValidationRegistry",
    # Schema
    "FieldSpec",
    "FormSchema",
    "RuleFactory",
    "RuleSpec",
    "RuleType",
    "apply_schema",
    "load_schema",
    "parse_schema",
    "validate_model",
    # Form
    "FormValidator",
]
