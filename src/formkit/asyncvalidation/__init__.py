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
"""formkit Async Validation — debounced, cancellable, severity-aware validation."""

from formkit.asyncvalidation.builtins import (
    CreditCardValidator,
    EmailValidator,
    PasswordRequirements,
    PasswordValidator,
    PhoneValidator,
    URLValidator,
    UsernameValidator,
)
from formkit.asyncvalidation.state import AsyncValidationSnapshot, AsyncValidationState
from formkit.asyncvalidation.types import AsyncOutcome, ValidationSeverity, aggregate_outcomes
from formkit.asyncvalidation.validator import AsyncValidationChain, AsyncValidator, AsyncValidatorProtocol

__all__ = [
    # Types
    "AsyncOutcome",
    "ValidationSeverity",
    "aggregate_outcomes",
    # Validators
    "AsyncValidationChain",
    "AsyncValidator",
    "AsyncValidatorProtocol",
    # State
    "AsyncValidationSnapshot",
    "AsyncValidationState",
    # Built-ins
    "CreditCardValidator",
    "EmailValidator",
    "PasswordRequirements",
    "PasswordValidator",
    "PhoneValidator",
    "URLValidator",
    "UsernameValidator",
]
