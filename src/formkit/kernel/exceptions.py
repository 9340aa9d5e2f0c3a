"""Unified exception hierarchy for formkit.

Validation *failures* are never raised: rules and validators return them as
values. Exceptions are reserved for programmer errors detected at setup time
and for the submit gate.

Categories:
- ConfigurationException: malformed rules, unknown rule types, bad schemas
- BusinessException: a form that is not submittable when it must be
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class FormKitException(Exception):
    """Base exception for all formkit errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "UNKNOWN_RULE_TYPE").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(FormKitException):
    """A rule, schema or engine was configured incorrectly."""


class UnknownRuleTypeException(ConfigurationException):
    """A declarative rule specification names a type outside the closed set."""


class InvalidRuleParameterException(ConfigurationException):
    """A rule parameter is missing, of the wrong type, or out of range."""


class InvalidPatternException(InvalidRuleParameterException):
    """A regular expression supplied to a pattern rule does not compile."""


class SchemaException(ConfigurationException):
    """A form schema document could not be parsed or validated."""


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(FormKitException):
    """Domain rule violations raised on behalf of a caller."""


class FormValidationException(BusinessException):
    """A form was required to be valid and was not."""
