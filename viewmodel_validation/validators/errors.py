"""Exceptions raised for programmer errors.

Failed validation is never raised; only misconfiguration of a builder or
misuse of a validator is.
"""

from typing import Any, Optional

from viewmodel_validation.validators.models import ErrorCode


class ViewModelValidationError(Exception):
    """Base class for errors raised by the validation engine."""

    def __init__(self, code: ErrorCode, message: str, **details: Any):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    @property
    def property_name(self) -> Optional[str]:
        return self.details.get("property_name")

    @property
    def view_model_type(self) -> Optional[str]:
        return self.details.get("view_model_type")


class ConfigurationError(ViewModelValidationError):
    """A ValidatorBuilder was configured incorrectly."""


class UsageError(ViewModelValidationError):
    """A Validator was used incorrectly (disposed, or unknown property)."""
