"""Declarative validation for view-model objects."""

from viewmodel_validation.validators import (
    ConfigurationError,
    ResultsCollector,
    UsageError,
    Validator,
    ValidatorBuilder,
)

__version__ = "0.1.0"

__all__ = [
    "ValidatorBuilder",
    "Validator",
    "ResultsCollector",
    "ConfigurationError",
    "UsageError",
]
