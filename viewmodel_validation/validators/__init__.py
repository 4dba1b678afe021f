"""View-model validation engine.

Usage:
    from viewmodel_validation.validators import ValidatorBuilder, ResultsCollector

    collector = ResultsCollector()
    validator = (
        ValidatorBuilder()
        .with_view_model(view_model)
        .with_results_presenter(collector)
        .add_properties("first_name", "email")
        .build()
    )
    if not validator.validate_all():
        # Show collector.results next to the form fields
"""

from viewmodel_validation.validators.adapters import MessageCatalogAdapter, RuleAdapter
from viewmodel_validation.validators.builder import ValidatorBuilder
from viewmodel_validation.validators.engine import Validator
from viewmodel_validation.validators.errors import ConfigurationError, UsageError, ViewModelValidationError
from viewmodel_validation.validators.models import (
    DisplayName,
    ErrorCode,
    PropertyValidationData,
    RuleResult,
    ValidationContext,
)
from viewmodel_validation.validators.presenters import (
    ResultsCollector,
    ResultsPresenter,
    joined_message_presenter,
    null_results_presenter,
)

__all__ = [
    "ValidatorBuilder",
    "Validator",
    "RuleAdapter",
    "MessageCatalogAdapter",
    "ResultsPresenter",
    "ResultsCollector",
    "null_results_presenter",
    "joined_message_presenter",
    "ValidationContext",
    "DisplayName",
    "RuleResult",
    "PropertyValidationData",
    "ErrorCode",
    "ViewModelValidationError",
    "ConfigurationError",
    "UsageError",
]
