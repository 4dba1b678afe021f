"""Property rules, declared on view-model properties via typing.Annotated."""

from viewmodel_validation.validators.models import DisplayName
from viewmodel_validation.validators.rules.base import Rule
from viewmodel_validation.validators.rules.builtin import (
    Compare,
    CompareToService,
    EmailAddress,
    MaxLength,
    MinLength,
    Range,
    RegularExpression,
    Required,
)

__all__ = [
    "Rule",
    "DisplayName",
    "Required",
    "MaxLength",
    "MinLength",
    "Range",
    "RegularExpression",
    "EmailAddress",
    "Compare",
    "CompareToService",
]
