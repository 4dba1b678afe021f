"""Validation models — error codes, rule results, rule context, and property registry entries.

Rule failures are data, not exceptions: a rule produces a RuleResult and the
Validator forwards failing messages to the results presenter.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Error codes carried by configuration and usage errors.

    Naming convention: SUBJECT_ISSUE
    """

    # Builder configuration errors
    VIEW_MODEL_MISSING = "VIEW_MODEL_MISSING"
    PROPERTY_NOT_FOUND = "PROPERTY_NOT_FOUND"
    PROPERTY_NOT_READABLE = "PROPERTY_NOT_READABLE"
    PROPERTY_ALREADY_ADDED = "PROPERTY_ALREADY_ADDED"
    RESULTS_PRESENTER_MISSING = "RESULTS_PRESENTER_MISSING"
    RULES_UNRESOLVED = "RULES_UNRESOLVED"

    # Validator usage errors
    VALIDATOR_DISPOSED = "VALIDATOR_DISPOSED"
    PROPERTY_NEVER_ADDED = "PROPERTY_NEVER_ADDED"


class RuleResult(BaseModel):
    """Outcome of evaluating one rule against one value."""

    error_message: Optional[str] = Field(default=None, description="None when the rule passed")

    model_config = {"frozen": True}

    @property
    def passed(self) -> bool:
        return self.error_message is None

    @classmethod
    def success(cls) -> "RuleResult":
        return _SUCCESS

    @classmethod
    def failure(cls, message: str) -> "RuleResult":
        return cls(error_message=message)


_SUCCESS = RuleResult()


@dataclass(frozen=True)
class DisplayName:
    """Annotated marker naming a property in error messages.

        first_name: Annotated[Optional[str], DisplayName("First name"), Required()] = None
    """

    name: str


class ValidationContext:
    """Context handed to every rule evaluation.

    Exposes the view-model being validated, the property under test, and
    externally supplied contextual values (services) for rules that need
    more than the value itself.
    """

    def __init__(
        self,
        view_model: Any,
        member_name: str,
        services: Optional[Mapping[Any, Any]] = None,
        display_name: Optional[str] = None,
    ):
        self.view_model = view_model
        self.member_name = member_name
        self.display_name = display_name or member_name
        self._services = services or {}

    def get_service(self, key: Any, default: Any = None) -> Any:
        """Look up a contextual value registered with the builder."""
        return self._services.get(key, default)

    def get_member_value(self, name: str) -> Any:
        """Read the current value of another property on the view-model.

        Raises:
            AttributeError: the view-model has no such attribute
        """
        return getattr(self.view_model, name)

    def __repr__(self) -> str:
        return (
            f"ValidationContext(view_model_type={type(self.view_model).__name__!r}, "
            f"member_name={self.member_name!r})"
        )


class PropertyValidationData(BaseModel):
    """What a Validator needs to know about one registered property."""

    rules: tuple[Any, ...] = Field(default=(), description="Rules in declaration order")
    getter: Callable[[], Any] = Field(description="Returns the property's current value")
    display_name: Optional[str] = Field(default=None, description="Name used in error messages, if declared")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}
