"""Base rule — abstract class implementing the Strategy Pattern.

A rule is declared on a view-model property and evaluated by a Validator.
New rules are added without modifying the engine.
"""

import copy
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional

from viewmodel_validation.validators.models import RuleResult, ValidationContext


class Rule(ABC):
    """Abstract base for all property rules.

    Contract:
        - is_valid() is deterministic and side-effect free
        - is_valid() may read the view-model through the context, never write it
        - rule instances are shared by every view-model of a class; treat them
          as immutable and use with_error_message() to derive a variant
    """

    default_error_message: ClassVar[str] = "The {name} field is invalid."

    def __init__(self, error_message: Optional[str] = None):
        self.error_message = error_message

    @property
    def name(self) -> str:
        """Human-readable name for logging."""
        return type(self).__name__

    @abstractmethod
    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        """Check a single value.

        Args:
            value: The value under test
            context: The view-model and property being validated

        Returns:
            True if the value satisfies this rule
        """
        ...

    def evaluate(self, value: Any, context: ValidationContext) -> RuleResult:
        """Run the rule and wrap the outcome in a RuleResult."""
        if self.is_valid(value, context):
            return RuleResult.success()
        return RuleResult.failure(self.format_error_message(context.display_name))

    def format_error_message(self, display_name: str) -> str:
        template = self.error_message if self.error_message is not None else self.default_error_message
        try:
            return template.format(name=display_name, **self._format_args())
        except (KeyError, IndexError, ValueError):
            # Message is not a template (e.g. already localized text with braces)
            return template

    def with_error_message(self, error_message: Optional[str]) -> "Rule":
        """Return a copy of this rule with a different error message."""
        clone = copy.copy(self)
        clone.error_message = error_message
        return clone

    # ── Helper Methods ──

    def _format_args(self) -> dict:
        """Extra placeholders available to message templates."""
        return {}

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in vars(self).items() if v is not None)
        return f"{self.name}({args})"
