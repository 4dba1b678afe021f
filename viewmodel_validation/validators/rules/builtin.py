"""Built-in rules for common property checks.

Except for Required, every rule treats None as valid so that "optional but
constrained when present" is expressed by omitting Required.
"""

import re
from typing import Any, ClassVar, Optional

from viewmodel_validation.validators.models import RuleResult, ValidationContext
from viewmodel_validation.validators.rules.base import Rule

_MISSING = object()


class Required(Rule):
    """Value must be present: not None, and not a blank string."""

    default_error_message: ClassVar[str] = "The {name} field is required."

    def __init__(self, error_message: Optional[str] = None, allow_empty_strings: bool = False):
        super().__init__(error_message)
        self.allow_empty_strings = allow_empty_strings

    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        if value is None:
            return False
        if isinstance(value, str) and not self.allow_empty_strings:
            return bool(value.strip())
        return True


class MaxLength(Rule):
    """Length of a string or collection must not exceed `length`."""

    default_error_message: ClassVar[str] = "The field {name} must have a maximum length of {length}."

    def __init__(self, length: int, error_message: Optional[str] = None):
        if length < 0:
            raise ValueError(f"MaxLength length must be non-negative, got {length}")
        super().__init__(error_message)
        self.length = length

    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        if value is None:
            return True
        return len(value) <= self.length

    def _format_args(self) -> dict:
        return {"length": self.length}


class MinLength(Rule):
    """Length of a string or collection must be at least `length`."""

    default_error_message: ClassVar[str] = "The field {name} must have a minimum length of {length}."

    def __init__(self, length: int, error_message: Optional[str] = None):
        if length < 0:
            raise ValueError(f"MinLength length must be non-negative, got {length}")
        super().__init__(error_message)
        self.length = length

    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        if value is None:
            return True
        return len(value) >= self.length

    def _format_args(self) -> dict:
        return {"length": self.length}


class Range(Rule):
    """Value must lie within [minimum, maximum] (inclusive)."""

    default_error_message: ClassVar[str] = "The field {name} must be between {minimum} and {maximum}."

    def __init__(self, minimum: Any, maximum: Any, error_message: Optional[str] = None):
        if minimum > maximum:
            raise ValueError(f"Range minimum {minimum!r} is greater than maximum {maximum!r}")
        super().__init__(error_message)
        self.minimum = minimum
        self.maximum = maximum

    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        if value is None:
            return True
        try:
            return self.minimum <= value <= self.maximum
        except TypeError:
            return False

    def _format_args(self) -> dict:
        return {"minimum": self.minimum, "maximum": self.maximum}


class RegularExpression(Rule):
    """String must match `pattern` in full. None and "" are valid."""

    default_error_message: ClassVar[str] = "The field {name} must match the regular expression '{pattern}'."

    def __init__(self, pattern: str, error_message: Optional[str] = None):
        super().__init__(error_message)
        self.pattern = pattern
        self._regex = re.compile(pattern)

    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        if value is None:
            return True
        text = str(value)
        if not text:
            return True
        return self._regex.fullmatch(text) is not None

    def _format_args(self) -> dict:
        return {"pattern": self.pattern}

    def __repr__(self) -> str:
        return f"{self.name}(pattern={self.pattern!r})"


class EmailAddress(Rule):
    """String must contain exactly one '@' with text on both sides."""

    default_error_message: ClassVar[str] = "The {name} field is not a valid e-mail address."

    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        if value is None:
            return True
        if not isinstance(value, str):
            return False
        if "\r" in value or "\n" in value:
            return False
        local, at, domain = value.partition("@")
        return bool(at) and bool(local) and bool(domain) and "@" not in domain


class Compare(Rule):
    """Value must equal another property of the same view-model.

    A missing other property is reported as a failure, not raised.
    """

    default_error_message: ClassVar[str] = "'{name}' and '{other_property}' do not match."
    missing_property_message: ClassVar[str] = "Could not find a property named {other_property}."

    def __init__(self, other_property: str, error_message: Optional[str] = None):
        super().__init__(error_message)
        self.other_property = other_property

    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        other_value = context.get_member_value(self.other_property)
        return value == other_value

    def evaluate(self, value: Any, context: ValidationContext) -> RuleResult:
        try:
            return super().evaluate(value, context)
        except AttributeError:
            return RuleResult.failure(self.missing_property_message.format(other_property=self.other_property))

    def _format_args(self) -> dict:
        return {"other_property": self.other_property}


class CompareToService(Rule):
    """Value must equal a contextual value registered under `service_key`.

    None is valid. Any other value fails when no such service is registered.
    """

    default_error_message: ClassVar[str] = "The field {name} does not match the expected value."

    def __init__(self, service_key: Any = str, error_message: Optional[str] = None):
        super().__init__(error_message)
        self.service_key = service_key

    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        if value is None:
            return True
        provided = context.get_service(self.service_key, _MISSING)
        if provided is _MISSING:
            return False
        return value == provided
