"""Builder conveniences for registering many properties at once."""

from typing import TYPE_CHECKING, Any

from viewmodel_validation.validators import discovery

if TYPE_CHECKING:
    from viewmodel_validation.validators.builder import ValidatorBuilder


def add_properties(builder: "ValidatorBuilder", *property_names: str) -> "ValidatorBuilder":
    """Register each property in order. Stops at the first ConfigurationError."""
    for property_name in property_names:
        builder.add_property(property_name)
    return builder


def with_view_model_and_all_properties(builder: "ValidatorBuilder", view_model: Any) -> "ValidatorBuilder":
    """Set the view-model and register every public property that declares at least one rule.

    Properties are added in declaration order, base classes first.
    """
    builder.with_view_model(view_model)
    for property_name in discovery.rule_bearing_properties(type(view_model)):
        if property_name not in builder.properties:
            builder.add_property(property_name)
    return builder
