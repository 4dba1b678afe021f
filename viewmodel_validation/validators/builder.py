"""ValidatorBuilder — configures and builds a Validator for one view-model.

Resolves property names to their declared rules and a getter bound to the
view-model, and checks preconditions before anything is validated. All
configuration mistakes are reported here as ConfigurationError, never later
during validation.
"""

import functools
from typing import Any, Mapping, Optional

import structlog

from viewmodel_validation.validators import discovery, extensions
from viewmodel_validation.validators.adapters import RuleAdapter
from viewmodel_validation.validators.engine import Validator, ValidatorHook
from viewmodel_validation.validators.errors import ConfigurationError
from viewmodel_validation.validators.models import ErrorCode, PropertyValidationData
from viewmodel_validation.validators.presenters import ResultsPresenter

logger = structlog.get_logger()


class ValidatorBuilder:
    """Fluent, single-use builder of a Validator.

    Every configuration method changes and returns the builder itself.

    Args:
        rule_adapter: Applied to each discovered rule when its property is added.
            If None, rules are stored as declared.
        services: Contextual values available to rules through
            ValidationContext.get_service().
        on_build: Called with the new Validator at the end of build().
        on_dispose: Called with the Validator when it is disposed.

    The hooks are normally wired by Validator.create_sub_validator_builder()
    rather than passed by application code.
    """

    def __init__(
        self,
        rule_adapter: Optional[RuleAdapter] = None,
        services: Optional[Mapping[Any, Any]] = None,
        on_build: Optional[ValidatorHook] = None,
        on_dispose: Optional[ValidatorHook] = None,
    ):
        self._rule_adapter = rule_adapter
        self._services = services
        self._on_build = on_build
        self._on_dispose = on_dispose
        self._properties: dict[str, PropertyValidationData] = {}
        self._view_model: Any = None
        self._view_model_type: Optional[type] = None
        self._results_presenter: Optional[ResultsPresenter] = None

    def with_view_model(self, view_model: Any) -> "ValidatorBuilder":
        """Set the view-model to validate. Must be called before add_property().

        Raises:
            ValueError: view_model is None
        """
        if view_model is None:
            raise ValueError("view_model must not be None")

        self._view_model = view_model
        # cached here instead of on every add_property()
        self._view_model_type = type(view_model)
        return self

    def add_property(self, property_name: str) -> "ValidatorBuilder":
        """Register a property for validation.

        Properties that are not registered cannot be passed to
        Validator.validate() and are skipped by Validator.validate_all().

        Args:
            property_name: A public, readable property of the view-model

        Raises:
            ConfigurationError: no view-model set, property already added,
                property not found, property not readable, or its rule
                annotation cannot be evaluated
        """
        if not isinstance(property_name, str):
            raise TypeError(f"property_name must be a str, got {type(property_name).__name__}")

        if self._view_model is None:
            raise ConfigurationError(
                ErrorCode.VIEW_MODEL_MISSING,
                "No view-model has been set. Call with_view_model() before add_property()",
                property_name=property_name,
            )

        type_name = self._view_model_type.__qualname__

        if property_name in self._properties:
            raise ConfigurationError(
                ErrorCode.PROPERTY_ALREADY_ADDED,
                f"Property '{property_name}' has already been added",
                property_name=property_name,
                view_model_type=type_name,
            )

        declared = discovery.resolve_property(self._view_model_type, property_name)
        if declared is None:
            raise ConfigurationError(
                ErrorCode.PROPERTY_NOT_FOUND,
                f"View-model '{type_name}' does not have a property named '{property_name}'",
                property_name=property_name,
                view_model_type=type_name,
            )

        if not declared.readable:
            raise ConfigurationError(
                ErrorCode.PROPERTY_NOT_READABLE,
                f"Property '{property_name}' of '{type_name}' does not have a public getter",
                property_name=property_name,
                view_model_type=type_name,
            )

        if declared.unresolved is not None:
            raise ConfigurationError(
                ErrorCode.RULES_UNRESOLVED,
                f"Rules of property '{property_name}' of '{type_name}' could not be resolved: "
                f"{declared.unresolved}",
                property_name=property_name,
                view_model_type=type_name,
            )

        rules = declared.rules
        if self._rule_adapter is not None:
            rules = tuple(self._rule_adapter.adapt(rule, self._view_model_type) for rule in rules)

        self._properties[property_name] = PropertyValidationData(
            rules=rules,
            getter=functools.partial(getattr, self._view_model, property_name),
            display_name=declared.display_name,
        )

        logger.debug(
            "property_registered",
            property_name=property_name,
            view_model_type=type_name,
            rules=[getattr(rule, "name", type(rule).__name__) for rule in rules],
        )
        return self

    def add_properties(self, *property_names: str) -> "ValidatorBuilder":
        """Register several properties, in order. See add_property()."""
        return extensions.add_properties(self, *property_names)

    def with_view_model_and_all_properties(self, view_model: Any) -> "ValidatorBuilder":
        """Set the view-model and register every property that declares a rule."""
        return extensions.with_view_model_and_all_properties(self, view_model)

    def with_results_presenter(self, results_presenter: ResultsPresenter) -> "ValidatorBuilder":
        """Set the presenter that receives validation results. Must be called before build().

        Further calls replace the previously set presenter.
        """
        self._results_presenter = results_presenter
        return self

    @property
    def properties(self) -> tuple[str, ...]:
        """Names of all properties added so far."""
        return tuple(self._properties)

    @property
    def view_model_type(self) -> Optional[type]:
        return self._view_model_type

    def build(self) -> Validator:
        """Build the Validator.

        Raises:
            ConfigurationError: with_results_presenter() or with_view_model() was never called
        """
        if self._results_presenter is None:
            raise ConfigurationError(
                ErrorCode.RESULTS_PRESENTER_MISSING,
                "No results presenter has been set. Call with_results_presenter() before build()",
            )

        if self._view_model is None:
            raise ConfigurationError(
                ErrorCode.VIEW_MODEL_MISSING,
                "No view-model has been set. Call with_view_model() before build()",
            )

        validator = Validator(
            results_presenter=self._results_presenter,
            properties=self._properties,
            view_model=self._view_model,
            validator_builder_factory=self._sub_builder_factory(),
            on_dispose=self._on_dispose,
            services=self._services,
        )

        logger.debug(
            "validator_built",
            view_model_type=self._view_model_type.__qualname__,
            properties=list(self._properties),
            is_sub_validator=self._on_build is not None,
        )

        if self._on_build is not None:
            self._on_build(validator)

        return validator

    def _sub_builder_factory(self):
        """Factory for builders that share this builder's adapter and services.

        Binds only the adapter and services, not this builder.
        """
        return functools.partial(type(self), self._rule_adapter, self._services)
