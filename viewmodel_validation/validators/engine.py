"""Validator — evaluates property rules and reports results to a presenter.

This is the runtime half of the engine. Instances are produced by
ValidatorBuilder.build(), never constructed directly by application code.

Usage:
    validator = (
        ValidatorBuilder()
        .with_view_model(view_model)
        .with_results_presenter(show_errors)
        .add_property("first_name")
        .build()
    )
    validator.validate("first_name", user_input)   # single field
    if validator.validate_all():                    # whole tree
        save(view_model)
"""

import time
import weakref
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional

import structlog

from viewmodel_validation.validators.errors import UsageError
from viewmodel_validation.validators.models import ErrorCode, PropertyValidationData, ValidationContext
from viewmodel_validation.validators.presenters import ResultsPresenter

if TYPE_CHECKING:
    from viewmodel_validation.validators.builder import ValidatorBuilder

logger = structlog.get_logger()

# Called with a validator right after it is built / right after it is disposed
ValidatorHook = Callable[["Validator"], None]

# Produces a builder whose validators report back through the given hooks
ValidatorBuilderFactory = Callable[..., "ValidatorBuilder"]


class Validator:
    """Validates the registered properties of one view-model.

    Lifecycle:
        Active -> Disposed (one way). Every public operation except dispose()
        raises UsageError once disposed.

    Ownership:
        A validator owns the sub-validators built from its
        create_sub_validator_builder(). A sub-validator only holds a detach
        hook, not its parent.
    """

    def __init__(
        self,
        results_presenter: ResultsPresenter,
        properties: Mapping[str, PropertyValidationData],
        view_model: Any,
        validator_builder_factory: ValidatorBuilderFactory,
        on_dispose: Optional[ValidatorHook] = None,
        services: Optional[Mapping[Any, Any]] = None,
    ):
        self._results_presenter = results_presenter
        self._properties = MappingProxyType(dict(properties))
        self._view_model = view_model
        self._validator_builder_factory = validator_builder_factory
        self._on_dispose = on_dispose
        self._services = services
        self._sub_validators: list[Validator] = []
        self._disposed = False

    # ── Introspection ──

    @property
    def view_model(self) -> Any:
        return self._view_model

    @property
    def properties(self) -> Mapping[str, PropertyValidationData]:
        return self._properties

    @property
    def sub_validators(self) -> tuple["Validator", ...]:
        return tuple(self._sub_validators)

    @property
    def disposed(self) -> bool:
        return self._disposed

    # ── Validation ──

    def validate(self, property_name: str, value: Any) -> bool:
        """Validate `value` against the rules of `property_name`.

        The results presenter is always called for the property, with an
        empty list when validation passes.

        Args:
            property_name: A property registered on the builder
            value: The candidate value, e.g. raw user input

        Returns:
            True if no rule failed

        Raises:
            UsageError: the validator is disposed, or the property was never added
        """
        self._ensure_not_disposed()
        try:
            data = self._properties[property_name]
        except KeyError:
            raise UsageError(
                ErrorCode.PROPERTY_NEVER_ADDED,
                f"Property '{property_name}' was never added to this validator",
                property_name=property_name,
                view_model_type=type(self._view_model).__name__,
            ) from None

        return self._validate(property_name, value, data)

    def validate_all(self) -> bool:
        """Validate every registered property with its current value, then every sub-validator.

        Nothing short-circuits: each property and each sub-validator is
        evaluated so that every presenter receives its results.

        Returns:
            True if all properties and all attached sub-validators passed
        """
        self._ensure_not_disposed()
        start_time = time.perf_counter()

        all_valid = True
        for property_name, data in self._properties.items():
            all_valid &= self._validate(property_name, data.getter(), data)

        for sub_validator in list(self._sub_validators):
            all_valid &= sub_validator.validate_all()

        logger.debug(
            "validate_all_complete",
            view_model_type=type(self._view_model).__name__,
            passed=all_valid,
            property_count=len(self._properties),
            sub_validator_count=len(self._sub_validators),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return all_valid

    def _validate(self, property_name: str, value: Any, data: PropertyValidationData) -> bool:
        context = ValidationContext(self._view_model, property_name, self._services, data.display_name)
        errors = []
        for rule in data.rules:
            result = rule.evaluate(value, context)
            if not result.passed:
                errors.append(result.error_message)

        self._results_presenter(property_name, errors)

        logger.debug(
            "property_validated",
            property_name=property_name,
            rule_count=len(data.rules),
            error_count=len(errors),
        )
        return not errors

    # ── Sub-validators ──

    def create_sub_validator_builder(self) -> "ValidatorBuilder":
        """Create a builder whose validator will be folded into this one's validate_all().

        The sub-validator is attached when built and detached when disposed.

        Raises:
            UsageError: this validator is disposed
        """
        self._ensure_not_disposed()
        parent_ref = weakref.ref(self)

        def attach(sub_validator: "Validator") -> None:
            parent = parent_ref()
            if parent is not None:
                parent._sub_validators.append(sub_validator)
                logger.debug("sub_validator_attached", sub_validator_count=len(parent._sub_validators))

        def detach(sub_validator: "Validator") -> None:
            parent = parent_ref()
            if parent is not None and sub_validator in parent._sub_validators:
                parent._sub_validators.remove(sub_validator)
                logger.debug("sub_validator_detached", sub_validator_count=len(parent._sub_validators))

        return self._validator_builder_factory(on_build=attach, on_dispose=detach)

    # ── Disposal ──

    def dispose(self) -> None:
        """Mark this validator unusable and detach it from its parent.

        Sub-validators are not disposed. Calling dispose() again does nothing.
        """
        if self._disposed:
            return
        self._disposed = True

        on_dispose, self._on_dispose = self._on_dispose, None
        if on_dispose is not None:
            on_dispose(self)

        logger.debug("validator_disposed", view_model_type=type(self._view_model).__name__)

    def __enter__(self) -> "Validator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    def _ensure_not_disposed(self) -> None:
        if self._disposed:
            raise UsageError(
                ErrorCode.VALIDATOR_DISPOSED,
                "Cannot use a disposed validator",
                view_model_type=type(self._view_model).__name__,
            )

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return (
            f"Validator(view_model_type={type(self._view_model).__name__!r}, "
            f"properties={list(self._properties)!r}, "
            f"sub_validators={len(self._sub_validators)}, {state})"
        )
