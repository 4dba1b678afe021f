"""Tests for ValidatorBuilder configuration and preconditions."""

import pytest

from viewmodel_validation.validators import (
    ConfigurationError,
    ErrorCode,
    Validator,
    ValidatorBuilder,
    null_results_presenter,
)
from tests.deferred_view_models import CUSTOMER_ERROR, OrderViewModel, QuoteViewModel
from tests.view_models import (
    AccountViewModel,
    AddressViewModel,
    PersonViewModel,
    PinViewModel,
    PROVIDED_STRING_ERROR,
    SettingsFormModel,
)


@pytest.fixture
def prepared_builder(builder, view_model):
    return builder.with_results_presenter(null_results_presenter).with_view_model(view_model)


class TestBuild:
    def test_builds_a_validator_if_everything_is_supplied(self, builder):
        validator = (
            builder
            .with_view_model(object())
            .with_results_presenter(null_results_presenter)
            .build()
        )

        assert isinstance(validator, Validator)

    def test_raises_if_results_presenter_has_not_been_set(self, builder, view_model):
        with pytest.raises(ConfigurationError) as exc_info:
            builder.with_view_model(view_model).build()

        assert exc_info.value.code == ErrorCode.RESULTS_PRESENTER_MISSING

    def test_raises_if_view_model_has_not_been_set(self, builder):
        with pytest.raises(ConfigurationError) as exc_info:
            builder.with_results_presenter(null_results_presenter).build()

        assert exc_info.value.code == ErrorCode.VIEW_MODEL_MISSING

    def test_presenter_can_be_replaced(self, builder, view_model):
        first, second = [], []
        validator = (
            builder
            .with_view_model(view_model)
            .with_results_presenter(lambda name, errors: first.append(name))
            .with_results_presenter(lambda name, errors: second.append(name))
            .add_property("first_name")
            .build()
        )

        validator.validate("first_name", "John")

        assert first == []
        assert second == ["first_name"]

    def test_built_validator_does_not_see_properties_added_afterwards(self, prepared_builder):
        validator = prepared_builder.add_property("first_name").build()
        prepared_builder.add_property("last_name")

        assert list(validator.properties) == ["first_name"]


class TestWithViewModel:
    def test_rejects_none(self, builder):
        with pytest.raises(ValueError):
            builder.with_view_model(None)

    def test_caches_view_model_type(self, builder, view_model):
        builder.with_view_model(view_model)

        assert builder.view_model_type is PersonViewModel

    def test_returns_the_same_builder(self, builder, view_model):
        assert builder.with_view_model(view_model) is builder


class TestAddProperty:
    def test_properties_exposes_added_properties(self, prepared_builder):
        names = (
            prepared_builder
            .add_property("first_name")
            .add_property("last_name")
            .properties
        )

        assert set(names) == {"first_name", "last_name"}

    def test_raises_if_view_model_has_not_been_set(self, builder):
        with pytest.raises(ConfigurationError) as exc_info:
            builder.add_property("first_name")

        assert exc_info.value.code == ErrorCode.VIEW_MODEL_MISSING
        assert "with_view_model()" in exc_info.value.message

    def test_raises_if_non_existent_property_is_added(self, prepared_builder):
        with pytest.raises(ConfigurationError) as exc_info:
            prepared_builder.add_property("unknown")

        error = exc_info.value
        assert error.code == ErrorCode.PROPERTY_NOT_FOUND
        assert error.property_name == "unknown"
        assert error.view_model_type == "PersonViewModel"

    def test_raises_if_method_is_added(self, prepared_builder):
        with pytest.raises(ConfigurationError) as exc_info:
            prepared_builder.add_property("greet")

        assert exc_info.value.code == ErrorCode.PROPERTY_NOT_FOUND

    def test_raises_if_non_public_property_is_added(self, prepared_builder):
        with pytest.raises(ConfigurationError) as exc_info:
            prepared_builder.add_property("_protected")

        assert exc_info.value.code == ErrorCode.PROPERTY_NOT_READABLE
        assert exc_info.value.property_name == "_protected"

    def test_raises_if_write_only_property_is_added(self, prepared_builder):
        with pytest.raises(ConfigurationError) as exc_info:
            prepared_builder.add_property("write_only")

        assert exc_info.value.code == ErrorCode.PROPERTY_NOT_READABLE
        assert "write_only" in str(exc_info.value)

    def test_raises_if_property_is_added_again(self, prepared_builder):
        prepared_builder.add_property("first_name")

        with pytest.raises(ConfigurationError) as exc_info:
            prepared_builder.add_property("first_name")

        assert exc_info.value.code == ErrorCode.PROPERTY_ALREADY_ADDED
        assert prepared_builder.properties == ("first_name",)

    def test_first_registration_survives_duplicate(self, prepared_builder, collector):
        prepared_builder.add_property("first_name")
        with pytest.raises(ConfigurationError):
            prepared_builder.add_property("first_name")

        validator = prepared_builder.with_results_presenter(collector).build()

        assert validator.validate("first_name", None) is False
        assert len(collector.errors_for("first_name")) == 1

    def test_rejects_non_string_name(self, prepared_builder):
        with pytest.raises(TypeError):
            prepared_builder.add_property(None)

    def test_property_without_rules_can_be_added(self, prepared_builder, collector):
        validator = prepared_builder.with_results_presenter(collector).add_property("password").build()

        assert validator.validate("password", None) is True
        assert collector.results == {"password": []}

    def test_getter_reads_current_value(self, prepared_builder, view_model):
        validator = prepared_builder.add_property("first_name").build()
        view_model.first_name = "Ada"

        assert validator.properties["first_name"].getter() == "Ada"

    def test_accepts_property_with_getter(self, builder):
        account = AccountViewModel("bob")
        builder.with_view_model(account).add_property("user_name").add_property("display_name")

        assert builder.properties == ("user_name", "display_name")

    def test_accepts_dataclass_fields(self, builder):
        builder.with_view_model(AddressViewModel()).add_properties("street", "zip_code", "country")

        assert builder.properties == ("street", "zip_code", "country")

    def test_accepts_pydantic_fields(self, builder, collector):
        validator = (
            builder
            .with_view_model(SettingsFormModel())
            .with_results_presenter(collector)
            .add_property("nickname")
            .build()
        )

        assert validator.validate_all() is False
        assert collector.errors_for("nickname") == ["The nickname field is required."]


class TestServices:
    def test_rule_reads_injected_service(self, collector):
        validator = (
            ValidatorBuilder(services={str: "1234"})
            .with_view_model(PinViewModel())
            .with_results_presenter(collector)
            .add_property("pin")
            .build()
        )

        assert validator.validate("pin", "1234") is True
        assert validator.validate("pin", "0000") is False
        assert collector.errors_for("pin") == [PROVIDED_STRING_ERROR]

    def test_sub_builder_inherits_services(self, view_model, sub_collector):
        parent = (
            ValidatorBuilder(services={str: "1234"})
            .with_view_model(view_model)
            .with_results_presenter(null_results_presenter)
            .build()
        )

        child = (
            parent.create_sub_validator_builder()
            .with_view_model(PinViewModel())
            .with_results_presenter(sub_collector)
            .add_property("pin")
            .build()
        )

        assert child.validate("pin", "1234") is True


class TestPostponedAnnotations:
    def test_rules_apply_despite_type_checking_only_import(self, builder, collector):
        validator = (
            builder
            .with_view_model(OrderViewModel())
            .with_results_presenter(collector)
            .add_property("customer")
            .build()
        )

        assert validator.validate("customer", None) is False
        assert collector.errors_for("customer") == [CUSTOMER_ERROR]

    def test_display_name_is_used_in_messages(self, builder, collector):
        validator = (
            builder
            .with_view_model(OrderViewModel())
            .with_results_presenter(collector)
            .add_property("reference")
            .build()
        )

        assert validator.validate("reference", "ORD-1") is False
        assert collector.errors_for("reference") == ["The field Order reference must have a maximum length of 4."]

    def test_raises_if_rule_annotation_cannot_be_evaluated(self, builder):
        builder.with_view_model(QuoteViewModel()).add_property("customer")

        with pytest.raises(ConfigurationError) as exc_info:
            builder.add_property("discount")

        error = exc_info.value
        assert error.code == ErrorCode.RULES_UNRESOLVED
        assert error.property_name == "discount"
        assert error.view_model_type == "QuoteViewModel"
        assert builder.properties == ("customer",)

    def test_all_properties_raises_if_rule_annotation_cannot_be_evaluated(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ValidatorBuilder().with_view_model_and_all_properties(QuoteViewModel())

        assert exc_info.value.code == ErrorCode.RULES_UNRESOLVED
