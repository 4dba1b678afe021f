"""Shared fixtures for the validation test suite."""

import pytest

from viewmodel_validation.config import Settings
from viewmodel_validation.logging_setup import configure_logging
from viewmodel_validation.validators import ResultsCollector, ValidatorBuilder
from tests.view_models import PersonViewModel, setup_validator_builder


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    configure_logging(Settings(LOG_LEVEL="warning"))


@pytest.fixture
def view_model():
    return PersonViewModel()


@pytest.fixture
def sub_view_model():
    return PersonViewModel()


@pytest.fixture
def collector():
    return ResultsCollector()


@pytest.fixture
def sub_collector():
    return ResultsCollector()


@pytest.fixture
def builder():
    return ValidatorBuilder()


@pytest.fixture
def validator(builder, view_model, collector):
    return setup_validator_builder(builder, view_model, collector).build()
