"""
Shared fixtures for the rule engine tests.
"""

import pytest

from fluentrules.core.options import reset_options
from sample_models import AddressValidator, OrderValidator, UserValidator


@pytest.fixture(autouse=True)
def fresh_options():
    """Each test starts from options built from the environment."""
    reset_options()
    yield
    reset_options()


@pytest.fixture
def user_validator():
    return UserValidator()


@pytest.fixture
def order_validator():
    return OrderValidator()


@pytest.fixture
def address_validator():
    return AddressValidator()
