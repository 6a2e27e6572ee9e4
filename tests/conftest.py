import pytest

from route_risk import LocationInput

from helpers import DESTINATION, ORIGIN, FakeResolver


@pytest.fixture
def resolver():
    return FakeResolver({"A": ORIGIN, "B": DESTINATION})


@pytest.fixture
def origin_input():
    return LocationInput(address="A")


@pytest.fixture
def destination_input():
    return LocationInput(address="B")
