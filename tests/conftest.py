"""
Shared pytest fixtures for bdayleft tests.

This module provides common fixtures used across all test files, including:
- Time freezing utilities
- Person and calculator factories
- A click CliRunner
"""

import pytest
from click.testing import CliRunner
from freezegun import freeze_time

from bdayleft.bdayleft_env import BdayleftConfig
from bdayleft.calculator import BirthdayCalculator
from bdayleft.person import Person
from bdayleft.shared import set_verbose

NEW_YORK = "America/New_York"


@pytest.fixture(autouse=True)
def quiet_logging():
    """Diagnostics are module state; make sure no test leaks --verbose."""
    set_verbose(False)
    yield
    set_verbose(False)


@pytest.fixture
def frozen_time():
    """
    Freezes time to 2024-06-15 14:00:00 UTC, which is 10:00 in New York.

    Usage:
        def test_something(frozen_time):
            calc = BirthdayCalculator.create(person)  # reference is "now"
    """
    with freeze_time("2024-06-15 14:00:00") as frozen:
        yield frozen


@pytest.fixture
def freeze_at():
    """
    Returns a function that freezes time to a specific UTC datetime.

    Usage:
        def test_something(freeze_at):
            with freeze_at("2024-06-16 04:00:00"):
                ...
    """
    return freeze_time


@pytest.fixture
def person_factory():
    """
    Provides a factory for Person instances, defaulting to someone born
    1990-06-15 in New York.
    """

    def _create(
        name: str = "Alice",
        birth_date: str = "1990-06-15",
        time_zone: str = NEW_YORK,
        config: BdayleftConfig | None = None,
    ) -> Person:
        return Person.create(name, birth_date, time_zone, config)

    return _create


@pytest.fixture
def alice(person_factory):
    return person_factory()


@pytest.fixture
def calculator_factory(alice):
    """
    Provides a factory for BirthdayCalculator instances for ``alice`` (or
    a given person) at a reference time string.
    """

    def _create(reference_time: str, person: Person | None = None):
        return BirthdayCalculator.create(person or alice, reference_time)

    return _create


@pytest.fixture
def runner():
    return CliRunner()
