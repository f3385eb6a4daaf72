"""Pytest fixtures for the insurance console tests."""

import pytest

from src.api.mock_backend import create_mock_backend_app
from src.integrations.clients.mocks.insurance_backend import InMemoryInsuranceBackend, seed_demo_data
from tests.helpers import FIXED_NOW, FIXED_TODAY, api_for_app


@pytest.fixture
def backend():
    """Empty in-memory backend with a frozen clock."""
    return InMemoryInsuranceBackend(clock=lambda: FIXED_NOW, today=lambda: FIXED_TODAY)


@pytest.fixture
def seeded_backend(backend):
    """4 clients with 3 policies each (policy ids 1-12, premiums ascending with id)."""
    return seed_demo_data(backend)


@pytest.fixture
def api(seeded_backend):
    return api_for_app(create_mock_backend_app(seeded_backend))


@pytest.fixture
def bare_api(seeded_backend):
    return api_for_app(create_mock_backend_app(seeded_backend, envelope=False))
