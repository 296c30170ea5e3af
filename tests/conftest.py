"""Shared fixtures for routedoc tests."""

import pytest

from _sample_app import create_app
from routedoc.routing.router import App


@pytest.fixture
def sample_app() -> App:
    return create_app()
