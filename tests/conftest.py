"""Shared pytest fixtures for all test suites."""

from collections.abc import Iterator
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from backend.app.main import app
from tests.fakes import FakeCompletionClient


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def fake_llm() -> Iterator[FakeCompletionClient]:
    """Route every endpoint's completion client to a scripted fake.

    Usage:
        def test_something(client, fake_llm):
            fake_llm.script("finance, budget")
            client.post(...)
    """
    fake = FakeCompletionClient()
    with (
        patch("backend.app.api.routes.tag.get_completion_client", return_value=fake),
        patch("backend.app.api.routes.wedding.get_completion_client", return_value=fake),
    ):
        yield fake
