"""Fixtures for integration tests.

Each test gets a fully wired application backed by its own in-memory
database.
"""

import pytest
from fastapi.testclient import TestClient

from server.server import create_app


@pytest.fixture
def app(container):
    return create_app(container=container)


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client
