"""Fixtures for message threads module tests."""

import pytest

from modules.message_threads.service import MessageThreadService


@pytest.fixture
def thread_repository(container):
    return container.message_thread_repository()


@pytest.fixture
def thread_service(thread_repository, mock_dispatcher):
    return MessageThreadService(thread_repository, mock_dispatcher)
