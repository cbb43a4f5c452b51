"""Unit test fixtures shared across bounded contexts."""

import pytest

from shared_kernel.identifiers import UserId
from tests.unit.fakes import (
    FakeIdentityProviderClient,
    InMemoryChatReadModelRepository,
    InMemoryMessageRepository,
    InMemoryWorkspaceRepository,
    RecordingEventPublisher,
)


@pytest.fixture
def user_1() -> UserId:
    return UserId("U1")


@pytest.fixture
def user_2() -> UserId:
    return UserId("U2")


@pytest.fixture
def message_repository() -> InMemoryMessageRepository:
    return InMemoryMessageRepository()


@pytest.fixture
def chat_repository() -> InMemoryChatReadModelRepository:
    return InMemoryChatReadModelRepository()


@pytest.fixture
def workspace_repository() -> InMemoryWorkspaceRepository:
    return InMemoryWorkspaceRepository()


@pytest.fixture
def identity_client() -> FakeIdentityProviderClient:
    return FakeIdentityProviderClient()


@pytest.fixture
def event_publisher() -> RecordingEventPublisher:
    return RecordingEventPublisher()
