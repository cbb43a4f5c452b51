"""Unit tests for the in-process event bus."""

from datetime import UTC, datetime
from unittest.mock import create_autospec

import pytest

from infrastructure.event_bus import ALL_EVENTS, InProcessEventBus
from infrastructure.observability import EventBusProbe
from messaging.domain.events import MessageCreated, MessageDeleted
from shared_kernel.events import DomainEvent, EventDispatcher, EventPublishError


def _created() -> MessageCreated:
    return MessageCreated(
        aggregate_id="M1",
        version=1,
        occurred_at=datetime.now(UTC),
        chat_id="C1",
        author_id="U1",
        content="hello",
    )


def _deleted() -> MessageDeleted:
    now = datetime.now(UTC)
    return MessageDeleted(
        aggregate_id="M1", version=2, occurred_at=now, deleted_by="U1", deleted_at=now
    )


@pytest.fixture
def mock_probe():
    return create_autospec(EventBusProbe, instance=True)


@pytest.fixture
def bus(mock_probe) -> InProcessEventBus:
    return InProcessEventBus(probe=mock_probe)


class Recorder:
    def __init__(self) -> None:
        self.events: list[DomainEvent] = []

    async def __call__(self, event: DomainEvent) -> None:
        self.events.append(event)


class TestSubscription:
    @pytest.mark.asyncio
    async def test_delivers_only_matching_events(self, bus):
        created = Recorder()
        bus.subscribe("message.created", created)

        await bus.publish(_created())
        await bus.publish(_deleted())

        assert [e.event_type for e in created.events] == ["message.created"]

    @pytest.mark.asyncio
    async def test_catch_all_runs_after_specific_handlers(self, bus):
        order: list[str] = []

        async def specific(event):
            order.append("specific")

        async def catch_all(event):
            order.append("all")

        bus.subscribe(ALL_EVENTS, catch_all)
        bus.subscribe("message.created", specific)

        await bus.publish(_created())

        assert order == ["specific", "all"]

    @pytest.mark.asyncio
    async def test_unsubscribe(self, bus):
        recorder = Recorder()
        bus.subscribe("message.created", recorder)
        bus.unsubscribe("message.created", recorder)
        bus.unsubscribe("message.created", recorder)

        await bus.publish(_created())

        assert recorder.events == []

    def test_empty_event_type_is_rejected(self, bus):
        with pytest.raises(ValueError):
            bus.subscribe("", Recorder())

    @pytest.mark.asyncio
    async def test_event_without_handlers_is_delivered(self, bus, mock_probe):
        await bus.publish(_created())

        mock_probe.event_delivered.assert_called_once_with(
            event_type="message.created", aggregate_id="M1", handlers=0
        )


class TestHandlerFailures:
    @pytest.mark.asyncio
    async def test_failure_does_not_stop_other_handlers(self, bus, mock_probe):
        recorder = Recorder()
        error = RuntimeError("handler broke")

        async def failing(event):
            raise error

        bus.subscribe("message.created", failing)
        bus.subscribe("message.created", recorder)

        with pytest.raises(EventPublishError, match="1 of 2 handlers failed") as e:
            await bus.publish(_created())

        assert e.value.__cause__ is error
        assert len(recorder.events) == 1
        mock_probe.handler_failed.assert_called_once()
        mock_probe.event_delivered.assert_not_called()

    @pytest.mark.asyncio
    async def test_dispatcher_absorbs_bus_failures(self, bus):
        """Through the dispatcher, a failing handler never reaches the caller."""

        async def failing(event):
            raise RuntimeError("handler broke")

        bus.subscribe(ALL_EVENTS, failing)
        dispatcher = EventDispatcher(bus)

        delivered = await dispatcher.dispatch([_created()], actor_id="U1")

        assert delivered == []
