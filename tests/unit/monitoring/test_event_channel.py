"""Unit tests for the event channel."""

import logging
from unittest.mock import Mock

import pytest
from dirpoll.models import (
    AddEvent,
    ChangeEvent,
    Entry,
    ErrorEvent,
    EventKind,
    FileChange,
    PathNotFoundError,
    ReadyEvent,
)
from dirpoll.monitoring import EventChannel


def make_entry(modified: int = 1) -> Entry:
    return Entry(name="a.txt", path="/tree/a.txt", modified=modified, created=1)


class TestEventChannel:
    """Test cases for EventChannel."""

    @pytest.fixture
    def channel(self):
        return EventChannel()

    def test_payloads_per_kind(self, channel):
        """Test that each kind delivers only its own payload."""
        on_ready, on_error, on_add, on_change = Mock(), Mock(), Mock(), Mock()
        channel.subscribe(EventKind.READY, on_ready)
        channel.subscribe(EventKind.ERROR, on_error)
        channel.subscribe(EventKind.ADD, on_add)
        channel.subscribe(EventKind.CHANGE, on_change)

        entry = make_entry()
        change = FileChange(updated=make_entry(2), previous=entry)
        error = PathNotFoundError("/tree")

        channel.publish(ReadyEvent())
        channel.publish(ErrorEvent(error))
        channel.publish(AddEvent(entry))
        channel.publish(ChangeEvent(change))

        on_ready.assert_called_once_with()
        on_error.assert_called_once_with(error)
        on_add.assert_called_once_with(entry)
        on_change.assert_called_once_with(change)

    def test_handlers_called_in_registration_order(self, channel):
        """Test dispatch order for several handlers of one kind."""
        calls = []
        channel.subscribe("add", lambda entry: calls.append("first"))
        channel.subscribe("add", lambda entry: calls.append("second"))

        channel.publish(AddEvent(make_entry()))

        assert calls == ["first", "second"]

    def test_failing_handler_does_not_stop_others(self, channel, caplog):
        """Test that a raising handler is logged and skipped."""
        failing = Mock(side_effect=RuntimeError("handler error"))
        succeeding = Mock()
        channel.subscribe("ready", failing)
        channel.subscribe("ready", succeeding)

        with caplog.at_level(logging.ERROR, logger="dirpoll"):
            channel.publish(ReadyEvent())

        succeeding.assert_called_once_with()
        assert "handler error" in caplog.text

    def test_has_subscribers(self, channel):
        """Test subscriber detection per kind."""
        assert channel.has_subscribers(EventKind.ERROR) is False

        channel.subscribe("error", Mock())

        assert channel.has_subscribers("error") is True
        assert channel.has_subscribers(EventKind.ADD) is False

    def test_unsubscribe(self, channel):
        """Test removing a handler."""
        handler = Mock()
        channel.subscribe("add", handler)

        assert channel.unsubscribe("add", handler) is True
        assert channel.unsubscribe("add", handler) is False

        channel.publish(AddEvent(make_entry()))
        handler.assert_not_called()

    def test_unknown_kind_rejected(self, channel):
        """Test that unknown event kinds raise ValueError."""
        with pytest.raises(ValueError):
            channel.subscribe("delete", Mock())

    def test_publish_without_handlers(self, channel):
        """Test that publishing with no handlers is a no-op."""
        channel.publish(AddEvent(make_entry()))
