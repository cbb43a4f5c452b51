"""Aggregates for the Messaging bounded context."""

from messaging.domain.aggregates.message import Message

__all__ = ["Message"]
