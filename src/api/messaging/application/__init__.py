"""Application layer for the Messaging bounded context."""
