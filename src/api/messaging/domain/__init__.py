"""Domain layer for the Messaging bounded context."""
