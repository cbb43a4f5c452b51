"""Ports (repository, read-model and collaborator protocols) for Messaging."""
