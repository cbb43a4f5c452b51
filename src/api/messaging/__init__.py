"""Messaging bounded context.

Owns chat messages: sending, editing, soft deletion, reactions,
attachments and threads. Chats themselves belong to another context and
are consumed here through a read model.
"""
