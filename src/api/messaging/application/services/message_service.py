"""Message application service.

Orchestrates message commands. Every command follows the same sequence:

1. Fail fast if the request was cancelled or its deadline passed
2. Validate the command (failures are prefixed "validation failed")
3. Load the message (missing -> MessageNotFoundError)
4. Check preconditions (deleted, authorship, chat membership)
5. Invoke the aggregate method
6. Save once
7. Publish the recorded events, best effort
"""

from __future__ import annotations

from messaging.application.commands import (
    AddAttachmentCommand,
    AddReactionCommand,
    DeleteMessageCommand,
    EditMessageCommand,
    RemoveReactionCommand,
    SendMessageCommand,
)
from messaging.application.observability import (
    DefaultMessageServiceProbe,
    MessageServiceProbe,
)
from messaging.application.post_send import PostSendQueue
from messaging.domain.aggregates import Message
from messaging.domain.value_objects import MAX_CONTENT_LENGTH, MAX_FILE_SIZE, MessageId
from messaging.ports.chats import IChatReadModelRepository
from messaging.ports.exceptions import (
    ChatNotFoundError,
    ContentTooLongError,
    EmptyContentError,
    InvalidEmojiError,
    InvalidFileNameError,
    InvalidFileSizeError,
    InvalidMimeTypeError,
    MessageDeletedError,
    MessageNotFoundError,
    NotAuthorError,
    NotChatParticipantError,
    ParentInDifferentChatError,
    ParentNotFoundError,
)
from messaging.ports.repositories import IMessageRepository
from messaging.ports.tags import PostSendJob
from shared_kernel.errors import DomainError, InvalidInputError, operation_context
from shared_kernel.events import EventDispatcher, IEventPublisher
from shared_kernel.events.observability import EventDispatchProbe
from shared_kernel.execution_context import ensure_active
from shared_kernel.observability_context import ObservationContext
from shared_kernel.validation import required_id


def _validate_content(content: str) -> None:
    if not content:
        raise EmptyContentError()
    if len(content) > MAX_CONTENT_LENGTH:
        raise ContentTooLongError(
            f"message content exceeds {MAX_CONTENT_LENGTH} characters"
        )


class MessageService:
    """Application service for message commands.

    Chat membership is checked against the chat read model; all other
    authorization is authorship, enforced by the Message aggregate.
    """

    def __init__(
        self,
        message_repository: IMessageRepository,
        chat_repository: IChatReadModelRepository,
        event_publisher: IEventPublisher,
        post_send_queue: PostSendQueue | None = None,
        probe: MessageServiceProbe | None = None,
        dispatch_probe: EventDispatchProbe | None = None,
    ):
        """Initialize MessageService with dependencies.

        Args:
            message_repository: Repository for message persistence
            chat_repository: Read model of chats and their participants
            event_publisher: Publisher for message events
            post_send_queue: Queue for tag processing; None disables it
            probe: Optional domain probe for observability
            dispatch_probe: Optional probe for event publication outcomes
        """
        self._message_repository = message_repository
        self._chat_repository = chat_repository
        self._dispatcher = EventDispatcher(event_publisher, probe=dispatch_probe)
        self._post_send_queue = post_send_queue
        self._probe = probe or DefaultMessageServiceProbe()

    def _observed_probe(self) -> MessageServiceProbe:
        context = ensure_active()
        return self._probe.with_context(
            ObservationContext.from_execution_context(context)
        )

    async def _load(self, message_id: MessageId) -> Message:
        with operation_context("failed to load message"):
            message = await self._message_repository.get_by_id(message_id)
        if message is None:
            raise MessageNotFoundError()
        return message

    async def _save(self, message: Message) -> None:
        with operation_context("failed to save message"):
            await self._message_repository.save(message)

    async def send_message(self, command: SendMessageCommand) -> Message:
        """Post a new message, optionally as a thread reply.

        Business rules:
        - The author must be a participant of the chat
        - A reply's parent must exist and belong to the same chat

        Args:
            command: The message to send

        Returns:
            The stored Message

        Raises:
            InvalidInputError: If the command is invalid (including
                EmptyContentError and ContentTooLongError)
            ChatNotFoundError: If the chat does not exist
            NotChatParticipantError: If the author is not a participant
            ParentNotFoundError: If the parent message does not exist
            ParentInDifferentChatError: If the parent is in another chat
        """
        probe = self._observed_probe()
        try:
            try:
                required_id("chat_id", command.chat_id)
                _validate_content(command.content)
                required_id("author_id", command.author_id)
            except InvalidInputError as e:
                raise e.with_context("validation failed")

            with operation_context("failed to load chat"):
                chat = await self._chat_repository.get_by_id(command.chat_id)
            if chat is None:
                raise ChatNotFoundError()
            if not chat.has_participant(command.author_id):
                raise NotChatParticipantError()

            if command.parent_message_id is not None:
                with operation_context("failed to load parent message"):
                    parent = await self._message_repository.get_by_id(
                        command.parent_message_id
                    )
                if parent is None:
                    raise ParentNotFoundError()
                if parent.chat_id != command.chat_id:
                    raise ParentInDifferentChatError()

            message = Message.create(
                chat_id=command.chat_id,
                author_id=command.author_id,
                content=command.content,
                parent_message_id=command.parent_message_id,
            )
            await self._save(message)
        except DomainError as e:
            probe.operation_failed(operation="send_message", error=str(e))
            raise

        await self._dispatcher.dispatch(
            message.collect_events(), actor_id=command.author_id.value
        )
        probe.message_sent(
            message_id=message.id.value,
            chat_id=message.chat_id.value,
            author_id=message.author_id.value,
            is_reply=message.is_reply(),
        )

        if self._post_send_queue is not None:
            self._post_send_queue.offer(
                PostSendJob(
                    message_id=message.id.value,
                    chat_id=message.chat_id.value,
                    chat_type=chat.chat_type.value,
                    author_id=message.author_id.value,
                    content=message.content,
                )
            )

        return message

    async def edit_message(self, command: EditMessageCommand) -> Message:
        """Replace a message's content. Only the author may edit.

        Raises:
            InvalidInputError: If the command is invalid
            MessageNotFoundError: If the message does not exist
            MessageDeletedError: If the message is deleted
            NotAuthorError: If the editor is not the author
        """
        probe = self._observed_probe()
        try:
            try:
                required_id("message_id", command.message_id)
                _validate_content(command.content)
                required_id("editor_id", command.editor_id)
            except InvalidInputError as e:
                raise e.with_context("validation failed")

            message = await self._load(command.message_id)
            if message.is_deleted:
                raise MessageDeletedError()

            message.edit_content(command.content, command.editor_id)
            await self._save(message)
        except DomainError as e:
            probe.operation_failed(
                operation="edit_message",
                error=str(e),
                message_id=command.message_id.value if command.message_id else None,
            )
            raise

        await self._dispatcher.dispatch(
            message.collect_events(), actor_id=command.editor_id.value
        )
        probe.message_edited(
            message_id=message.id.value, editor_id=command.editor_id.value
        )
        return message

    async def delete_message(self, command: DeleteMessageCommand) -> Message:
        """Soft-delete a message. Only the author may delete.

        Raises:
            InvalidInputError: If the command is invalid
            MessageNotFoundError: If the message does not exist
            MessageDeletedError: If the message is already deleted
            NotAuthorError: If the deleter is not the author
        """
        probe = self._observed_probe()
        try:
            try:
                required_id("message_id", command.message_id)
                required_id("deleter_id", command.deleter_id)
            except InvalidInputError as e:
                raise e.with_context("validation failed")

            message = await self._load(command.message_id)
            message.delete(command.deleter_id)
            await self._save(message)
        except DomainError as e:
            probe.operation_failed(
                operation="delete_message",
                error=str(e),
                message_id=command.message_id.value if command.message_id else None,
            )
            raise

        await self._dispatcher.dispatch(
            message.collect_events(), actor_id=command.deleter_id.value
        )
        probe.message_deleted(
            message_id=message.id.value, deleter_id=command.deleter_id.value
        )
        return message

    async def add_reaction(self, command: AddReactionCommand) -> Message:
        """Add an emoji reaction. Any user may react to a live message.

        Raises:
            InvalidInputError: If the command is invalid (including
                InvalidEmojiError)
            MessageNotFoundError: If the message does not exist
            MessageDeletedError: If the message is deleted
            ReactionAlreadyExistsError: If the user already used this emoji
        """
        probe = self._observed_probe()
        try:
            try:
                required_id("message_id", command.message_id)
                required_id("user_id", command.user_id)
                if not command.emoji_code:
                    raise InvalidEmojiError()
            except InvalidInputError as e:
                raise e.with_context("validation failed")

            message = await self._load(command.message_id)
            if message.is_deleted:
                raise MessageDeletedError()

            message.add_reaction(command.user_id, command.emoji_code)
            await self._save(message)
        except DomainError as e:
            probe.operation_failed(
                operation="add_reaction",
                error=str(e),
                message_id=command.message_id.value if command.message_id else None,
            )
            raise

        await self._dispatcher.dispatch(
            message.collect_events(), actor_id=command.user_id.value
        )
        probe.reaction_added(
            message_id=message.id.value,
            user_id=command.user_id.value,
            emoji_code=command.emoji_code,
        )
        return message

    async def remove_reaction(self, command: RemoveReactionCommand) -> Message:
        """Remove the caller's reaction.

        Removal is allowed on deleted messages. The caller's identity is
        command.user_id, which the transport binds to the authenticated user.

        Raises:
            InvalidInputError: If the command is invalid
            MessageNotFoundError: If the message does not exist
            ReactionNotFoundError: If the user has no such reaction
        """
        probe = self._observed_probe()
        try:
            try:
                required_id("message_id", command.message_id)
                required_id("user_id", command.user_id)
                if not command.emoji_code:
                    raise InvalidEmojiError()
            except InvalidInputError as e:
                raise e.with_context("validation failed")

            message = await self._load(command.message_id)
            message.remove_reaction(command.user_id, command.emoji_code)
            await self._save(message)
        except DomainError as e:
            probe.operation_failed(
                operation="remove_reaction",
                error=str(e),
                message_id=command.message_id.value if command.message_id else None,
            )
            raise

        await self._dispatcher.dispatch(
            message.collect_events(), actor_id=command.user_id.value
        )
        probe.reaction_removed(
            message_id=message.id.value,
            user_id=command.user_id.value,
            emoji_code=command.emoji_code,
        )
        return message

    async def add_attachment(self, command: AddAttachmentCommand) -> Message:
        """Attach an uploaded file. Only the author may attach.

        Raises:
            InvalidInputError: If the command is invalid (including
                InvalidFileNameError, InvalidMimeTypeError and
                InvalidFileSizeError)
            MessageNotFoundError: If the message does not exist
            MessageDeletedError: If the message is deleted
            NotAuthorError: If the user is not the author
        """
        probe = self._observed_probe()
        try:
            try:
                required_id("message_id", command.message_id)
                required_id("user_id", command.user_id)
                required_id("file_id", command.file_id)
                if not command.file_name:
                    raise InvalidFileNameError()
                if not command.mime_type:
                    raise InvalidMimeTypeError()
                if command.file_size <= 0 or command.file_size > MAX_FILE_SIZE:
                    raise InvalidFileSizeError(
                        f"file size must be between 1 and {MAX_FILE_SIZE} bytes"
                    )
            except InvalidInputError as e:
                raise e.with_context("validation failed")

            message = await self._load(command.message_id)
            if message.is_deleted:
                raise MessageDeletedError()
            if not message.can_be_edited_by(command.user_id):
                raise NotAuthorError()

            message.add_attachment(
                file_id=command.file_id,
                file_name=command.file_name,
                file_size=command.file_size,
                mime_type=command.mime_type,
            )
            await self._save(message)
        except DomainError as e:
            probe.operation_failed(
                operation="add_attachment",
                error=str(e),
                message_id=command.message_id.value if command.message_id else None,
            )
            raise

        await self._dispatcher.dispatch(
            message.collect_events(), actor_id=command.user_id.value
        )
        probe.attachment_added(
            message_id=message.id.value,
            user_id=command.user_id.value,
            file_id=command.file_id.value,
        )
        return message
