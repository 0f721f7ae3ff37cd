"""Conversation state and the submit pipeline.

``ChatSession`` owns everything the chat page shows: the active topic, the
message history, the backend chat id and the busy flag. A submission runs
three backend calls strictly in order:

1. persist the user message (``/chats``), learning the chat id
2. ask the inference endpoint chosen by attachment and topic
3. persist the assistant reply under the same chat id

The user message is appended before step 1 and is never rolled back. The
assistant message is appended only after step 3 succeeds. Any failure is
logged, shown to the user and ends the submission; nothing is retried.
"""

import logging
from collections.abc import Callable

from agrigpt.backend.client import BackendClient, BackendError
from agrigpt.chat.identity import IdentityProvider, Notifier
from agrigpt.models.schemas import (
    ImageFile,
    Message,
    MessageSource,
    Topic,
    select_endpoint,
)

logger = logging.getLogger(__name__)

LOGIN_REQUIRED = "Please log in."


class ChatSession:
    """Manages chat state for one open page."""

    def __init__(
        self,
        backend: BackendClient,
        identity: IdentityProvider,
        notifier: Notifier,
        topic: Topic = Topic.CITRUS_CROP,
    ) -> None:
        self._backend = backend
        self._identity = identity
        self._notifier = notifier
        self._reset_listeners: list[Callable[[], None]] = []
        self._change_listeners: list[Callable[[], None]] = []
        self._messages: list[Message] = []
        self.topic: Topic = topic
        self.chat_id: str | None = None
        self.is_submitting: bool = False
        self._generation = 0

    @property
    def messages(self) -> tuple[Message, ...]:
        """Read-only view of the history, oldest first."""
        return tuple(self._messages)

    @property
    def suggestions(self) -> list[str]:
        return self.topic.suggestions

    def on_reset(self, callback: Callable[[], None]) -> None:
        """Register a callback run whenever the conversation is cleared."""
        self._reset_listeners.append(callback)

    def on_change(self, callback: Callable[[], None]) -> None:
        """Register a callback run after history or busy state changes."""
        self._change_listeners.append(callback)

    def _changed(self) -> None:
        for callback in self._change_listeners:
            callback()

    def _append(self, message: Message) -> None:
        self._messages.append(message)
        self._changed()

    def start_new_chat(self) -> None:
        """Clear history, chat id, and the composer draft and attachment.

        A submission still in flight keeps running its backend calls but no
        longer touches this session's history or chat id.
        """
        self._generation += 1
        self._messages.clear()
        self.chat_id = None
        for callback in self._reset_listeners:
            callback()
        self._changed()
        logger.info(f"Started new chat on topic {self.topic.value!r}")

    def switch_topic(self, topic: Topic) -> None:
        """Select ``topic`` and start a fresh conversation on it."""
        self.topic = topic
        self.start_new_chat()

    async def submit(self, text: str | None, attachment: ImageFile | None = None) -> bool:
        """Send one user turn and append the assistant's answer.

        Args:
            text: The user's text; may be empty when an image is attached.
            attachment: Optional image to analyse.

        Returns:
            True if the assistant reply was appended, False if the
            submission was rejected or failed.
        """
        text = (text or "").strip()
        if not text and attachment is None:
            return False
        if self.is_submitting:
            logger.info("Ignoring submission while another is in flight")
            return False

        email = self._identity.email
        if not email:
            self._notifier.notify(LOGIN_REQUIRED, kind="warning")
            return False

        self.is_submitting = True
        generation = self._generation
        topic = self.topic
        self._append(
            Message(
                source=MessageSource.USER,
                text=text,
                image=attachment.to_data_url() if attachment is not None else None,
            )
        )

        try:
            chat_id = await self._backend.save_message(
                email, MessageSource.USER, text, chat_id=self.chat_id
            )
            if self._is_stale(generation):
                return False
            active_chat_id = chat_id or self.chat_id
            if self.chat_id is None:
                self.chat_id = active_chat_id

            endpoint = select_endpoint(topic, attachment is not None)
            logger.info(f"Using endpoint {endpoint.value} for chat {active_chat_id}")
            answer = await self._backend.infer(endpoint, text, attachment)
            if self._is_stale(generation):
                return False

            await self._backend.save_message(
                email, MessageSource.SYSTEM, answer, chat_id=active_chat_id
            )
            if self._is_stale(generation):
                return False
        except BackendError as e:
            logger.exception(f"Submission failed: {e}")
            if generation == self._generation:
                self._notifier.notify(f"Error: {e}")
            return False
        finally:
            self.is_submitting = False
            self._changed()

        self._append(Message(source=MessageSource.SYSTEM, text=answer))
        return True

    def _is_stale(self, generation: int) -> bool:
        """True if the conversation was reset since ``generation`` was taken."""
        if generation == self._generation:
            return False
        logger.info("Dropping reply for a conversation that was reset mid-flight")
        return True
