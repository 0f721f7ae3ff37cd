"""Conversation logic behind the chat page.

Responsibilities:
    - Topic, history and chat id state for one open page
    - The sequential persist → infer → persist submit pipeline
    - Preview handles for staged images
    - Ports for speech recognition, identity and user notices

Contains no rendering. The ui package builds NiceGUI elements on top.
"""

from agrigpt.chat.attachments import PendingAttachment, PreviewHandleError, PreviewStore
from agrigpt.chat.identity import IdentityProvider, Notifier, StorageIdentity, UiNotifier
from agrigpt.chat.session import ChatSession
from agrigpt.chat.speech import (
    BrowserSpeechRecognizer,
    SpeechRecognizer,
    speech_locale,
)

__all__ = [
    "BrowserSpeechRecognizer",
    "ChatSession",
    "IdentityProvider",
    "Notifier",
    "PendingAttachment",
    "PreviewHandleError",
    "PreviewStore",
    "SpeechRecognizer",
    "StorageIdentity",
    "UiNotifier",
    "speech_locale",
]
