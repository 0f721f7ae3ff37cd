"""Pydantic models for chat messages and backend payloads.

Provides type safety and validation for everything that crosses the wire
or is rendered in the conversation.

Models:
    - Message: One entry in the visible conversation
    - ImageFile: An image chosen in the composer
    - Topic: Advisory domain with its suggestions
    - SaveMessageRequest / SaveMessageResponse: ``POST /chats``
    - InferenceRequest / InferenceResponse: answer endpoints
"""

from agrigpt.models.schemas import (
    DEFAULT_IMAGE_PROMPT,
    FALLBACK_ANSWER,
    ImageFile,
    InferenceEndpoint,
    InferenceRequest,
    InferenceResponse,
    Message,
    MessageSource,
    SaveMessageRequest,
    SaveMessageResponse,
    Topic,
    select_endpoint,
)

__all__ = [
    "DEFAULT_IMAGE_PROMPT",
    "FALLBACK_ANSWER",
    "ImageFile",
    "InferenceEndpoint",
    "InferenceRequest",
    "InferenceResponse",
    "Message",
    "MessageSource",
    "SaveMessageRequest",
    "SaveMessageResponse",
    "Topic",
    "select_endpoint",
]
