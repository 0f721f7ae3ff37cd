import base64
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_IMAGE_PROMPT = "What disease does this crop have? and how can I treat it?"
FALLBACK_ANSWER = "Message processed."


class MessageSource(str, Enum):
    """Who authored a chat message."""

    USER = "user"
    SYSTEM = "system"


class Topic(str, Enum):
    """Advisory domain selected by the user."""

    CITRUS_CROP = "Citrus Crop"
    GOVERNMENT_SCHEMES = "Government Schemes"

    @property
    def accepts_images(self) -> bool:
        """Whether the composer offers photo capture for this topic."""
        return self is Topic.CITRUS_CROP

    @property
    def icon(self) -> str:
        return TOPIC_ICONS[self]

    @property
    def suggestions(self) -> list[str]:
        return list(TOPIC_SUGGESTIONS[self])

    @classmethod
    def parse(cls, value: str | None) -> "Topic | None":
        """Return the topic named by ``value``, or None if it names none."""
        if not value:
            return None
        for topic in cls:
            if topic.value.lower() == value.strip().lower():
                return topic
        return None


TOPIC_ICONS: dict[Topic, str] = {
    Topic.CITRUS_CROP: "🍊",
    Topic.GOVERNMENT_SCHEMES: "🏛️",
}

TOPIC_SUGGESTIONS: dict[Topic, tuple[str, ...]] = {
    Topic.CITRUS_CROP: (
        "Help me identify citrus disease",
        "Best fertilizer for lemon trees",
        "How to control aphids?",
    ),
    Topic.GOVERNMENT_SCHEMES: (
        "Show schemes for orange farmers",
        "PM-KISAN eligibility",
        "Crop insurance options",
    ),
}


class InferenceEndpoint(str, Enum):
    """Backend paths that produce an assistant answer."""

    CONSULTANT = "/ask-consultant"
    GOVERNMENT_SCHEMES = "/query-government-schemes"
    IMAGE = "/ask-with-image"


def select_endpoint(topic: Topic, has_attachment: bool) -> InferenceEndpoint:
    """Pick the inference endpoint for a submission.

    An attached image always goes to image analysis, whatever the topic.
    Text goes to the schemes endpoint for Government Schemes and to the
    consultant otherwise.
    """
    if has_attachment:
        return InferenceEndpoint.IMAGE
    if topic is Topic.GOVERNMENT_SCHEMES:
        return InferenceEndpoint.GOVERNMENT_SCHEMES
    return InferenceEndpoint.CONSULTANT


def utc_timestamp() -> str:
    return datetime.now(UTC).isoformat()


class ImageFile(BaseModel):
    """An image chosen by the user, held in memory until sent.

    Attributes:
        name: Original filename.
        content: Raw image bytes.
        content_type: MIME type reported by the browser.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)

    def to_data_url(self) -> str:
        """Encode the image as a ``data:`` URL the browser can render."""
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"


class Message(BaseModel):
    """A single message shown in the conversation.

    Attributes:
        source: Who wrote the message.
        text: Message body (may be empty for an image-only user message).
        image: Renderable image URL for user uploads.
        timestamp: ISO-8601 creation time.
    """

    model_config = ConfigDict(frozen=True)

    source: MessageSource
    text: str
    image: str | None = None
    timestamp: str = Field(default_factory=utc_timestamp)

    @property
    def is_user(self) -> bool:
        return self.source is MessageSource.USER


class SaveMessageRequest(BaseModel):
    """Body of ``POST /chats``."""

    model_config = ConfigDict(populate_by_name=True)

    email: str
    message_source: MessageSource = Field(..., alias="messageSource")
    message: str
    chat_id: str | None = Field(None, alias="chatId")

    def to_payload(self) -> dict[str, str]:
        """Serialize with wire names, leaving out an unset chat id."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SaveMessageResponse(BaseModel):
    """Response of ``POST /chats``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    chat_id: str | None = Field(None, alias="chatId")

    @field_validator("chat_id", mode="before")
    @classmethod
    def stringify_numeric_id(cls, v: object) -> object:
        """Backends with integer keys send ``chatId`` as a number."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class InferenceRequest(BaseModel):
    """JSON body of the text inference endpoints."""

    query: str


class InferenceResponse(BaseModel):
    """Answer returned by any inference endpoint.

    Backends disagree on the field name, so both ``answer`` and
    ``response`` are accepted.
    """

    model_config = ConfigDict(extra="ignore")

    answer: str | None = None
    response: str | None = None

    @property
    def text(self) -> str:
        return self.answer or self.response or FALLBACK_ANSWER
