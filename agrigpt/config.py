"""Client configuration with environment variable loading.

Pydantic-based configuration for the AgriGPT chat client.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BACKEND_URL = "https://api.alumnx.com/api/agrigpt"
SUPPORTED_LANGUAGES = ("en", "hi", "te")


def _timeout_from_env() -> float:
    return float(os.getenv("AGRIGPT_REQUEST_TIMEOUT", "120"))


class ClientConfig(BaseModel):
    """Configuration for the chat client.

    Attributes:
        backend_url: Base URL of the AgriGPT backend (no trailing slash).
        request_timeout: Seconds to wait for any single backend call.
        default_language: UI language used until the user picks another.
        max_image_bytes: Largest image accepted by the composer.
        storage_secret: Secret used to sign NiceGUI user storage.
    """

    backend_url: str = Field(
        default_factory=lambda: os.getenv("AGRIGPT_BACKEND_URL", DEFAULT_BACKEND_URL),
        validate_default=True,
        description="AgriGPT backend base URL",
    )
    request_timeout: float = Field(
        default_factory=_timeout_from_env,
        gt=0.0,
        description="Timeout in seconds for backend requests",
    )
    default_language: str = Field(
        default_factory=lambda: os.getenv("AGRIGPT_LANGUAGE", "en"),
        validate_default=True,
        description="Two-letter UI language code",
    )
    max_image_bytes: int = Field(
        default=10 * 1024 * 1024,
        ge=1,
        description="Maximum accepted image size in bytes",
    )
    storage_secret: str = Field(
        default_factory=lambda: os.getenv("NICEGUI_STORAGE_SECRET", "agrigpt-chat-secret"),
        description="Secret for NiceGUI browser storage",
    )

    @field_validator("backend_url")
    @classmethod
    def validate_backend_url(cls, v: str) -> str:
        """Require an http(s) URL and strip trailing slashes."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(
                "Backend URL must start with http:// or https://. Check AGRIGPT_BACKEND_URL in .env"
            )
        return v.rstrip("/")

    @field_validator("default_language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Accept only languages the UI has strings for."""
        v = v.strip().lower()
        if v not in SUPPORTED_LANGUAGES:
            raise ValueError(
                f"Unsupported language '{v}'. Expected one of: {', '.join(SUPPORTED_LANGUAGES)}"
            )
        return v


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If an environment value is invalid.
    """
    return ClientConfig()
