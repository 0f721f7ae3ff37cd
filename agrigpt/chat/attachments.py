"""Preview handles for images staged in the composer.

A preview handle is the URL the browser uses to show a chosen image before
it is sent. Handles are issued by a ``PreviewStore`` and must be released
exactly once, when the attachment is sent, discarded, or the session resets.
"""

import logging
import uuid

from pydantic import BaseModel, ConfigDict

from agrigpt.models.schemas import ImageFile

logger = logging.getLogger(__name__)


class PreviewHandleError(Exception):
    """Raised when a preview handle is released twice or was never issued."""

    pass


class PendingAttachment(BaseModel):
    """An image chosen in the composer but not yet sent.

    Attributes:
        preview_url: Handle issued by the PreviewStore.
        file: The image itself.
    """

    model_config = ConfigDict(frozen=True)

    preview_url: str
    file: ImageFile


class PreviewStore:
    """Issues and releases preview handles for composer attachments.

    Handles are data URLs tagged with a per-issue fragment so two previews of
    the same bytes are still distinct handles. The store tracks which handles
    are live, which lets tests and diagnostics check nothing leaks.
    """

    def __init__(self) -> None:
        self._live: set[str] = set()

    @property
    def live_count(self) -> int:
        return len(self._live)

    def is_live(self, url: str) -> bool:
        return url in self._live

    def create(self, file: ImageFile) -> str:
        """Issue a new preview handle for ``file``."""
        url = f"{file.to_data_url()}#preview-{uuid.uuid4().hex[:12]}"
        self._live.add(url)
        logger.debug(f"Issued preview handle for {file.name} ({file.size} bytes)")
        return url

    def release(self, url: str) -> None:
        """Release a handle previously returned by ``create``.

        Raises:
            PreviewHandleError: If the handle is not live.
        """
        if url not in self._live:
            raise PreviewHandleError("Preview handle released twice or never issued")
        self._live.discard(url)
