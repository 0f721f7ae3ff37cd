"""HTTPX client for the AgriGPT backend.

Wraps the four backend endpoints used by the chat page: message
persistence (``/chats``) and the three answer endpoints. Every failure
(non-success status, connection error, malformed body) surfaces as a
``BackendError`` so callers have a single exception to handle.
"""

import logging

import httpx
from pydantic import ValidationError

from agrigpt.config import ClientConfig, get_client_config
from agrigpt.models.schemas import (
    DEFAULT_IMAGE_PROMPT,
    ImageFile,
    InferenceEndpoint,
    InferenceRequest,
    InferenceResponse,
    MessageSource,
    SaveMessageRequest,
    SaveMessageResponse,
)

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """Raised when a backend call does not succeed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BackendClient:
    """Async client for the AgriGPT backend.

    A fresh ``httpx.AsyncClient`` is opened per call. Pass ``transport`` to
    route requests somewhere other than the network (tests use
    ``httpx.MockTransport``).
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or get_client_config()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._config.backend_url,
            timeout=self._config.request_timeout,
            transport=self._transport,
        )

    async def _post(self, path: str, **kwargs) -> dict:
        """POST to ``path`` and return the decoded JSON body.

        Raises:
            BackendError: On connection failure, non-2xx status, or a body
                that is not a JSON object.
        """
        async with self._client() as client:
            try:
                response = await client.post(path, **kwargs)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise BackendError(
                    f"{path} failed with HTTP {e.response.status_code}",
                    status_code=e.response.status_code,
                ) from e
            except httpx.RequestError as e:
                raise BackendError(f"Connection failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise BackendError(f"{path} returned invalid JSON") from e
        if not isinstance(data, dict):
            raise BackendError(f"{path} returned unexpected payload")
        return data

    async def save_message(
        self,
        email: str,
        source: MessageSource,
        message: str,
        chat_id: str | None = None,
    ) -> str | None:
        """Persist one message and return the chat id the backend assigned.

        Args:
            email: Signed-in user's email.
            source: Author of the message.
            message: Message text.
            chat_id: Existing chat to append to, if any.

        Returns:
            The ``chatId`` from the response, or None if the backend sent none.
        """
        request = SaveMessageRequest(
            email=email, message_source=source, message=message, chat_id=chat_id
        )
        data = await self._post("/chats", json=request.to_payload())
        try:
            return SaveMessageResponse.model_validate(data).chat_id
        except ValidationError as e:
            raise BackendError("/chats returned unexpected payload") from e

    async def ask(self, endpoint: InferenceEndpoint, query: str) -> str:
        """Send a text query to one of the JSON answer endpoints."""
        if endpoint is InferenceEndpoint.IMAGE:
            raise ValueError("Image endpoint requires ask_with_image()")
        data = await self._post(endpoint.value, json=InferenceRequest(query=query).model_dump())
        return self._answer_from(endpoint, data)

    async def ask_with_image(self, image: ImageFile, query: str = "") -> str:
        """Send an image and question as multipart form data.

        An empty query is replaced by the default disease-diagnosis prompt.
        """
        endpoint = InferenceEndpoint.IMAGE
        data = await self._post(
            endpoint.value,
            files={"file": (image.name, image.content, image.content_type)},
            data={"query": query or DEFAULT_IMAGE_PROMPT},
        )
        return self._answer_from(endpoint, data)

    async def infer(
        self,
        endpoint: InferenceEndpoint,
        query: str,
        image: ImageFile | None = None,
    ) -> str:
        """Dispatch to the payload format ``endpoint`` expects."""
        if image is not None:
            return await self.ask_with_image(image, query)
        return await self.ask(endpoint, query)

    @staticmethod
    def _answer_from(endpoint: InferenceEndpoint, data: dict) -> str:
        try:
            return InferenceResponse.model_validate(data).text
        except ValidationError as e:
            raise BackendError(f"{endpoint.value} returned unexpected payload") from e
