"""AgriGPT chat client - agricultural advisory assistant in the browser.

Combines NiceGUI for the chat interface, HTTPX for the AgriGPT backend,
FastAPI for serving, and Pydantic for configuration and wire models.

Components:
    - api: FastAPI application that hosts the UI and health endpoint
    - backend: HTTP client for message persistence and inference endpoints
    - chat: Conversation session, attachments, speech and identity ports
    - ui: Composer component and chat page
    - models: Messages, topics and request/response schemas
"""

__version__ = "0.1.0"
