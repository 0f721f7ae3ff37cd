"""Test package for the AgriGPT chat client.

Structure:
    - unit/: Models, configuration, composer state and helpers
    - integration/: Backend client, submit pipeline and FastAPI host

The backend is replaced by httpx.MockTransport; no network access needed.
Leverages pytest with pytest-check for soft assertions.
"""
