"""FastAPI host for the chat client.

Endpoints:
    - GET /health: Service health status and configured backend
    - / and /login: NiceGUI pages (mounted at startup)
"""

from agrigpt.api.app import create_app

__all__ = ["create_app"]
