"""HTTP access to the AgriGPT backend.

Endpoints:
    - POST /chats: Persist user and assistant messages
    - POST /ask-consultant: Crop advisory answers
    - POST /query-government-schemes: Scheme lookups
    - POST /ask-with-image: Image diagnosis (multipart)
"""

from agrigpt.backend.client import BackendClient, BackendError

__all__ = ["BackendClient", "BackendError"]
