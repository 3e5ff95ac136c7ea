"""Backend API access.

Wraps outbound HTTP calls with bearer-token auth, uniform error
normalization and JSON vs. multipart payload handling.

Endpoints used:
    - POST /auth/login, POST /auth/register: authentication
    - GET /documents, GET /chat/history: session sync
    - POST /documents/upload: multipart document upload
    - POST /chat: question answering
"""

from versepoint.api.gateway import ApiGateway, ProgressReader

__all__ = ["ApiGateway", "ProgressReader"]
