"""FastAPI endpoints for Ask ZOLA.

Endpoints:
    - GET /health: Service health status
    - POST /api/gemini: Prompt relay streaming text/plain chunks
    - GET /static/*: UI assets (background image)
"""

from zola.api.app import app, create_app

__all__ = ["app", "create_app"]
