"""Route handlers for the API."""

from resume_engine.api.routes import documents, health

__all__ = [
    "documents",
    "health",
]
