"""Router namespace exports for FastAPI include hooks."""

from . import ai, health, scripture

__all__ = ["ai", "health", "scripture"]
