"""Router exports for FastAPI composition."""

from . import users

__all__ = ["users"]
