"""Version 1 API endpoints."""

from .endpoints import validations_router, votes_router

__all__ = [
    "validations_router",
    "votes_router",
]
