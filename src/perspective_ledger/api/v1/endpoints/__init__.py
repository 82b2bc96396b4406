"""API endpoint modules for version 1."""

from .validations import router as validations_router
from .votes import router as votes_router

__all__ = [
    "validations_router",
    "votes_router",
]
