"""API routers module."""

from .vocabulary import router as vocabulary_router
from .seed import router as seed_router
from .learn import router as learn_router

__all__ = [
    "vocabulary_router",
    "seed_router",
    "learn_router",
]
