from .topics import router as topics_router
from .categories import router as categories_router
from .members import router as members_router
from .tags import router as tags_router

__all__ = [
    "topics_router",
    "categories_router",
    "members_router",
    "tags_router",
]
