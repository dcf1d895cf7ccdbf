from fastapi import APIRouter

from .bookmarks import router as bookmarks_router
from .labels import router as labels_router

api_router = APIRouter()
api_router.include_router(bookmarks_router, prefix="/bookmarks", tags=["bookmarks"])
api_router.include_router(labels_router, prefix="/labels", tags=["labels"])
