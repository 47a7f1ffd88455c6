"""API routers."""

from scrollnet.routers.feedback import router as feedback_router
from scrollnet.routers.interactions import router as interactions_router
from scrollnet.routers.videos import router as videos_router

__all__ = ["videos_router", "interactions_router", "feedback_router"]
