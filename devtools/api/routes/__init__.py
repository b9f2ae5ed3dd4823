from fastapi import APIRouter

from .conversion import router as conversion_router
from .health import router as health_router
from .icons import router as icons_router
from .og import router as og_router
from .theme import router as theme_router
from .tools import router as tools_router

api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(tools_router, tags=["tools"])
api_router.include_router(conversion_router, tags=["conversion"])
api_router.include_router(icons_router, tags=["icons"])
api_router.include_router(og_router, tags=["og-image"])
api_router.include_router(theme_router, tags=["theme"])

__all__ = ["api_router"]
