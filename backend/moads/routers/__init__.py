from .campaigns import router as campaigns_router
from .pages import router as pages_router

__all__ = ["campaigns_router", "pages_router"]
