"""API routers for the REST API."""

from cutstock.web.routers.optimize import router as optimize_router

__all__ = [
    "optimize_router",
]
