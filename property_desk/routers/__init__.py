"""
API route handlers for the Property Desk API.
"""

from .auth import router as auth_router
from .dashboard import router as dashboard_router
from .properties import router as properties_router
from .images import router as images_router
from .documents import router as documents_router

__all__ = [
    "auth_router",
    "dashboard_router",
    "properties_router",
    "images_router",
    "documents_router",
]
