"""FastAPI endpoints for bulletin canvas layouts."""

from .router import api_router

__all__ = ['api_router']
