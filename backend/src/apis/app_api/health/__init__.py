"""Health check endpoints."""

from .health import router

__all__ = ["router"]
