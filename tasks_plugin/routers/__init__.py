"""Routers package for the Tasks Plugin."""

from .tools import router as tools_router

__all__ = ["tools_router"]
