"""Routers package for the task board."""

from .board import router as board_router

__all__ = ["board_router"]
