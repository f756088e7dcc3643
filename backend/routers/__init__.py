"""Routers module - FastAPI route handlers"""

from . import diff, scenes, config

__all__ = ["diff", "scenes", "config"]
