"""
API v1 package.

Contains versioned API routes for the competition registration API.
"""

from src.api.v1.routes import router

__all__ = ["router"]
