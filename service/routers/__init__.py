"""
Rotation Planner API Routers Package.

This package contains versioned API routers:
- v1: schedule generation and validation
"""

from .v1 import router as v1_router

__all__ = ['v1_router']
