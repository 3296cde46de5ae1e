"""API route modules."""
from .entries import router as entries_router
from .goals import router as goals_router
from .journeys import router as journeys_router
from .stats import router as stats_router

__all__ = [
    "entries_router",
    "goals_router",
    "journeys_router",
    "stats_router",
]
