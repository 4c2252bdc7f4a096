"""API route handlers."""

from .matches import router as matches_router
from .bids import router as bids_router
from .requirements import router as requirements_router
