"""Models package - re-exports for convenience."""

from backend.app.models.common import ErrorResponse, TagResponse
from backend.app.models.venue import VenueInfo
from backend.app.models.wedding import (
    BudgetBreakdown,
    EstimatedBudget,
    PlanRequest,
    SectionRefreshRequest,
    SectionRefreshResponse,
    SectionType,
    WeddingPlan,
)

__all__ = [
    # Common
    "ErrorResponse",
    "TagResponse",
    # Venue
    "VenueInfo",
    # Wedding
    "WeddingPlan",
    "EstimatedBudget",
    "BudgetBreakdown",
    "SectionType",
    "PlanRequest",
    "SectionRefreshRequest",
    "SectionRefreshResponse",
]
