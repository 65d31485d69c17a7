"""Wedding plan models - request bodies, the plan contract and refresh results.

Field names on the wire are camelCase; attributes are snake_case.
"""

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.app.models.venue import VenueInfo


class SectionType(str, Enum):
    """The six independently regenerable plan sections."""

    reception_dinner = "receptionDinner"
    welcome_party = "welcomeParty"
    catering = "catering"
    wedding_locations = "weddingLocations"
    reception_location = "receptionLocation"
    after_party_location = "afterPartyLocation"


class BudgetBreakdown(BaseModel):
    """Estimated cost per category."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    ceremony: str
    reception: str
    catering: str
    welcome_party: str = Field(..., alias="welcomeParty")
    after_party: str = Field(..., alias="afterParty")


class EstimatedBudget(BaseModel):
    """Total estimate plus breakdown."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    total: str
    breakdown: BudgetBreakdown


class WeddingPlan(BaseModel):
    """Full wedding plan returned by POST /api/wedding."""

    model_config = ConfigDict(populate_by_name=True)

    reception_dinner: VenueInfo = Field(..., alias="receptionDinner")
    welcome_party: VenueInfo = Field(..., alias="welcomeParty")
    catering: VenueInfo
    wedding_locations: Annotated[
        list[VenueInfo], Field(alias="weddingLocations", min_length=3, max_length=3)
    ]
    reception_location: VenueInfo = Field(..., alias="receptionLocation")
    after_party_location: VenueInfo = Field(..., alias="afterPartyLocation")
    estimated_budget: EstimatedBudget | None = Field(None, alias="estimatedBudget")


class PlanRequest(BaseModel):
    """Request body for POST /api/wedding.

    ``location`` is optional here so that a missing value is reported as
    "Location is required" by the handler rather than as a validation error.
    A budget or guest count of 0 means unspecified; negatives are rejected.
    """

    location: str | None = None
    budget: int | None = Field(None, gt=0, description="Maximum budget in USD")
    attendees: int | None = Field(None, gt=0, description="Expected guest count")

    @field_validator("budget", "attendees", mode="before")
    @classmethod
    def zero_means_unspecified(cls, value: Any) -> Any:
        """Treat 0 like an absent value."""
        if value == 0:
            return None
        return value


class SectionRefreshRequest(PlanRequest):
    """Request body for POST /api/wedding/refresh."""

    model_config = ConfigDict(populate_by_name=True)

    section_type: str | None = Field(None, alias="sectionType")
    current_content: dict[str, Any] | list[Any] | None = Field(None, alias="currentContent")
    existing_plan: dict[str, Any] | None = Field(None, alias="existingPlan")


class SectionRefreshResponse(BaseModel):
    """Response for POST /api/wedding/refresh."""

    model_config = ConfigDict(populate_by_name=True)

    new_content: VenueInfo | list[VenueInfo] = Field(..., alias="newContent")
