"""Wedding planner endpoints - POST /api/wedding, POST /api/wedding/refresh."""

import logging

from fastapi import APIRouter

from backend.app.api.errors import to_app_error
from backend.app.config import get_settings
from backend.app.errors import MissingParameterError
from backend.app.llm.client import get_completion_client
from backend.app.models.common import ErrorResponse
from backend.app.models.wedding import (
    PlanRequest,
    SectionRefreshRequest,
    SectionRefreshResponse,
    WeddingPlan,
)
from backend.app.orchestration.wedding import (
    generate_wedding_plan,
    parse_section_type,
    refresh_section,
)

router = APIRouter(prefix="/api/wedding", tags=["wedding"])
logger = logging.getLogger(__name__)

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def _describe(request: PlanRequest) -> str:
    parts = [request.location or ""]
    if request.budget:
        parts.append(f"with budget ${request.budget:,}")
    if request.attendees:
        parts.append(f"for {request.attendees:,} guests")
    return " ".join(parts)


@router.post(
    "",
    response_model=WeddingPlan,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def create_wedding_plan(request: PlanRequest) -> WeddingPlan:
    """Generate a full wedding venue plan.

    Args:
        request: Location (required), optional budget and guest count

    Returns:
        WeddingPlan with six sections and optional budget estimate
    """
    if not request.location:
        raise MissingParameterError("Location is required")

    try:
        plan = await generate_wedding_plan(request, get_completion_client(), get_settings())
    except Exception as e:
        error = to_app_error(
            e,
            parse_message="Failed to parse wedding plan from AI response",
            fallback_message="Failed to generate wedding plan",
        )
        logger.exception(f"Wedding planning error for {request.location}")
        raise error from e

    logger.info(f"Generated wedding plan for: {_describe(request)}")
    return plan


@router.post(
    "/refresh",
    response_model=SectionRefreshResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def refresh_wedding_section(request: SectionRefreshRequest) -> SectionRefreshResponse:
    """Replace one plan section with a different option.

    Args:
        request: Plan inputs plus sectionType and its currentContent

    Returns:
        newContent - a venue, or three ceremony venues for weddingLocations
    """
    if not request.location or not request.section_type or request.current_content is None:
        raise MissingParameterError("Missing required parameters")

    section = parse_section_type(request.section_type)

    try:
        new_content = await refresh_section(
            request, section, get_completion_client(), get_settings()
        )
    except Exception as e:
        error = to_app_error(
            e,
            parse_message="Failed to parse new recommendation",
            fallback_message="Failed to refresh section",
        )
        logger.exception(f"Section refresh error for {section.value}")
        raise error from e

    logger.info(f"Refreshed {section.value} for: {_describe(request)}")
    return SectionRefreshResponse(new_content=new_content)
