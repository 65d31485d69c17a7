"""Document tagging endpoint - POST /api/tag."""

import logging
from typing import Annotated

from fastapi import APIRouter, File, UploadFile

from backend.app.api.errors import to_app_error
from backend.app.config import get_settings
from backend.app.errors import (
    EmptyCompletionError,
    FileTooLargeError,
    InvalidFileTypeError,
    MissingParameterError,
)
from backend.app.llm.client import get_completion_client
from backend.app.models.common import ErrorResponse, TagResponse
from backend.app.orchestration.tagging import tag_document

router = APIRouter(prefix="/api", tags=["tag"])
logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"


@router.post(
    "/tag",
    response_model=TagResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def tag_pdf(pdf: Annotated[UploadFile | None, File()] = None) -> TagResponse:
    """Extract topical tags from an uploaded PDF.

    Args:
        pdf: Multipart file field (must be application/pdf)

    Returns:
        Comma-separated tags
    """
    if pdf is None:
        raise MissingParameterError("No PDF file uploaded")

    if pdf.content_type != PDF_MEDIA_TYPE:
        raise InvalidFileTypeError("File must be a PDF")

    settings = get_settings()
    data = await pdf.read()
    if len(data) > settings.max_upload_bytes:
        limit_mb = settings.max_upload_bytes / (1024 * 1024)
        raise FileTooLargeError(f"File must be {limit_mb:g}MB or smaller")

    try:
        tags = await tag_document(data, get_completion_client(), settings)
    except EmptyCompletionError as e:
        logger.error(f"No tags generated for {pdf.filename}: {e.raw!r}")
        raise to_app_error(
            e,
            parse_message="No tags generated from the document",
            fallback_message="Failed to process document",
        ) from e
    except Exception as e:
        error = to_app_error(
            e,
            parse_message="Failed to process document",
            fallback_message="Failed to process document",
        )
        if error.status_code >= 500:
            logger.exception(f"PDF/OpenAI error for {pdf.filename}")
        raise error from e

    logger.info(f"Tagged {pdf.filename} ({len(data)} bytes): {len(tags)} tags")
    return TagResponse(tags=", ".join(tags))
