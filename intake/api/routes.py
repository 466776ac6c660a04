"""FastAPI route definitions."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from intake.core.errors import ExtractionError
from intake.core.schemas import (
    ErrorResponse,
    EventCandidate,
    ExtractionRequest,
    UploadedImage,
)
from intake.scraper.orchestrator import ExtractionService

logger = logging.getLogger(__name__)

VERSION = "0.1.0"

router = APIRouter()


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the {"error": ...} body used for every failure."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def get_extraction_service(request: Request) -> ExtractionService:
    """Return the service built at startup. Override in tests via dependency_overrides."""
    service = getattr(request.app.state, "extraction_service", None)
    if service is None:
        raise RuntimeError("Extraction service is not initialized")
    return service


@router.post(
    "/api/process",
    response_model=EventCandidate,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def process_event(
    url: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    service: ExtractionService = Depends(get_extraction_service),
):
    """
    Extract an event draft from a web page or a flyer image.

    This endpoint:
    1. Renders the URL in a headless browser, or runs OCR on the image
    2. Uses a language model to extract structured event data
    3. Applies defaults so every field of the result is populated

    Args:
        url: Address of a page announcing an event
        image: Uploaded photo or flyer

    Returns:
        EventCandidate, or {"error": ...} with a 4xx/5xx status
    """
    uploaded = None
    if image is not None:
        uploaded = UploadedImage(
            data=await image.read(),
            mime_type=image.content_type or "application/octet-stream",
            filename=image.filename,
        )

    try:
        return await service.process(ExtractionRequest(url=url, image=uploaded))

    except ExtractionError as e:
        return error_response(e.status_code, e.public_message)

    except Exception as e:
        logger.exception(f"Error processing request: {e}")
        return error_response(500, "Failed to process request")


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        Simple status message
    """
    return {
        "status": "healthy",
        "service": "plan-intake",
        "version": VERSION,
    }
