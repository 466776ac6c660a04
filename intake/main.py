"""Main FastAPI application."""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from intake.api.routes import router, error_response, VERSION
from intake.core.config import settings, Settings
from intake.llm.factory import create_completion_backend
from intake.ocr.vision import GoogleVisionRecognizer
from intake.scraper.browser import PlaywrightRenderer
from intake.scraper.orchestrator import ExtractionService

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Plan Intake API",
    description="Event extraction from web pages and flyer images using browser automation, OCR and LLM extraction",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, tags=["extraction"])


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed form fields are client errors with the usual error body."""
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return error_response(400, "Invalid request")


def build_extraction_service(config: Settings) -> ExtractionService:
    """Wire the three backends from settings into an ExtractionService."""
    return ExtractionService(
        renderer=PlaywrightRenderer(
            headless=config.headless,
            timeout=config.browser_timeout,
            ws_endpoint=config.browser_ws_endpoint,
        ),
        recognizer=GoogleVisionRecognizer(
            project_id=config.google_cloud_project_id,
            private_key=config.google_private_key,
            client_email=config.google_cloud_client_email,
            timeout=config.ocr_timeout,
        ),
        completion=create_completion_backend(config),
        max_image_bytes=config.max_image_bytes,
        timezone=config.timezone,
    )


@app.on_event("startup")
async def startup_event():
    """Run on application startup. Missing configuration is fatal."""
    logger.info("Starting Plan Intake API")
    settings.validate_required()
    app.state.extraction_service = build_extraction_service(settings)
    logger.info(f"Server will run on {settings.host}:{settings.port} (LLM provider: {settings.llm_provider})")


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    logger.info("Shutting down Plan Intake API")


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "service": "Plan Intake API",
        "version": VERSION,
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "intake.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level=settings.log_level
    )
