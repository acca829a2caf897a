"""FastAPI application entry point for the site generator"""
import logging
import sys
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sitegen.core.config import settings
from sitegen.core.image_search import ImageSearchClient
from sitegen.models.errors import ApplicationError, ErrorCode
from sitegen.models.schemas import BusinessSiteRequest, ErrorResponse, GenerationRequest, SiteBundle
from sitegen.orchestrator.orchestrator_agent import SiteOrchestrator

# Configure logging - console only
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Shared HTTP connection pool for image search; per-request state lives in the orchestrator call
_image_search: Optional[ImageSearchClient] = None


def _get_image_search() -> ImageSearchClient:
    global _image_search
    if _image_search is None:
        _image_search = ImageSearchClient()
    return _image_search


def get_orchestrator() -> SiteOrchestrator:
    """Orchestrator for one request"""
    return SiteOrchestrator(image_search=_get_image_search())


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    global _image_search
    if _image_search:
        await _image_search.close()
        _image_search = None
    logger.info("✓ Site generator shutdown complete")


@app.exception_handler(ApplicationError)
async def application_error_handler(request: Request, exc: ApplicationError):
    logger.error(f"[API] ✗ {exc.code.value} | path: {request.url.path} | error_id: {exc.error_id} | message: {exc.message}")
    return JSONResponse(status_code=exc.http_status, content=exc.model_dump())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    error = ApplicationError(
        ErrorCode.INVALID_REQUEST,
        f"Invalid request: {field or 'body'}: {first.get('msg', 'validation failed')}",
        hint="Provide a non-empty description and a pageCount between 1 and 5",
    )
    logger.warning(f"[API] Rejected request | path: {request.url.path} | message: {error.message}")
    return JSONResponse(status_code=error.http_status, content=error.model_dump())


@app.get("/health")
async def health():
    """Health check for monitoring"""
    return {"status": "healthy", "version": settings.api_version}


@app.post(
    "/generate-code",
    response_model=SiteBundle,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def generate_code(generation_request: GenerationRequest):
    """Generate a multi-page site bundle"""
    logger.info(f"[API] /generate-code | page_count: {generation_request.page_count}")
    return await get_orchestrator().generate_site(generation_request)


@app.post(
    "/generate-business-site",
    response_model=SiteBundle,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def generate_business_site(business_request: BusinessSiteRequest):
    """Generate a single-page business site bundle"""
    logger.info("[API] /generate-business-site")
    return await get_orchestrator().generate_business_site(business_request)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="127.0.0.1",
        port=5000,
        log_level=settings.log_level.lower(),
    )
