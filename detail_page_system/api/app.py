"""
Detail Page FastAPI Application.

Endpoints:
- POST /api/generate: product record -> detail page HTML + SEO metadata
- POST /api/parse: pasted product text -> product record fields
- GET /api/health: provider configuration and template state
"""

# Load environment variables FIRST before any other imports
from dotenv import load_dotenv
load_dotenv()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from detail_page_system import __version__
from detail_page_system.config import Config
from detail_page_system.core.errors import MalformedResponse, ProviderUnavailable
from detail_page_system.core.models import ProductRequest
from detail_page_system.page_pipeline import get_page_system
from detail_page_system.templates.page_template import get_page_template, init_page_template

from .models import ErrorResponse, GenerateResponse, HealthResponse, ParseRequest, ParseResponse

# ============================================================================
# Logging Configuration
# ============================================================================

logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the page template once before serving."""
    template = init_page_template()
    logger.info("=" * 60)
    logger.info(f"Detail Page API v{__version__} starting")
    logger.info(f"Template: {template.source} ({template.state.value})")
    logger.info(f"Providers: {Config.provider_status()} (active: {Config.active_provider()})")
    logger.info("=" * 60)
    yield
    logger.info("Detail Page API shutting down")


# ============================================================================
# FastAPI Application Setup
# ============================================================================

app = FastAPI(
    title="Detail Page API",
    description="Product detail page generation for 만원요리 최씨남매",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Endpoints
# ============================================================================

@app.post("/api/generate", response_model=GenerateResponse, tags=["Pages"])
def generate_page(product: ProductRequest):
    """Generate a detail page. Runs in the worker threadpool."""
    result = get_page_system().generate(product)
    return result.to_response()


@app.post("/api/parse", response_model=ParseResponse, tags=["Pages"])
def parse_text(body: ParseRequest):
    """Extract product fields from pasted text."""
    parsed = get_page_system().parse(body.text)
    return ParseResponse(data=parsed["data"], source=parsed["source"])


@app.get("/api/health", response_model=HealthResponse, response_model_by_alias=True, tags=["System"])
def health_check():
    return HealthResponse(
        status="ok",
        providers=Config.provider_status(),
        activeProvider=Config.active_provider(),
        templateLoaded=get_page_template().is_loaded,
    )


# ============================================================================
# Error Handlers
# ============================================================================

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report the first validation problem in the flat error format."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg', 'invalid value')}" if location else first.get("msg", "")
    else:
        message = "Invalid request"
    logger.warning(f"Rejected request to {request.url.path}: {message}")
    return _error(422, message)


@app.exception_handler(MalformedResponse)
async def malformed_response_handler(request: Request, exc: MalformedResponse):
    logger.warning(f"Could not extract data for {request.url.path}: {exc}")
    return _error(422, str(exc))


@app.exception_handler(ProviderUnavailable)
async def provider_unavailable_handler(request: Request, exc: ProviderUnavailable):
    logger.error(f"All providers failed for {request.url.path}: {exc}")
    return _error(500, str(exc))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return _error(500, "Internal server error")
