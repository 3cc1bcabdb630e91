import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.routers import geo
from app.services.pelias_client import PeliasClient

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
# httpx logs every request URL at INFO, api_key included
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the shared Pelias client once and close it on shutdown."""
    pelias_config = settings.pelias
    app.state.pelias_client = PeliasClient(pelias_config)
    logger.info(
        f"Pelias client ready: base_url={pelias_config.base_url}, "
        f"api_key={'set' if pelias_config.api_key else 'unset'}, "
        f"timeout={pelias_config.timeout_seconds}s"
    )
    try:
        yield
    finally:
        await app.state.pelias_client.aclose()


app = FastAPI(
    title=settings.project_name,
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(geo.router, prefix=settings.api_v1_prefix)


def _describe_validation_error(error: dict) -> str:
    """'latitude: Input should be a valid number' from a pydantic error entry."""
    loc = [str(part) for part in error.get("loc", ()) if part not in ("query", "body")]
    field = ".".join(loc) or "request"
    return f"{field}: {error.get('msg', 'invalid value')}"


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed query values or bodies are bad requests (400), not 422."""
    detail = "; ".join(_describe_validation_error(e) for e in exc.errors())
    logger.warning(f"Bad request to {request.url.path}: {detail}")
    return JSONResponse(status_code=400, content={"detail": detail})


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": f"Welcome to {settings.project_name}",
        "version": "1.0.0",
        "docs": "/docs"
    }
