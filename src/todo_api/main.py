import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .domain.exceptions import NotFoundError, TodoAppError, ValidationError
from .logging_config import configure_logging
from .routers import lists as lists_router
from .routers import tasks as tasks_router
from .settings import get_settings

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "lists", "description": "Create, fetch and rename task lists."},
    {
        "name": "tasks",
        "description": "Create tasks and change their title, description, deadline, completion and list.",
    },
]

_settings = get_settings()
configure_logging(level=_settings.log_level, log_json=_settings.log_json)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title="Todo API",
    description="Backend API service for managing task lists and tasks with pluggable storage backends.",
    version="0.1.0",
    openapi_tags=openapi_tags,
)

# Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
allow_all = (_settings.cors_allow_origins == ["*"]) or (len(_settings.cors_allow_origins) == 0)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if allow_all else _settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, exc: TodoAppError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": type(exc).__name__,
            "message": exc.message,
            "detail": exc.details,
        },
    )


# Global exception handlers for consistent JSON on validation errors
@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent JSON structure for request validation errors.

    Response format:
        {
            "error": "ValidationError",
            "detail": [... pydantic/fastapi error details ...],
            "message": "Request validation failed"
        }
    """
    return JSONResponse(
        status_code=422,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(ValidationError)
async def domain_validation_exception_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Map domain validation failures to 400."""
    logger.info("Rejected invalid input", path=request.url.path, error=exc.message)
    return _error_response(status.HTTP_400_BAD_REQUEST, exc)


@app.exception_handler(NotFoundError)
async def not_found_exception_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Map missing lists or tasks to 404."""
    logger.info("Resource not found", path=request.url.path, error=exc.message)
    return _error_response(status.HTTP_404_NOT_FOUND, exc)


# PUBLIC_INTERFACE
@app.get("/", summary="Health Check", tags=["health"])
def health_check():
    """
    Health check endpoint.

    Returns:
        A JSON object indicating service health.
    """
    return {"message": "Healthy", "backend": _settings.persistence_backend}


# Include routers
app.include_router(lists_router.router)
app.include_router(tasks_router.router)
