from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from datetime import datetime

from .config import config
from .routes import converter
from .middleware.security import SecurityMiddleware
from .utils.audit import audit_logger
from .utils.errors import ConversionError
from .models.schemas import ErrorResponse

# Create FastAPI app
app = FastAPI(
    title=config.PROJECT_NAME,
    version=config.VERSION,
    docs_url=f"{config.API_V1_PREFIX}/docs" if config.DEBUG else None,
    redoc_url=f"{config.API_V1_PREFIX}/redoc" if config.DEBUG else None,
)

# Add security middleware
app.add_middleware(SecurityMiddleware)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(converter.router)


def _error_content(error_response: ErrorResponse) -> dict:
    return error_response.model_dump(mode="json", exclude_none=True)


# Exception handlers
@app.exception_handler(ConversionError)
async def conversion_exception_handler(request: Request, exc: ConversionError):
    """Handle conversion failures."""
    error_response = ErrorResponse(
        message=exc.message,
        error_code=exc.error_code,
        timestamp=datetime.utcnow(),
        details=getattr(exc, "detail", None) if config.SHOW_ERROR_DETAILS else None
    )

    audit_logger.log_error(
        user_id="api",
        action="conversion_error",
        error=exc,
        details={"path": request.url.path}
    )

    return JSONResponse(
        status_code=422,
        content=_error_content(error_response)
    )

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions."""
    error_response = ErrorResponse(
        message=str(exc.detail),
        error_code=f"HTTP_{exc.status_code}",
        timestamp=datetime.utcnow(),
        details=str(exc) if config.SHOW_ERROR_DETAILS else None
    )

    audit_logger.log_error(
        user_id="api",
        action="http_error",
        error=exc,
        details={
            "status_code": exc.status_code,
            "path": request.url.path
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(error_response)
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors."""
    error_response = ErrorResponse(
        message="Invalid request parameters" if not config.SHOW_ERROR_DETAILS else str(exc.errors()),
        error_code="VALIDATION_ERROR",
        timestamp=datetime.utcnow(),
        details=str(exc.errors()) if config.SHOW_ERROR_DETAILS else None
    )

    audit_logger.log_error(
        user_id="api",
        action="validation_error",
        error=exc,
        details={"path": request.url.path}
    )

    return JSONResponse(
        status_code=422,
        content=_error_content(error_response)
    )

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions."""
    error_response = ErrorResponse(
        message="Internal server error" if not config.SHOW_ERROR_DETAILS else str(exc),
        error_code="INTERNAL_ERROR",
        timestamp=datetime.utcnow(),
        details=str(exc) if config.SHOW_ERROR_DETAILS else None
    )

    audit_logger.log_error(
        user_id="api",
        action="internal_error",
        error=exc,
        details={"path": request.url.path}
    )

    return JSONResponse(
        status_code=500,
        content=_error_content(error_response)
    )

# Startup event
@app.on_event("startup")
async def startup_event():
    """Record application startup."""
    audit_logger.log_request_event(
        user_id="system",
        action="application_startup",
        ip_address="localhost",
        details={
            "version": config.VERSION,
            "debug_mode": config.DEBUG
        }
    )

# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    audit_logger.log_request_event(
        user_id="system",
        action="application_shutdown",
        ip_address="localhost"
    )
