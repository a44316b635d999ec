"""
FastAPI Application Entry Point
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from starlette.exceptions import HTTPException as StarletteHTTPException
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from config import API_VERSION
from pos_backend import __version__
from pos_backend.api.v1.router import api_router
from pos_backend.core.errors import PersistenceError, PosError
from pos_backend.core.i18n_logger import get_i18n_logger
from pos_backend.core.security import limiter
from pos_backend.database.session import create_tables

logger = get_i18n_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    logger.info("app.startup", version=__version__, api_version=API_VERSION)
    yield


# Initialize FastAPI application
app = FastAPI(
    title="Restaurant POS API",
    description="Point of sale, inventory, expenses, staff and sales analytics for a restaurant",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware (the Streamlit dashboard runs on another port)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-New-Token"],
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(PosError)
async def pos_error_handler(request: Request, exc: PosError):
    if exc.status_code >= 500:
        logger.error("error.unhandled", path=request.url.path, code=exc.code, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Storage failures outside commit_or_raise (reads, refreshes)"""
    logger.error("database.request_failed", path=request.url.path, reason=str(exc))
    error = PersistenceError("Could not complete the request")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail), "code": "HTTP_ERROR"},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    logger.warning("error.validation", field=field, message=first.get("msg", ""))
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "message": f"{field}: {first.get('msg', 'Invalid request')}" if field else "Invalid request",
            "code": "REQUEST_VALIDATION_ERROR",
            "detail": jsonable_encoder(errors),
        },
    )


# Include API v1 router
app.include_router(api_router, prefix=f"/api/{API_VERSION}")


@app.get("/", status_code=status.HTTP_200_OK)
async def root():
    """Root endpoint"""
    return {
        "message": "API is running",
        "version": __version__,
        "docs": "/docs"
    }


@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}
