"""
FastAPI application: contribution dashboard API and public quiz challenge
"""
from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import time

from app.config import settings
from app.database import init_db
from app.api import ai, archive, auth, contributions, events, finance, quizzes, tasks, users, vendors
from app.utils.exceptions import AppError
from app.utils.rate_limiter import rate_limiter

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

UNTHROTTLED_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Audited contribution records, role-based dashboard access and a quiz challenge",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, error: str, message, headers=None, **extra) -> JSONResponse:
    """Uniform error body: {error, message, status_code, ...}"""
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message, "status_code": status_code, **extra},
        headers=headers,
    )


@app.middleware("http")
async def throttle(request: Request, call_next):
    if request.url.path not in UNTHROTTLED_PATHS:
        try:
            await rate_limiter.check_rate_limit(request)
        except HTTPException as e:
            return JSONResponse(status_code=e.status_code, content=e.detail)

    return await call_next(request)


@app.middleware("http")
async def access_log(request: Request, call_next):
    """One log line per request with status and timing"""
    started = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - started

    logger.info(f"{request.method} {request.url.path} -> {response.status_code} in {elapsed:.3f}s")
    return response


@app.exception_handler(AppError)
async def handle_app_error(request: Request, exc: AppError):
    return error_response(exc.status_code, exc.error_code, exc.message)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]
    return error_response(400, "validation_error", "Request validation failed", details=details)


# Also catches Starlette routing errors (unknown path, wrong method)
@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, "http_error", exc.detail, headers=getattr(exc, "headers", None))


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {str(exc)}", exc_info=True)
    return error_response(
        500, "database_error", "A database error occurred. Please try again later.",
        detail=str(exc) if settings.DEBUG else None,
    )


@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return error_response(
        500, "internal_server_error", "An unexpected error occurred. Please try again later.",
        detail=str(exc) if settings.DEBUG else None,
    )


@app.get("/health")
async def health_check():
    """Liveness check"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": time.time()
    }


@app.get("/")
async def root():
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health"
    }


for router in (
    quizzes.router,
    auth.router,
    users.router,
    contributions.router,
    contributions.campaigns_router,
    vendors.router,
    finance.expenses_router,
    finance.quotations_router,
    finance.budgets_router,
    events.sponsors_router,
    events.events_router,
    tasks.router,
    archive.router,
    ai.router,
):
    app.include_router(router)


@app.on_event("startup")
async def startup_event():
    """Create tables, sync roles and permissions, ensure the bootstrap admin"""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    try:
        init_db()
    except Exception as e:
        logger.error(f"Failed to initialize database: {str(e)}")
        raise
    logger.info("Application startup complete")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down application")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
