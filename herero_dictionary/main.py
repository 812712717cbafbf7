import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

# Import all models to ensure they are registered with SQLAlchemy
import herero_dictionary.models  # noqa: F401
from herero_dictionary.config import settings
from herero_dictionary.database import create_tables, get_db
from herero_dictionary.utils.logging import configure_logging
from herero_dictionary.words.dependencies import get_word_service
from herero_dictionary.words.router import router as words_router
from herero_dictionary.words.service import WordService
from herero_dictionary.words.utils import describe_validation_error

# Load environment variables from .env file
load_dotenv()

if configure_logging():
    print("[Startup] Logging configured from logging.ini")
else:
    print("[Startup] logging.ini not found, using basic configuration")

logger = logging.getLogger(__name__)

UNHANDLED_ERROR_MESSAGE = "Something went wrong!"

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.DESCRIPTION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    swagger_ui_parameters={"docExpansion": "none"}
)

# Add CORS middleware
if settings.BACKEND_CORS_ORIGINS:
    allow_all = "*" in settings.BACKEND_CORS_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin)
                       for origin in settings.BACKEND_CORS_ORIGINS],
        # Browsers refuse credentials with a wildcard origin
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Include routers
app.include_router(words_router, prefix=settings.API_PREFIX)


# Every error body is {"message": ...}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"message": describe_validation_error(exc)},
    )


# Root endpoint


@app.get("/")
async def root():
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}!",
        "version": settings.VERSION,
        "docs": "/docs",
        "redoc": "/redoc"
    }

# Health check endpoint


@app.get("/health")
async def health_check(
    service: WordService = Depends(get_word_service),
    db: AsyncSession = Depends(get_db)
):
    total = await service.count_entries(db)
    return {"status": "ok", "totalEntries": total}

# Startup event


@app.on_event("startup")
async def startup_event():
    logger.info("Application starting up...")

    if settings.CREATE_TABLES_ON_STARTUP:
        try:
            await create_tables()
            logger.info("[Startup] Database tables ensured")
        except Exception as e:
            logger.error(f"[Startup] Creating database tables failed: {e}")

# Turn any uncaught exception into a generic 500


@app.middleware("http")
async def handle_unexpected_errors(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"message": UNHANDLED_ERROR_MESSAGE},
        )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
