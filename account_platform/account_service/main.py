"""
Account Service - user registration, login and lookup
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .db import init_db
from .deps import get_token_issuer
from .errors import DuplicateUsernameError
from .routes import auth, health, users

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Fail fast on a missing signing secret, then create tables"""
    get_token_issuer()
    init_db()
    logger.info(f"{settings.APP_NAME} {settings.VERSION} started")
    yield


async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def duplicate_username_handler(_request: Request, exc: DuplicateUsernameError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"message": str(exc)},
    )


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="User registration, login and lookup with bearer tokens",
        version=settings.VERSION,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(DuplicateUsernameError, duplicate_username_handler)

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(health.router)

    @app.get("/")
    async def root():
        return {
            "service": settings.APP_NAME,
            "version": settings.VERSION,
            "status": "running"
        }

    return app


app = create_application()
