"""
FastAPI application entry point.
Assembles the app with routers, middleware, lifespan handlers, and exception handlers.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from practiceflow.api.v1.router import api_router
from practiceflow.core.config import settings
from practiceflow.core.exceptions import setup_exception_handlers
from practiceflow.core.logging import setup_logging
from practiceflow.core.integrations.observability import setup_observability
from practiceflow.db.init_db import create_tables
from practiceflow.db.session import init_db, close_db
from practiceflow.deps.di_container import Container
import practiceflow.deps.di_container as di_module


# Initialize rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    enabled=settings.RATE_LIMIT_ENABLED,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    Initializes logging, DB and the DI container.
    """
    # Startup
    setup_logging()
    setup_observability()

    await init_db()
    if settings.DATABASE_CREATE_TABLES:
        await create_tables()

    container = Container()
    container.config.from_dict({
        "database_url": settings.DATABASE_URL,
        "project_name": settings.PROJECT_NAME,
    })
    app.state.container = container
    di_module._container = container

    yield

    # Shutdown
    await close_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Client, contact, project and template management API for accounting practices",
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Rate limiting middleware
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    # Root-level health endpoint for load balancers
    from practiceflow.api.v1.endpoints.health import get_health as api_health
    app.add_api_route("/health", api_health, methods=["GET"], include_in_schema=False)

    setup_exception_handlers(app)

    return app


app = create_app()
