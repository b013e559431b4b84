"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from quote_gateway.api.errors import register_exception_handlers
from quote_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from quote_gateway.api.v1 import quotes
from quote_gateway.infrastructure.database.session import init_db
from quote_gateway.infrastructure.observability.logging import setup_logging
from quote_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create quote tables before serving requests"""
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        lifespan=lifespan,
        title="Auto Insurance Quote Gateway",
        description="Auto insurance quote generation and retrieval service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(quotes.router, prefix="/v1", tags=["quotes"])

    return app


app = create_app()
