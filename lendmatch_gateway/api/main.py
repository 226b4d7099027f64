"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from lendmatch_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from lendmatch_gateway.api.v1 import risk, matches, recommendations, pipeline, schedule, market, synthetic
from lendmatch_gateway.infrastructure.observability.logging import setup_logging
from lendmatch_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="LendMatch Gateway",
        description="Borrower risk assessment, lender matching and loan recommendation service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(risk.router, prefix="/v1", tags=["risk"])
    app.include_router(matches.router, prefix="/v1", tags=["matches"])
    app.include_router(recommendations.router, prefix="/v1", tags=["recommendations"])
    app.include_router(pipeline.router, prefix="/v1", tags=["pipeline"])
    app.include_router(schedule.router, prefix="/v1", tags=["schedule"])
    app.include_router(market.router, prefix="/v1", tags=["market"])
    app.include_router(synthetic.router, prefix="/v1", tags=["synthetic"])

    return app


app = create_app()
