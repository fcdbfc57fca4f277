"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from influencer_tax.api.middleware import RequestIDMiddleware, MetricsMiddleware
from influencer_tax.api.v1 import analytics, assessments, audit_logs, influencers, reports
from influencer_tax.infrastructure.observability.logging import setup_logging
from influencer_tax.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Influencer Tax Dashboard",
        description="Influencer registry, tax estimation and compliance analytics",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(influencers.router, prefix="/v1", tags=["influencers"])
    app.include_router(analytics.router, prefix="/v1", tags=["analytics"])
    app.include_router(assessments.router, prefix="/v1", tags=["assessments"])
    app.include_router(audit_logs.router, prefix="/v1", tags=["audit-logs"])
    app.include_router(reports.router, prefix="/v1", tags=["reports"])

    return app


app = create_app()
