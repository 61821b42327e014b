"""FastAPI application factory for the credit engine HTTP adapter"""

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from credit_engine.api.middleware import MetricsMiddleware, RequestIDMiddleware
from credit_engine.api.v1 import bureaus, disputes, payments, reports, scores
from credit_engine.config import settings
from credit_engine.infrastructure.observability.logging import setup_logging

setup_logging(settings.log_level)

V1_ROUTERS = (
    (scores.router, "scores"),
    (bureaus.router, "bureaus"),
    (payments.router, "payments"),
    (reports.router, "reports"),
    (disputes.router, "disputes"),
)


def create_app() -> FastAPI:
    """
    Build the app: request tracing, latency metrics, liveness and the /v1 engine routes.

    The engine is stateless, so every call builds an independent app that
    shares only the process-wide Prometheus registry.
    """
    app = FastAPI(
        title="Credit Engine",
        description="Credit score estimation, report parsing and dispute tooling",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # RequestIDMiddleware runs first so latency records can be correlated
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    for router, tag in V1_ROUTERS:
        app.include_router(router, prefix="/v1", tags=[tag])

    return app


app = create_app()
