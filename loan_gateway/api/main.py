"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from loan_gateway.api.dependencies import build_grade_resolver
from loan_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from loan_gateway.api.v1 import loans
from loan_gateway.infrastructure.database.session import init_db
from loan_gateway.infrastructure.observability.logging import setup_logging
from loan_gateway.config import settings, DEFAULT_API_KEY

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report schema violations as 400 with every failing field listed"""
    errors = [
        f"{'.'.join(str(part) for part in error['loc'] if part != 'body')}: {error['msg']}"
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"detail": f"Validation failed: {'; '.join(errors)}"},
    )


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Loan Gateway",
        description="Loan eligibility decisions with property crime grading",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    if settings.api_key == DEFAULT_API_KEY:
        logging.warning("Using default API key. Set API_KEY environment variable for production.")

    # One resolver (and grade cache) per application instance
    app.state.grade_resolver = build_grade_resolver()

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/")
    def index():
        return {
            "message": "Welcome to Loan Gateway",
            "service": settings.service_name,
            "endpoints": {
                "health": "GET /health",
                "metrics": "GET /metrics",
                "submitLoan": "POST /v1/loan (requires x-api-key header)",
                "getLoan": "GET /v1/loan/{loan_id} (requires x-api-key header)",
                "listLoans": "GET /v1/loans (requires x-api-key header)",
                "updateLoan": "PUT /v1/loan/{loan_id} (requires x-api-key header)",
                "deleteLoan": "DELETE /v1/loan/{loan_id} (requires x-api-key header)",
            },
        }

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(loans.router, prefix="/v1", tags=["loans"])

    return app


app = create_app()
