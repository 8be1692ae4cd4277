"""Dependency injection for FastAPI endpoints"""

import secrets
from typing import Optional
from fastapi import Header, HTTPException, Request, status
from loan_gateway.config import settings
from loan_gateway.domain.grade_cache import GradeCache
from loan_gateway.domain.grade_resolver import CrimeGradeResolver
from loan_gateway.infrastructure.clients.crime_grades import CrimeGradeClient
from loan_gateway.infrastructure.observability.metrics import record_crime_api_failure, record_grade_cache_lookup


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def build_grade_resolver() -> CrimeGradeResolver:
    """Create a resolver with its own cache, calling the crime grade API only when enabled"""
    source = CrimeGradeClient() if settings.crime_api_enabled else None
    return CrimeGradeResolver(
        GradeCache(ttl_seconds=settings.grade_cache_ttl_seconds),
        source=source,
        on_cache_lookup=record_grade_cache_lookup,
        on_source_failure=record_crime_api_failure,
    )


def get_grade_resolver(request: Request) -> CrimeGradeResolver:
    """Provide the application's shared grade resolver"""
    return request.app.state.grade_resolver


def require_api_key(x_api_key: Optional[str] = Header(None)) -> None:
    """Reject requests without the shared secret in the x-api-key header"""
    if not x_api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="API key is required. Provide a valid API key in the x-api-key header.",
        )
    if not secrets.compare_digest(x_api_key.encode(), settings.api_key.encode()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key. Provide a valid API key.",
        )
