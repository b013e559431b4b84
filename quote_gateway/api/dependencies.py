"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from quote_gateway.config import settings
from quote_gateway.infrastructure.cache import MemoCache
from quote_gateway.infrastructure.database.repositories import QuoteRepository
from quote_gateway.infrastructure.database.session import get_db
from quote_gateway.services.quote_service import QuoteService, create_quote_service

# Process-wide caches shared by every request thread
quote_policy = settings.quote_policy()
calculation_cache = MemoCache("calculation", max_entries=settings.calculation_cache_max_entries)
quote_cache = MemoCache("quote", max_entries=settings.quote_cache_max_entries)


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_quote_service(db: Session = Depends(get_db)) -> QuoteService:
    """Provide a quote service bound to the request's database session"""
    return create_quote_service(
        store=QuoteRepository(db),
        policy=quote_policy,
        calculation_cache=calculation_cache,
        quote_cache=quote_cache,
        cache_key=settings.calculation_cache_key,
    )
