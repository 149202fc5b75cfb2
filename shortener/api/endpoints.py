"""
FastAPI Endpoints for URL Shortener Service

This module defines all REST API endpoints with minimal logic.
Endpoints only handle:
- Request parsing (Pydantic models)
- Error handling and HTTP responses
- Delegating to service layer

Rate limiting happens before any endpoint runs (see
shortener.middleware.rate_limit). Endpoints are plain functions, so FastAPI
runs them on its worker thread pool and the registry is shared across threads.

Design Principles:
- Thin endpoints: all business logic lives in services
- The registry is created once per application and read from app.state
- Error handling: service exceptions are mapped to HTTP status codes here
"""

from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from shortener.api.schemas import ErrorResponse, ShortenRequest, ShortenResponse, StatsResponse
from shortener.core.exceptions import (
    InvalidShortCodeError,
    InvalidURLError,
    ShortCodeInUseError,
    ShortCodeNotFoundError,
    URLTooLongError,
)
from shortener.core.setting import Settings
from shortener.services.redirect_service import RedirectService
from shortener.services.stats_service import StatsService
from shortener.services.url_registry import UrlRegistry
from shortener.services.url_service import URLShorteningService


router = APIRouter()


def get_registry(request: Request) -> UrlRegistry:
    """Registry shared by every request of this application."""
    return request.app.state.registry


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_url_service(
    registry: UrlRegistry = Depends(get_registry),
    settings: Settings = Depends(get_settings)
) -> URLShorteningService:
    return URLShorteningService(
        registry,
        max_url_length=settings.MAX_URL_LENGTH,
        max_attempts=settings.SHORT_CODE_MAX_ATTEMPTS,
    )


def get_redirect_service(registry: UrlRegistry = Depends(get_registry)) -> RedirectService:
    return RedirectService(registry)


def get_stats_service(registry: UrlRegistry = Depends(get_registry)) -> StatsService:
    return StatsService(registry)


@router.post(
    "/api/shorten",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a short URL",
    description="Takes a long URL and returns a shortened version with a unique code",
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
    },
)
def create_short_url(
    body: ShortenRequest,
    url_service: URLShorteningService = Depends(get_url_service)
) -> ShortenResponse:
    """
    Create a new short URL from a long URL.

    Shortening a URL that is already registered returns the existing
    mapping, even when a different custom short code is requested.

    Raises:
        HTTPException 400: If URL format or short code is invalid, or the code is taken
        HTTPException 413: If URL is longer than the configured maximum
    """
    try:
        result = url_service.create_short_url(body.url, body.short_code)
    except (InvalidURLError, InvalidShortCodeError, ShortCodeInUseError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )
    except URLTooLongError as e:
        raise HTTPException(
            status_code=HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
            detail=e.message
        )

    return ShortenResponse.model_validate(result)


@router.get(
    "/api/stats/{short_code}",
    response_model=StatsResponse,
    summary="Get URL statistics",
    description="Returns statistics for a short URL including visit count and expiry time",
    responses={404: {"model": ErrorResponse}},
)
def get_url_stats(
    short_code: str,
    stats_service: StatsService = Depends(get_stats_service)
) -> StatsResponse:
    """
    Get statistics for a short URL.

    Raises:
        HTTPException 404: If short code not found or expired
    """
    try:
        stats = stats_service.get_stats(short_code)
    except ShortCodeNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )

    return StatsResponse.model_validate(stats)


@router.get(
    "/api/urls",
    response_model=List[StatsResponse],
    summary="List all short URLs",
    description="Returns statistics for every short URL, expired ones included",
)
def list_urls(
    stats_service: StatsService = Depends(get_stats_service)
) -> List[StatsResponse]:
    return [StatsResponse.model_validate(stats) for stats in stats_service.list_stats()]


@router.get(
    "/{short_code}",
    status_code=status.HTTP_301_MOVED_PERMANENTLY,
    summary="Redirect to original URL",
    description="Takes a short code and redirects to the original long URL",
    responses={404: {"model": ErrorResponse}},
)
def redirect_to_url(
    short_code: str,
    redirect_service: RedirectService = Depends(get_redirect_service)
) -> RedirectResponse:
    """
    Redirect to the original URL for a given short code.

    Each successful redirect increments the visit count.

    Returns:
        RedirectResponse (HTTP 301) to original URL

    Raises:
        HTTPException 404: If short code not found or expired
    """
    try:
        original_url = redirect_service.get_redirect_url(short_code)
    except ShortCodeNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )

    return RedirectResponse(
        url=original_url,
        status_code=status.HTTP_301_MOVED_PERMANENTLY
    )
