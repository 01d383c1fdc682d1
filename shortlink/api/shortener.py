from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
import logging

from shortlink.core.config import settings
from shortlink.core.errors import AliasConflict, NotFound
from shortlink.db.Connection import database
from shortlink.schemas import URLCreateRequest, URLCreateResponse, URLStats, URLStatsResponse
from shortlink.services.shortener import URLService

logger = logging.getLogger(__name__)

router = APIRouter()


def build_short_url(request: Request, path: str) -> str:
    if settings.BASE_URL:
        return f"{settings.BASE_URL.rstrip('/')}/{path}"
    host = request.headers.get("host") or request.url.netloc
    return f"{request.url.scheme}://{host}/{path}"


@router.post(
    "/shorten",
    response_model=URLCreateResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def shorten_url_endpoint(
    url_request: URLCreateRequest,
    request: Request,
    response: Response,
    alias: Optional[str] = Query(
        None, min_length=settings.ALIAS_MIN_LENGTH, max_length=settings.ALIAS_MAX_LENGTH
    ),
    db: Session = Depends(database.get_db),
):
    try:
        result = URLService.create_or_reuse(db, url_request.url, alias)
    except AliasConflict as e:
        logger.warning(f"Failed to create short URL for {url_request.url[:50]}... due to: {e}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Alias already in use")

    db_url = result.url_item
    short_url = build_short_url(request, db_url.path)
    if not result.created:
        response.status_code = status.HTTP_200_OK
        return URLCreateResponse(
            original_url=db_url.original_url, short_url=short_url, message="URL already exists"
        )

    logger.info(f"API success: Shortened {db_url.original_url[:50]}... to {db_url.path}")
    return URLCreateResponse(original_url=db_url.original_url, short_url=short_url)


@router.get("/stats/{code}", response_model=URLStatsResponse, tags=["stats"])
def get_url_statistics_endpoint(code: str, db: Session = Depends(database.get_db)):
    try:
        db_url = URLService.get_stats(db, code)
    except NotFound:
        logger.warning(f"Stats 404: Short code not found: {code}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="URL not found")
    return URLStatsResponse(stats=URLStats.model_validate(db_url))


@router.get("/{code}", tags=["redirect"])
def redirect_to_url_endpoint(code: str, db: Session = Depends(database.get_db)):
    try:
        original_url = URLService.resolve(db, code)
    except NotFound:
        logger.warning(f"Redirect 404: Short code not found: {code}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Short URL not found")
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
