"""
Route definitions for the catalogue proxy.

Endpoints:
- GET  /books       : search Google Books (optional genre filter)
- GET  /books/{id}  : fetch one Google Books volume

Both forward the provider's JSON as-is. An error status from the
provider is forwarded with a short error message; any other failure
is logged and reported as a 500.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Query

from . import google_books_service
from .google_books_service import UpstreamError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["catalog"])


@router.get("/books")
def search_books(
    q: Optional[str] = Query(default=None, description="Free-text search"),
    genre: Optional[str] = Query(default=None, description="Subject filter; 'all' disables it"),
    # Kept as strings: invalid numbers fall back to the defaults instead of a 422.
    startIndex: Optional[str] = Query(default=None, description="Offset of the first result"),
    maxResults: Optional[str] = Query(default=None, description="Page size"),
) -> Any:
    start_index = google_books_service.parse_int(startIndex, google_books_service.DEFAULT_START_INDEX)
    max_results = google_books_service.parse_int(maxResults, google_books_service.DEFAULT_MAX_RESULTS)
    try:
        return google_books_service.search_volumes(
            q=q,
            genre=genre,
            start_index=start_index,
            max_results=max_results,
        )
    except UpstreamError as exc:
        status = exc.status
    except Exception:
        logger.exception("Book search failed")
        raise HTTPException(status_code=500, detail="Server error")
    raise HTTPException(status_code=status, detail="Failed to fetch from Google Books API")


@router.get("/books/{book_id}")
def get_book(book_id: str) -> Any:
    try:
        return google_books_service.get_volume(book_id)
    except UpstreamError as exc:
        status = exc.status
    except Exception:
        logger.exception("Book detail lookup failed for %s", book_id)
        raise HTTPException(status_code=500, detail="Server error")
    raise HTTPException(status_code=status, detail="Failed to fetch book detail")
