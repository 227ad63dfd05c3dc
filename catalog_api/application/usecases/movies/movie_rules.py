"""
Reglas de validación de campos de Movie (compartidas por create/update).

Cada función devuelve un mensaje de error o None.
"""

from __future__ import annotations

from typing import List, Optional

MAX_TITLE_CHARS = 255
MAX_DESCRIPTION_CHARS = 5_000
MAX_URL_CHARS = 2_048
MAX_CATEGORIES = 20
MAX_CATEGORY_CHARS = 100
MIN_RELEASE_YEAR = 1888
MAX_RELEASE_YEAR = 2100
MAX_DURATION_MINUTES = 10_000
MIN_RATING = 0.0
MAX_RATING = 10.0


def check_title(title: str) -> Optional[str]:
    if not title:
        return "Title is required"
    if len(title) > MAX_TITLE_CHARS:
        return f"Title must be at most {MAX_TITLE_CHARS} characters"
    return None


def check_fields(
    *,
    description: Optional[str] = None,
    release_year: Optional[int] = None,
    duration: Optional[int] = None,
    poster_url: Optional[str] = None,
    video_url: Optional[str] = None,
    categories: Optional[List[str]] = None,
    rating: Optional[float] = None,
) -> Optional[str]:
    if description is not None and len(description) > MAX_DESCRIPTION_CHARS:
        return f"Description must be at most {MAX_DESCRIPTION_CHARS} characters"
    if release_year is not None and not MIN_RELEASE_YEAR <= release_year <= MAX_RELEASE_YEAR:
        return f"Release year must be between {MIN_RELEASE_YEAR} and {MAX_RELEASE_YEAR}"
    if duration is not None and not 0 <= duration <= MAX_DURATION_MINUTES:
        return f"Duration must be between 0 and {MAX_DURATION_MINUTES} minutes"
    for url in (poster_url, video_url):
        if url is not None and len(url) > MAX_URL_CHARS:
            return f"URLs must be at most {MAX_URL_CHARS} characters"
    if categories is not None:
        if len(categories) > MAX_CATEGORIES:
            return f"At most {MAX_CATEGORIES} categories are allowed"
        if any(len(tag) > MAX_CATEGORY_CHARS for tag in categories):
            return f"Category names must be at most {MAX_CATEGORY_CHARS} characters"
    if rating is not None and not MIN_RATING <= rating <= MAX_RATING:
        return f"Rating must be between {MIN_RATING:g} and {MAX_RATING:g}"
    return None
