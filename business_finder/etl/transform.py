"""Utilities for transforming SerpAPI local results into Business records."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, List, Optional

from business_finder.etl.extractors import extract_email, extract_place_id
from business_finder.models import Business

logger = logging.getLogger(__name__)


def to_business(raw: Dict[str, Any]) -> Optional[Business]:
    """Map one raw local result to a Business; returns None when it has no title."""
    name = _text_or_none(raw.get("title"))
    if not name:
        return None

    place_id = _text_or_none(raw.get("place_id")) or extract_place_id(raw.get("link"))

    return Business(
        name=name,
        address=_text_or_none(raw.get("address")),
        phone=_text_or_none(raw.get("phone")),
        website=_text_or_none(raw.get("website")),
        rating=_safe_float(raw.get("rating")),
        review_count=_safe_int(raw.get("reviews")),
        category=_first_category(raw.get("categories")),
        hours=_text_or_none(raw.get("hours")),
        place_id=place_id,
        email=extract_email(raw),
    )


def normalize_results(items: Iterable[Any]) -> List[Business]:
    businesses: List[Business] = []
    for raw in items:
        if not isinstance(raw, dict):
            continue
        business = to_business(raw)
        if business is None:
            logger.debug("Skipping result without title: keys=%s", list(raw.keys())[:10])
            continue
        businesses.append(business)
    return businesses


def _first_category(categories: Any) -> Optional[str]:
    if isinstance(categories, list) and categories:
        return _text_or_none(categories[0])
    return None


def _text_or_none(value: Any) -> Optional[str]:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    value_str = str(value).strip()
    return value_str or None


def _safe_float(value: Any) -> Optional[float]:
    try:
        if value is None or isinstance(value, bool):
            return None
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _safe_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, int):
        return value

    if isinstance(value, str):
        digits = "".join(ch for ch in value if ch.isdecimal())
        if digits:
            return int(digits)
    return None
