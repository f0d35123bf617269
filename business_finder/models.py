"""Core data models shared by the business search pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

MIN_KEYWORD_LENGTH = 2


class InvalidQueryError(ValueError):
    """Raised when a search keyword is empty or too short."""

    def __init__(self, message: str, empty: bool) -> None:
        super().__init__(message)
        self.empty = empty


@dataclass(frozen=True, slots=True)
class SearchQuery:
    keyword: str
    region: str

    @classmethod
    def create(cls, keyword: Optional[str], region: str) -> "SearchQuery":
        cleaned = (keyword or "").strip()
        if not cleaned:
            raise InvalidQueryError("Keyword must be provided.", empty=True)
        if len(cleaned) < MIN_KEYWORD_LENGTH:
            raise InvalidQueryError(
                f"Keyword must be at least {MIN_KEYWORD_LENGTH} characters.", empty=False
            )
        return cls(keyword=cleaned, region=region)


@dataclass(frozen=True, slots=True)
class ProviderQueryParams:
    """Request parameters for one SerpAPI Google Maps page."""

    keyword: str
    api_key: str
    language: str
    country: str
    page_size: int
    engine: str = "google_maps"
    result_type: str = "search"
    start: Optional[int] = None

    def with_start(self, start: int) -> "ProviderQueryParams":
        return replace(self, start=start)

    def to_request(self) -> Dict[str, str]:
        params = {
            "engine": self.engine,
            "q": self.keyword,
            "type": self.result_type,
            "api_key": self.api_key,
            "hl": self.language,
            "gl": self.country,
            "num": str(self.page_size),
        }
        if self.start is not None:
            params["start"] = str(self.start)
        return params


@dataclass(frozen=True, slots=True)
class ProviderPage:
    """One page of raw provider results plus the provider's next-page signal."""

    results: List[Dict[str, Any]] = field(default_factory=list)
    next_page_token: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Business:
    """Normalized snapshot of a business returned by SerpAPI Google Maps."""

    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    category: Optional[str] = None
    hours: Optional[str] = None
    place_id: Optional[str] = None
    email: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "address": self.address,
            "phone": self.phone,
            "website": self.website,
            "rating": self.rating,
            "reviewCount": self.review_count,
            "category": self.category,
            "hours": self.hours,
            "placeId": self.place_id,
            "email": self.email,
        }


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    MISCONFIGURED = "misconfigured"
    PROVIDER_ERROR = "provider_error"


@dataclass(frozen=True)
class SearchOutcome:
    kind: OutcomeKind
    businesses: List[Business] = field(default_factory=list)
    message: Optional[str] = None
    detail: Optional[str] = None
    pages_fetched: int = 0

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS
