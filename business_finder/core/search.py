"""Search entrypoint: validates a query, runs pagination, and classifies the outcome."""

from __future__ import annotations

import logging
from functools import partial
from typing import Optional

from business_finder.core.config import Settings
from business_finder.core.pagination import PageFetcher, PaginationAggregator
from business_finder.models import (
    InvalidQueryError,
    OutcomeKind,
    ProviderQueryParams,
    SearchOutcome,
    SearchQuery,
)
from business_finder.vendors import serpapi_maps

logger = logging.getLogger(__name__)

# User-facing copy shown by the Hebrew front end.
MESSAGES = {
    "keyword_required": "יש להזין מילות חיפוש",
    "keyword_too_short": "יש להזין לפחות 2 תווים",
    OutcomeKind.MISCONFIGURED: "API key not configured",
    OutcomeKind.NOT_FOUND: "לא נמצאו תוצאות לחיפוש שלך",
    OutcomeKind.PROVIDER_ERROR: "אירעה שגיאה בחיפוש",
}


class BusinessSearchService:
    def __init__(
        self,
        api_key: Optional[str],
        fetch_page: PageFetcher = serpapi_maps.fetch_page,
        language: str = "en",
        country: str = "il",
        page_size: int = 100,
        aggregator: Optional[PaginationAggregator] = None,
    ) -> None:
        self._api_key = api_key or ""
        self._language = language
        self._country = country
        self._page_size = page_size
        self._aggregator = aggregator or PaginationAggregator(fetch_page)

    @classmethod
    def from_settings(cls, settings: Settings) -> "BusinessSearchService":
        return cls(
            api_key=settings.serpapi_api_key,
            fetch_page=partial(serpapi_maps.fetch_page, retries=settings.serpapi_retries),
            language=settings.language,
            country=settings.country,
            page_size=settings.page_size,
        )

    def build_params(self, query: SearchQuery) -> ProviderQueryParams:
        return ProviderQueryParams(
            keyword=query.keyword,
            api_key=self._api_key,
            language=self._language,
            country=query.region,
            page_size=self._page_size,
        )

    def search(self, keyword: Optional[str], region: Optional[str] = None) -> SearchOutcome:
        # The service only covers its configured country; callers cannot widen it.
        if region and region.lower() != self._country:
            logger.debug("Ignoring requested region=%s, using %s", region, self._country)

        try:
            query = SearchQuery.create(keyword, self._country)
        except InvalidQueryError as exc:
            key = "keyword_required" if exc.empty else "keyword_too_short"
            return SearchOutcome(kind=OutcomeKind.INVALID_INPUT, message=MESSAGES[key], detail=str(exc))

        if not self._api_key:
            logger.error("SERPAPI_API_KEY is missing; refusing search for keyword=%s", query.keyword)
            return SearchOutcome(
                kind=OutcomeKind.MISCONFIGURED, message=MESSAGES[OutcomeKind.MISCONFIGURED]
            )

        logger.info("Processing search keyword=%s country=%s", query.keyword, query.region)
        try:
            aggregated = self._aggregator.collect(self.build_params(query))
        except Exception as exc:  # noqa: BLE001
            logger.error("SerpAPI search error for keyword=%s: %s", query.keyword, exc)
            return SearchOutcome(
                kind=OutcomeKind.PROVIDER_ERROR,
                message=MESSAGES[OutcomeKind.PROVIDER_ERROR],
                detail=str(exc),
                pages_fetched=1,
            )

        if not aggregated.businesses:
            logger.warning("No results found for keyword=%s", query.keyword)
            return SearchOutcome(
                kind=OutcomeKind.NOT_FOUND,
                message=MESSAGES[OutcomeKind.NOT_FOUND],
                pages_fetched=aggregated.pages_fetched,
            )

        logger.info(
            "Returning %d businesses from %d page(s)", len(aggregated.businesses), aggregated.pages_fetched
        )
        return SearchOutcome(
            kind=OutcomeKind.SUCCESS,
            businesses=aggregated.businesses,
            pages_fetched=aggregated.pages_fetched,
        )
