"""Multi-page result aggregation for a single search."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List

from business_finder.etl.transform import normalize_results
from business_finder.models import Business, ProviderPage, ProviderQueryParams

logger = logging.getLogger(__name__)

# Pages requested after the first one; bounds SerpAPI cost per search.
MAX_EXTRA_PAGES = 3
# SerpAPI's fixed Google Maps page size, independent of how many results came back.
PAGE_OFFSET_STRIDE = 20

PageFetcher = Callable[[ProviderQueryParams], ProviderPage]


@dataclass
class AggregationResult:
    businesses: List[Business] = field(default_factory=list)
    pages_fetched: int = 0


class PaginationAggregator:
    """Fetches up to 1 + max_extra_pages pages sequentially and merges them.

    A failure on the first page propagates. A failure on any later page stops
    pagination and keeps what was already collected.
    """

    def __init__(
        self,
        fetch_page: PageFetcher,
        max_extra_pages: int = MAX_EXTRA_PAGES,
        page_offset_stride: int = PAGE_OFFSET_STRIDE,
    ) -> None:
        self._fetch_page = fetch_page
        self._max_extra_pages = max_extra_pages
        self._page_offset_stride = page_offset_stride

    def page_offset(self, page_number: int) -> int:
        return self._page_offset_stride * (page_number - 1)

    def collect(self, params: ProviderQueryParams) -> AggregationResult:
        first = self._fetch_page(params)
        result = AggregationResult(pages_fetched=1)
        logger.info("Fetched %d results on page 1", len(first.results))

        if not first.results:
            return result

        result.businesses.extend(normalize_results(first.results))
        if not first.next_page_token:
            return result

        for page_number in range(2, self._max_extra_pages + 2):
            page_params = params.with_start(self.page_offset(page_number))
            result.pages_fetched += 1
            try:
                page = self._fetch_page(page_params)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Error fetching page %d, keeping earlier results: %s", page_number, exc)
                break

            if not page.results:
                logger.info("Page %d returned no results; stopping.", page_number)
                break

            added = normalize_results(page.results)
            result.businesses.extend(added)
            logger.info("Added %d more businesses from page %d", len(added), page_number)

            if not page.next_page_token:
                break

        return result
