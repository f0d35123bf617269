"""Client utilities for the SerpAPI Google Maps engine."""

from __future__ import annotations

import logging
import random
import time
from typing import Any, Dict, Iterable, Optional

import requests
from serpapi import GoogleSearch

from business_finder.models import ProviderPage, ProviderQueryParams

logger = logging.getLogger(__name__)

RETRY_DELAY_SECONDS = 1.2
# SerpAPI reports an empty result set as an error payload.
_NO_RESULTS_MARKER = "hasn't returned any results"


class SerpApiError(RuntimeError):
    """Raised when SerpAPI returns an error payload."""


def fetch_page(params: ProviderQueryParams, retries: int = 0) -> ProviderPage:
    """Fetch one page of Google Maps results.

    Network failures are retried `retries` times with a jittered delay and then
    re-raised; error payloads raise SerpApiError straight away.
    """
    request_params = params.to_request()

    attempt = 0
    while True:
        attempt += 1
        try:
            logger.info(
                "Calling SerpAPI (attempt %s) for q=%s gl=%s start=%s",
                attempt,
                params.keyword,
                params.country,
                params.start,
            )
            data = GoogleSearch(request_params).get_dict()
            break
        except requests.RequestException as exc:
            logger.warning("SerpAPI request failed (attempt %s/%s): %s", attempt, retries + 1, exc)
            if attempt > retries:
                raise
            time.sleep(RETRY_DELAY_SECONDS + random.uniform(0, 0.8))

    return parse_page(data)


def parse_page(data: Optional[Dict[str, Any]]) -> ProviderPage:
    """Turn a raw SerpAPI payload into a ProviderPage."""
    if not data:
        raise SerpApiError("SerpAPI returned an empty payload.")

    error = data.get("error")
    if error:
        if _NO_RESULTS_MARKER in str(error):
            logger.info("SerpAPI reported no results: %s", error)
            return ProviderPage()
        raise SerpApiError(f"SerpAPI returned an error response: {error}")

    items = list(_extract_items(data))
    pagination = data.get("serpapi_pagination") or {}
    next_page = pagination.get("next") if isinstance(pagination, dict) else None
    return ProviderPage(results=items, next_page_token=next_page or None)


def _extract_items(data: Dict[str, Any]) -> Iterable[Any]:
    """SerpAPI sometimes returns local_results as a list or nested dict."""
    local_results = data.get("local_results")
    if isinstance(local_results, list):
        return local_results
    if isinstance(local_results, dict):
        logger.debug("local_results is dict with keys: %s", list(local_results.keys())[:10])
        for maybe in (local_results.get("places"), local_results.get("results")):
            if isinstance(maybe, list):
                return maybe
    return []
