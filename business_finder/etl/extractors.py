"""Pattern helpers for pulling contact details out of loosely structured fields."""

from __future__ import annotations

import re
from typing import Any, Dict, Optional

_EMAIL_PATTERN = r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}"
EMAIL_REGEX = re.compile(_EMAIL_PATTERN)
MAILTO_REGEX = re.compile(rf"mailto:({_EMAIL_PATTERN})")

# Ordered by preference; the first pattern that matches wins.
CID_REGEX = re.compile(r"[?&]cid=([^&]+)")
DATA_TOKEN_REGEX = re.compile(r"!1s([^!]+)!")
PLACE_PATH_REGEX = re.compile(r"place/([^/]+)")
COORDS_REGEX = re.compile(r"@(-?\d+\.\d+),(-?\d+\.\d+)")


def find_email(text: Any) -> Optional[str]:
    if not isinstance(text, str):
        return None
    match = EMAIL_REGEX.search(text)
    return match.group(0) if match else None


def extract_email(raw: Dict[str, Any]) -> Optional[str]:
    """Best-effort email lookup: description text first, then a mailto website."""
    email = find_email(raw.get("description"))
    if email:
        return email

    website = raw.get("website")
    if isinstance(website, str) and "mailto:" in website:
        match = MAILTO_REGEX.search(website)
        if match:
            return match.group(1)
    return None


def extract_place_id(url: Any) -> Optional[str]:
    """Derive a place identifier from a Google Maps location URL."""
    if not isinstance(url, str) or not url:
        return None

    match = CID_REGEX.search(url)
    if match:
        return match.group(1)

    match = DATA_TOKEN_REGEX.search(url)
    if match:
        token = match.group(1)
        return token[2:] if token.startswith("0x") else token

    match = PLACE_PATH_REGEX.search(url)
    if match:
        return match.group(1)

    match = COORDS_REGEX.search(url)
    if match:
        return f"{match.group(1)},{match.group(2)}"

    return None
