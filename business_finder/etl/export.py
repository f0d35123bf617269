"""CSV and JSON renderings of a business list for download."""

from __future__ import annotations

import csv
import io
import json
from typing import Iterable, List, Optional, Sequence

from business_finder.models import Business

CSV_FIELDS = ("name", "phone", "address", "website", "rating", "reviewCount", "category", "hours")
CSV_HEADERS = ("שם", "טלפון", "כתובת", "אתר", "דירוג", "מספר ביקורות", "קטגוריה", "שעות פעילות")


def _cell(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_csv(businesses: Iterable[Business], headers: Optional[Sequence[str]] = CSV_HEADERS) -> str:
    """Every cell is double-quoted; embedded quotes are doubled."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    if headers:
        writer.writerow(headers)
    for business in businesses:
        row = business.to_dict()
        writer.writerow([_cell(row[name]) for name in CSV_FIELDS])
    return buffer.getvalue().rstrip("\n")


def to_json_export(businesses: Iterable[Business]) -> str:
    records: List[dict] = [
        {
            "name": business.name or "",
            "phone": business.phone or "",
            "area": business.address or "",
            "rating": business.rating if business.rating is not None else "",
            "email": business.email or "",
        }
        for business in businesses
    ]
    return json.dumps(records, ensure_ascii=False, indent=2)
