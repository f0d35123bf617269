"""HTTP entrypoint that serves business searches (Cloud Run friendly)."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict

from flask import Flask, Response, jsonify, request

from business_finder.core.config import get_settings
from business_finder.core.search import BusinessSearchService
from business_finder.etl.export import to_csv, to_json_export
from business_finder.models import OutcomeKind, SearchOutcome

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)
app.json.ensure_ascii = False

INTERNAL_ERROR_MESSAGE = "שגיאה פנימית"

_STATUS_BY_KIND = {
    OutcomeKind.SUCCESS: 200,
    OutcomeKind.NOT_FOUND: 404,
    OutcomeKind.INVALID_INPUT: 400,
    OutcomeKind.MISCONFIGURED: 500,
    OutcomeKind.PROVIDER_ERROR: 500,
}

_EXPORTS = {
    "csv": ("text/csv", "businesses.csv", to_csv),
    "json": ("application/json", "businesses.json", to_json_export),
}

# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    """Simple root to avoid 404 on GET /"""
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "serpapi_configured": bool(settings.serpapi_api_key),
                "country": settings.country,
                "revision": os.getenv("K_REVISION", "unknown"),
            }
        ),
        200,
    )


@app.post("/api/extract")
def extract_businesses() -> Any:
    """
    Run a search and return the normalized business list.
    Required JSON fields: keyword
    Optional: country (only the configured country is searched)
    """
    payload = _json_object()
    try:
        outcome = _run_search(payload)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Search request failed: %s", exc)
        return jsonify({"error": INTERNAL_ERROR_MESSAGE, "message": str(exc)}), 500

    if not outcome.ok:
        return _error_response(outcome)
    return jsonify({"businesses": [business.to_dict() for business in outcome.businesses]}), 200


@app.post("/api/export")
def export_businesses() -> Any:
    """Run a search and return the results as a CSV or JSON download."""
    payload = _json_object()
    export_format = str(payload.get("format") or "csv").lower()
    if export_format not in _EXPORTS:
        return jsonify({"error": f"unsupported format: {export_format}"}), 400

    try:
        outcome = _run_search(payload)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Export request failed: %s", exc)
        return jsonify({"error": INTERNAL_ERROR_MESSAGE, "message": str(exc)}), 500

    if not outcome.ok:
        return _error_response(outcome)

    mimetype, filename, render = _EXPORTS[export_format]
    return Response(
        render(outcome.businesses),
        mimetype=mimetype,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


# ---------- Internals ----------


def _json_object() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _build_service() -> BusinessSearchService:
    return BusinessSearchService.from_settings(get_settings())


def _run_search(payload: Dict[str, Any]) -> SearchOutcome:
    keyword = payload.get("keyword")
    country = payload.get("country")
    return _build_service().search(
        str(keyword) if keyword is not None else None,
        str(country) if country else None,
    )


def _error_response(outcome: SearchOutcome) -> Any:
    body: Dict[str, Any] = {"error": outcome.message, "kind": outcome.kind.value}
    if outcome.detail and outcome.kind is OutcomeKind.PROVIDER_ERROR:
        body["message"] = outcome.detail
    return jsonify(body), _STATUS_BY_KIND[outcome.kind]


def main() -> None:
    """Cloud Run injects PORT; WORKER_PORT/8080 is the local fallback."""
    port = get_settings().worker_port
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
