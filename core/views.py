"""JSON API views for chart recommendation and rendering.

Every endpoint accepts a POST with a JSON object body carrying a `data` key (the
payload to chart). Malformed requests and configuration errors return HTTP 400
with `{"error": ...}`; data problems never do, they only degrade the result.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import Any

from django.conf import settings
from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from analysis.engine import profile_data
from analysis.values import coerce_json_value, locate_record_set
from core.charting.errors import ChartConfigurationError
from core.charting.recommender import generate_chart_config
from core.charting.render import to_complete_option_document
from core.charting.schema import ChartType, coerce_chart_type
from core.charting.scoring import recommend_chart_type, top_chart_types
from core.charting.snapshot_codec import decode_chart_config, encode_chart_config
from core.charting.validator import ensure_valid_chart_config

logger = logging.getLogger(__name__)


class BadRequest(Exception):
    """Raised by request parsing helpers; mapped to HTTP 400."""


def _chart_studio_setting(name: str, default: int) -> int:
    return int(getattr(settings, "CHART_STUDIO", {}).get(name, default))


def _parse_body(request: HttpRequest) -> dict[str, Any]:
    """Return the JSON object body of a request.

    Raises:
        BadRequest: When the body is not a JSON object with a `data` key, or the
            payload exceeds the configured row limit.
    """

    try:
        body = json.loads(request.body or b"null")
    except (ValueError, UnicodeDecodeError) as exc:
        raise BadRequest(f"Request body is not valid JSON: {exc}") from exc
    if not isinstance(body, dict):
        raise BadRequest("Request body must be a JSON object.")
    if "data" not in body:
        raise BadRequest("Request body must include a 'data' key.")

    max_rows = _chart_studio_setting("MAX_ROWS", 10_000)
    row_count = locate_record_set(coerce_json_value(body["data"])).row_count
    if row_count > max_rows:
        raise BadRequest(f"Payload has {row_count} rows; the limit is {max_rows}.")
    return body


def _parse_chart_type(raw: object) -> ChartType | None:
    if raw is None or raw == "":
        return None
    chart_type = coerce_chart_type(raw)
    if chart_type is None:
        raise BadRequest(f"Unknown chart type: {raw!r}.")
    return chart_type


def _error(message: str) -> JsonResponse:
    return JsonResponse({"error": message}, status=400)


@csrf_exempt
@require_POST
def profile_api(request: HttpRequest) -> JsonResponse:
    """Return structure, features, correlations and patterns for a payload."""

    try:
        body = _parse_body(request)
    except BadRequest as exc:
        return _error(str(exc))

    profile = profile_data(body["data"])
    return JsonResponse(
        {
            "structure": asdict(profile.structure),
            "features": asdict(profile.features),
            "correlations": [asdict(item) for item in profile.correlations],
            "patterns": [asdict(item) for item in profile.patterns],
        }
    )


@csrf_exempt
@require_POST
def recommend_api(request: HttpRequest) -> JsonResponse:
    """Return the recommended chart type and the top-N score table."""

    try:
        body = _parse_body(request)
        top = int(body.get("top") or _chart_studio_setting("DEFAULT_TOP", 3))
    except BadRequest as exc:
        return _error(str(exc))
    except (TypeError, ValueError):
        return _error("'top' must be an integer.")

    profile = profile_data(body["data"])
    recommended = recommend_chart_type(profile.structure, profile.features, profile.correlations)
    ranked = top_chart_types(profile.structure, profile.features, profile.correlations, max_count=top)
    return JsonResponse(
        {
            "recommended": recommended.value,
            "scores": [{"type": chart_type.value, "score": round(score, 4)} for chart_type, score in ranked],
        }
    )


@csrf_exempt
@require_POST
def option_api(request: HttpRequest) -> JsonResponse:
    """Synthesize a config for a payload and return it with the complete option document."""

    try:
        body = _parse_body(request)
        chart_type = _parse_chart_type(body.get("type"))
    except BadRequest as exc:
        return _error(str(exc))

    title = body.get("title")
    title = str(title) if title is not None else None
    config = generate_chart_config(body["data"], chart_type, title=title)
    return JsonResponse(
        {
            "type": config.type.value,
            "config": encode_chart_config(config),
            "option": to_complete_option_document(config, body["data"]),
        }
    )


@csrf_exempt
@require_POST
def render_api(request: HttpRequest) -> JsonResponse:
    """Render a caller-supplied encoded config against a payload."""

    try:
        body = _parse_body(request)
        config = decode_chart_config(body.get("config"))
        result = ensure_valid_chart_config(config)
    except BadRequest as exc:
        return _error(str(exc))
    except ChartConfigurationError as exc:
        return _error(f"Invalid chart config: {exc}")
    except ValueError as exc:
        return _error(f"Malformed chart config: {exc}")

    for warning in result.warnings:
        logger.warning("Rendering chart config with warning: %s", warning)
    option = to_complete_option_document(config, body["data"])
    return JsonResponse({"option": option, "warnings": list(result.warnings)})
