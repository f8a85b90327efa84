"""OpenUV lookup used to fill in a UV index other providers omit."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from ..config import Settings
from ..conversions import round_int
from ..exceptions import ApiReturnedError, HttpRequestFailedError, ResponseParseError
from ..models import Location
from ..redaction import sanitize_text

OPEN_UV_API_URL = "https://api.openuv.io/api/v1/uv"


class _UvResult(BaseModel):
    uv: float


class _UvResponse(BaseModel):
    result: _UvResult


def fetch_uv_index(
    client: httpx.Client,
    settings: Settings,
    location: Location,
    logger: logging.Logger,
) -> int | None:
    """Return the current UV index, or None when no OpenUV key is configured."""
    if not settings.api_key_open_uv:
        return None

    logger.debug("OpenUV request for %s", location.name)
    try:
        response = client.get(
            OPEN_UV_API_URL,
            params={"lat": location.latitude, "lng": location.longitude},
            headers={"x-access-token": settings.api_key_open_uv},
        )
    except httpx.HTTPError as exc:
        raise HttpRequestFailedError(
            f"OpenUV request failed: {sanitize_text(str(exc))}"
        ) from exc

    try:
        payload: Any = response.json()
    except ValueError as exc:
        raise ResponseParseError(
            f"OpenUV returned non-JSON response (status {response.status_code})."
        ) from exc

    if isinstance(payload, dict) and "result" not in payload:
        message = payload.get("error") or payload.get("message") or "Unknown error"
        raise ApiReturnedError(f"OpenUV: {message}")

    try:
        data = _UvResponse.model_validate(payload)
    except ValidationError as exc:
        raise ResponseParseError(f"OpenUV returned an unexpected payload: {exc}") from exc
    return max(0, round_int(data.result.uv))
