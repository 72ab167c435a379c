from __future__ import annotations

import logging
import math
from typing import Any

import httpx

from ..errors import ConfigurationError, ProviderError
from ..query.models import Locale, Query
from .config import DEFAULT_SEARCH_CONFIG, SearchConfig
from .models import POIRecord

logger = logging.getLogger(__name__)

MAX_PHOTOS = 3

_YOGA_BIZ_TYPES = frozenset({"yoga", "瑜伽"})

# Union of synonyms; AMap treats "|" as OR between keywords
_YOGA_KEYWORDS: dict[Locale, str] = {
    Locale.ZH: "瑜伽|瑜珈|yoga|瑜伽馆|瑜伽会所|瑜伽工作室",
    Locale.EN: "yoga|yoga studio|yoga center|pilates",
}


def build_keywords(query: Query) -> str:
    if query.biz_type in _YOGA_BIZ_TYPES:
        return _YOGA_KEYWORDS[query.locale]
    return query.biz_type


def build_params(query: Query, config: SearchConfig = DEFAULT_SEARCH_CONFIG) -> dict[str, str]:
    params: dict[str, Any] = {
        "key": config.api_key,
        # AMap wants "lng,lat"
        "location": f"{query.longitude},{query.latitude}",
        "radius": query.radius_m,
        "offset": config.page_size,
        "page": 1,
        "keywords": build_keywords(query),
        "extensions": "all",
        "output": "json",
    }
    return {k: str(v) for k, v in params.items() if v is not None and v != ""}


# ---------------------------------------------------------------------------
# Provider record parsing
# ---------------------------------------------------------------------------


def _text(value: Any) -> str | None:
    """AMap sends ``[]`` or ``""`` for missing strings."""
    if value is None or isinstance(value, (list, dict)):
        return None
    text = str(value).strip()
    return text or None


def _number(value: Any) -> float | None:
    text = _text(value)
    if text is None:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _photo_urls(photos: Any) -> list[str]:
    if not isinstance(photos, list):
        return []
    urls = [p.get("url") for p in photos if isinstance(p, dict)]
    return [u for u in urls if isinstance(u, str) and u][:MAX_PHOTOS]


def parse_poi(raw: dict[str, Any]) -> POIRecord | None:
    poi_id = _text(raw.get("id"))
    name = _text(raw.get("name"))
    if poi_id is None or name is None:
        return None

    biz_ext = raw.get("biz_ext") if isinstance(raw.get("biz_ext"), dict) else {}

    distance = _number(raw.get("distance"))
    if distance is not None and distance < 0:
        distance = None

    return POIRecord(
        id=poi_id,
        name=name,
        type_name=_text(raw.get("type")),
        type_code=_text(raw.get("typecode")),
        address=_text(raw.get("address")),
        city_area=_text(raw.get("adname")),
        city_name=_text(raw.get("cityname")),
        coordinates=_text(raw.get("location")),
        phone=_text(raw.get("tel")),
        distance_meters=distance,
        rating=_number(biz_ext.get("rating")),
        cost_estimate=_number(biz_ext.get("cost")),
        photo_urls=_photo_urls(raw.get("photos")),
    )


def parse_response(data: Any) -> list[POIRecord]:
    if not isinstance(data, dict):
        raise ProviderError("AMap API error: response is not a JSON object")

    if str(data.get("status")) != "1":
        info = data.get("info") or data.get("infocode") or "Unknown error"
        raise ProviderError(f"AMap API error: {info}")

    raw_pois = data.get("pois")
    if not isinstance(raw_pois, list):
        return []

    pois: list[POIRecord] = []
    for raw in raw_pois:
        poi = parse_poi(raw) if isinstance(raw, dict) else None
        if poi is None:
            logger.warning("Skipping AMap POI without id/name: %r", raw)
            continue
        pois.append(poi)
    return pois


# ---------------------------------------------------------------------------
# Remote call
# ---------------------------------------------------------------------------


async def _fetch(client: httpx.AsyncClient, url: str, params: dict[str, str]) -> Any:
    try:
        response = await client.get(url, params=params)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise ProviderError(f"HTTP request failed: {exc}") from exc

    try:
        return response.json()
    except ValueError as exc:
        raise ProviderError(
            f"Response parse error: {exc}, raw: {response.text[:200]}"
        ) from exc


async def search(
    query: Query,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
    client: httpx.AsyncClient | None = None,
) -> list[POIRecord]:
    """
    Search POIs around the query center.

    Single attempt, no retries. Raises ConfigurationError when no API key is
    configured and ProviderError for transport, parse or provider-status
    failures. Zero results is an empty list, not an error.
    """
    if not config.api_key:
        raise ConfigurationError("AMAP_KEY is not configured")

    params = build_params(query, config)
    logger.debug(
        "AMap place/around keywords=%s location=%s radius=%s",
        params.get("keywords"), params.get("location"), params.get("radius"),
    )

    if client is not None:
        data = await _fetch(client, config.endpoint, params)
    else:
        async with httpx.AsyncClient(timeout=config.timeout) as own_client:
            data = await _fetch(own_client, config.endpoint, params)

    return parse_response(data)
