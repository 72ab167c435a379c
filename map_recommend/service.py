from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from .config import DEFAULT_SERVICE_CONFIG, ServiceConfig
from .enrichment.models import EnrichmentResult, ResponseEnvelope, SearchEcho
from .enrichment.orchestrator import enrich
from .errors import ConfigurationError, InvalidInput, MapRecommendError
from .query.models import Query
from .query.normalizer import normalize
from .search.amap_client import search

logger = logging.getLogger(__name__)


def _validate(query: Query, config: ServiceConfig) -> None:
    if not query.has_valid_coordinates:
        raise InvalidInput("Missing or invalid lat/lng parameters")
    if not config.search.api_key:
        raise ConfigurationError("AMAP_KEY is not configured")


async def run_pipeline(
    query: Query,
    config: ServiceConfig = DEFAULT_SERVICE_CONFIG,
    client: httpx.AsyncClient | None = None,
) -> EnrichmentResult:
    """
    Searching -> Enriching -> Assembling for an already-normalized query.

    Only validation, configuration and search failures raise; enrichment
    degrades internally and never does.
    """
    _validate(query, config)

    logger.info(
        "Searching %s @%s,%s radius=%sm locale=%s",
        query.biz_type, query.latitude, query.longitude, query.radius_m, query.locale.value,
    )
    pois = await search(query, config.search, client)
    logger.info("Search completed, found %d POIs", len(pois))

    if query.enable_reasons and pois:
        logger.debug("Generating reasons, intent=%s llm=%s", query.intent, query.use_generative)
        pois = await enrich(
            pois,
            query.intent,
            query.use_generative,
            config.reason_deadline_ms,
            locale=query.locale,
            config=config.llm,
        )

    return EnrichmentResult(
        pois=pois,
        total=len(pois),
        search_echo=SearchEcho.from_query(query),
        has_reasons=query.enable_reasons and any(p.recommend_reason for p in pois),
    )


async def recommend(
    params: Mapping[str, Any],
    config: ServiceConfig = DEFAULT_SERVICE_CONFIG,
    client: httpx.AsyncClient | None = None,
) -> ResponseEnvelope:
    """Handle one map-recommend request and wrap the outcome in an envelope."""
    try:
        query = normalize(params, config.search.default_radius_m)
        logger.info(
            "Normalized request type=%s bizType=%s lat=%s lng=%s radius=%s enableReasons=%s locale=%s",
            query.category, query.biz_type, query.latitude, query.longitude,
            query.radius_m, query.enable_reasons, query.locale.value,
        )
        result = await run_pipeline(query, config, client)
    except InvalidInput as exc:
        logger.info("Rejected request: %s", exc)
        return ResponseEnvelope.failure(exc.code, str(exc))
    except MapRecommendError as exc:
        logger.error("Map recommend failed: %s", exc)
        return ResponseEnvelope.failure(exc.code, str(exc))
    except Exception:
        logger.exception("Unexpected error while handling map recommend request")
        return ResponseEnvelope.failure(500, "Internal server error")

    return ResponseEnvelope.success(result)


async def recommend_simple(
    lat: float,
    lng: float,
    biz_type: str = "yoga",
    radius: int | None = None,
    config: ServiceConfig = DEFAULT_SERVICE_CONFIG,
    client: httpx.AsyncClient | None = None,
) -> ResponseEnvelope:
    """Legacy shortcut: search only, no reasons."""
    return await recommend(
        {"lat": lat, "lng": lng, "bizType": biz_type, "radius": radius, "enableReasons": False},
        config,
        client,
    )
