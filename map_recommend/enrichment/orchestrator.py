from __future__ import annotations

import asyncio
import logging

from ..errors import BatchTimeout
from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..query.models import Locale
from ..reasons.engine import build_reason
from ..reasons.rules import build_reason_by_rule
from ..search.models import POIRecord
from .timeout import race_deadline

logger = logging.getLogger(__name__)


async def _reasons_for_batch(
    pois: list[POIRecord],
    intent: str,
    use_generative: bool,
    locale: Locale,
    config: LLMConfig,
) -> list[str]:
    results = await asyncio.gather(
        *(
            build_reason(poi, intent, use_generative, locale=locale, config=config)
            for poi in pois
        ),
        return_exceptions=True,
    )

    reasons: list[str] = []
    for poi, result in zip(pois, results):
        if isinstance(result, BaseException):
            logger.warning(
                "Reason generation failed for POI %s: %s", poi.id, result,
                exc_info=result,
            )
            reasons.append(build_reason_by_rule(poi, intent, locale))
        else:
            reasons.append(result)
    return reasons


async def enrich(
    pois: list[POIRecord],
    intent: str,
    use_generative: bool,
    batch_deadline_ms: int,
    *,
    locale: Locale = Locale.ZH,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> list[POIRecord]:
    """
    Attach ``recommend_reason`` to every POI, or to none of them.

    Each item is computed independently and a failed item gets its
    rule-based reason. Reasons are written by index only once the whole
    batch has settled; if ``batch_deadline_ms`` elapses first the input list
    is returned untouched.
    """
    if not pois:
        return pois

    try:
        reasons = await race_deadline(
            _reasons_for_batch(pois, intent, use_generative, locale, config),
            batch_deadline_ms / 1000,
        )
    except BatchTimeout:
        logger.warning(
            "Reason generation for %d POIs exceeded %dms, returning them without reasons",
            len(pois), batch_deadline_ms,
        )
        return pois

    for poi, reason in zip(pois, reasons):
        poi.recommend_reason = reason
    return pois
