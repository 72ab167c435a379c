from __future__ import annotations

import logging

from ..enrichment.timeout import race_deadline
from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..llm.groq_client import generate_text, is_configured
from ..query.models import Locale
from ..search.models import POIRecord
from .rules import MAX_REASON_LENGTH, build_reason_by_rule

logger = logging.getLogger(__name__)

ELLIPSIS = "..."

SYSTEM_PROMPTS: dict[Locale, str] = {
    Locale.ZH: "你是专业的瑜伽顾问，善于写简洁有力的推荐语。",
    Locale.EN: "You are a local fitness guide who writes short, punchy venue recommendations.",
}


def build_prompt(poi: POIRecord, intent: str, locale: Locale = Locale.ZH) -> str:
    if locale is Locale.ZH:
        distance = f"距离{int(poi.distance_meters + 0.5)}米" if poi.distance_meters is not None else ""
        area = f"位于{poi.city_area}" if poi.city_area else ""
        rating = f"评分{poi.rating}" if poi.rating else ""
        return (
            f"为场馆“{poi.name}”写一句15字以内的推荐理由。\n"
            f"场馆信息：{distance} {area} {rating}\n"
            f"用户需求：{intent}\n"
            "要求：简洁有吸引力，突出适合该用户需求的特点。"
        )

    distance = f"{int(poi.distance_meters + 0.5)} m away" if poi.distance_meters is not None else ""
    area = f"in {poi.city_area}" if poi.city_area else ""
    rating = f"rated {poi.rating}" if poi.rating else ""
    return (
        f'Write a recommendation of at most 6 words for "{poi.name}".\n'
        f"Venue: {distance} {area} {rating}\n"
        f"User goal: {intent}\n"
        "Keep it catchy and say why it suits the user's goal. Reply with the sentence only."
    )


def clip_reason(text: str, limit: int = MAX_REASON_LENGTH) -> str:
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


async def build_reason_by_llm(
    poi: POIRecord,
    intent: str,
    locale: Locale = Locale.ZH,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> str:
    """Ask the LLM for a reason; any failure yields the rule-based reason."""
    if not is_configured(config):
        logger.debug("LLM not configured, using rule-based reason for %s", poi.id)
        return build_reason_by_rule(poi, intent, locale)

    try:
        text = await race_deadline(
            generate_text(SYSTEM_PROMPTS[locale], build_prompt(poi, intent, locale), config),
            config.timeout,
        )
        reason = clip_reason(text.strip())
    except Exception:
        logger.warning("LLM reason failed for POI %s, falling back to rules", poi.id, exc_info=True)
        return build_reason_by_rule(poi, intent, locale)

    return reason or build_reason_by_rule(poi, intent, locale)


async def build_reason(
    poi: POIRecord,
    intent: str,
    use_generative: bool,
    *,
    locale: Locale = Locale.ZH,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> str:
    if use_generative:
        return await build_reason_by_llm(poi, intent, locale, config)
    return build_reason_by_rule(poi, intent, locale)
