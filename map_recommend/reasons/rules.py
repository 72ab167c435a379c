from __future__ import annotations

import math

from ..query.models import Locale
from ..search.models import POIRecord

MAX_REASON_LENGTH = 30
SEPARATORS: dict[Locale, str] = {
    Locale.ZH: "·",
    Locale.EN: " · ",
}

NEARBY_LIMIT_M = 5000
WALKABLE_LIMIT_M = 500
CLOSE_LIMIT_M = 2000

HIGH_RATING = 4.5
GOOD_RATING = 4.0

_DISTANCE_TEMPLATES: dict[Locale, tuple[str, str, str]] = {
    # (walkable, close, within)
    Locale.ZH: ("步行可达 {m}米", "距离约{km}公里", "{km}公里内"),
    Locale.EN: ("{m} m walk", "About {km} km", "Within {km} km"),
}

_AREA_TEMPLATE: dict[Locale, str] = {
    Locale.ZH: "位于{area}",
    Locale.EN: "In {area}",
}

_RATING_PHRASES: dict[Locale, tuple[str, str]] = {
    # (high, good)
    Locale.ZH: ("高评分推荐", "口碑不错"),
    Locale.EN: ("Highly rated", "Well regarded"),
}

_INTENT_PHRASES: dict[str, str] = {
    "肩颈舒缓": "适合肩颈放松课程",
    "核心训练": "核心力量训练佳选",
    "冥想放松": "静心冥想好去处",
    "入门体验": "新手友好环境",
    "高温瑜伽": "专业热瑜伽体验",
    "阴瑜伽": "深度拉伸放松",
    "流瑜伽": "动态流畅练习",
    "瑜伽练习": "瑜伽练习优选",
    "neck relief": "Eases neck and shoulders",
    "core strength": "Core training pick",
    "meditation": "Calm spot to meditate",
    "beginner experience": "Beginner friendly",
    "hot yoga": "Hot yoga specialist",
    "yin yoga": "Deep stretch sessions",
    "vinyasa flow": "Dynamic flow classes",
    "yoga practice": "Great for yoga",
}

_INTENT_FALLBACK: dict[Locale, str] = {
    Locale.ZH: "适合{intent}体验",
    Locale.EN: "Good fit for {intent}",
}


def _round_half_up(value: float, digits: int = 0) -> float:
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def distance_clause(distance_meters: float | None, locale: Locale = Locale.ZH) -> str | None:
    if distance_meters is None or distance_meters >= NEARBY_LIMIT_M:
        return None

    walkable, close, within = _DISTANCE_TEMPLATES[locale]
    if distance_meters <= WALKABLE_LIMIT_M:
        return walkable.format(m=int(_round_half_up(distance_meters)))

    km = f"{_round_half_up(distance_meters / 1000, 1):.1f}"
    if distance_meters <= CLOSE_LIMIT_M:
        return close.format(km=km)
    return within.format(km=km)


def area_clause(poi: POIRecord, locale: Locale = Locale.ZH) -> str | None:
    if poi.city_area and poi.city_area != poi.city_name:
        return _AREA_TEMPLATE[locale].format(area=poi.city_area)
    return None


def rating_clause(rating: float | None, locale: Locale = Locale.ZH) -> str | None:
    if rating is None or not rating > 0:
        return None
    high, good = _RATING_PHRASES[locale]
    if rating >= HIGH_RATING:
        return high
    if rating >= GOOD_RATING:
        return good
    return None


def intent_clause(intent: str, locale: Locale = Locale.ZH) -> str:
    phrase = _INTENT_PHRASES.get(intent)
    if phrase is not None:
        return phrase
    return _INTENT_FALLBACK[locale].format(intent=intent)


def build_reason_by_rule(poi: POIRecord, intent: str, locale: Locale = Locale.ZH) -> str:
    """
    Compose a short reason from distance, district, rating and intent.

    Pure and deterministic. When the full sentence runs past
    MAX_REASON_LENGTH only the first clause and the intent clause are kept.
    """
    intent_desc = intent_clause(intent, locale)
    parts = [
        clause
        for clause in (
            distance_clause(poi.distance_meters, locale),
            area_clause(poi, locale),
            rating_clause(poi.rating, locale),
        )
        if clause
    ]
    parts.append(intent_desc)

    separator = SEPARATORS[locale]
    reason = separator.join(parts)
    if len(reason) > MAX_REASON_LENGTH:
        reason = separator.join(parts[:1] + [intent_desc]) if len(parts) > 1 else intent_desc
    return reason
