from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from .models import Locale, Query

DEFAULT_TYPE = "map-recommend"
DEFAULT_BIZ_TYPE = "yoga"

# ---------------------------------------------------------------------------
# Coordinate aliases, highest priority first
# ---------------------------------------------------------------------------

_LAT_ALIASES: tuple[tuple[str, ...], ...] = (
    ("lat",),
    ("latitude",),
    ("location", "lat"),
    ("location", "latitude"),
    ("coords", "lat"),
)

_LNG_ALIASES: tuple[tuple[str, ...], ...] = (
    ("lng",),
    ("lon",),
    ("longitude",),
    ("location", "lng"),
    ("location", "longitude"),
    ("coords", "lng"),
)

# ---------------------------------------------------------------------------
# Category / business type tables
# ---------------------------------------------------------------------------

_TYPE_MAP: dict[str, str] = {
    "map": "map-recommend",
    "map-recommend": "map-recommend",
    "地图": "map-recommend",
    "poi": "map-recommend",
    "yoga": "yoga",
    "pose": "yoga",
    "瑜伽": "yoga",
    "瑜珈": "yoga",
    "yujia": "yoga",
    "瑜伽馆": "yoga",
    "瑜珈馆": "yoga",
}

# Containment checks, evaluated in order
_TYPE_KEYWORDS: list[tuple[tuple[str, ...], str]] = [
    (("map", "地图", "poi"), "map-recommend"),
    (("yoga", "瑜", "pose"), "yoga"),
]

_YOGA_VARIANTS = frozenset({
    "yoga", "pose", "yujia",
    "瑜伽", "瑜珈", "瑜伽馆", "瑜珈馆", "瑜伽馆yoga",
})

_YOGA_KEYWORD: dict[Locale, str] = {
    Locale.ZH: "瑜伽",
    Locale.EN: "yoga",
}

_ZH_ALIASES = frozenset({"cn", "chinese"})

# ---------------------------------------------------------------------------
# Intent inference
# ---------------------------------------------------------------------------

DEFAULT_INTENT: dict[Locale, str] = {
    Locale.ZH: "瑜伽练习",
    Locale.EN: "yoga practice",
}

_SEQUENCE_INTENTS: dict[str, dict[Locale, str]] = {
    "neck-relief": {Locale.ZH: "肩颈舒缓", Locale.EN: "neck relief"},
    "core-strength": {Locale.ZH: "核心训练", Locale.EN: "core strength"},
    "meditation": {Locale.ZH: "冥想放松", Locale.EN: "meditation"},
    "beginner": {Locale.ZH: "入门体验", Locale.EN: "beginner experience"},
    "hot-yoga": {Locale.ZH: "高温瑜伽", Locale.EN: "hot yoga"},
    "yin-yoga": {Locale.ZH: "阴瑜伽", Locale.EN: "yin yoga"},
    "vinyasa": {Locale.ZH: "流瑜伽", Locale.EN: "vinyasa flow"},
    "flexibility": {Locale.ZH: "柔韧性训练", Locale.EN: "flexibility"},
    "stress-relief": {Locale.ZH: "压力释放", Locale.EN: "stress relief"},
    "balance": {Locale.ZH: "平衡训练", Locale.EN: "balance"},
}

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off"})


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _lookup(raw: Mapping[str, Any], path: tuple[str, ...]) -> Any:
    node: Any = raw
    for key in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node


def _first_defined(raw: Mapping[str, Any], aliases: tuple[tuple[str, ...], ...]) -> Any:
    for path in aliases:
        value = _lookup(raw, path)
        if value is not None:
            return value
    return None


def _to_float(value: Any) -> float:
    """Coerce to a finite float, NaN otherwise."""
    if value is None or isinstance(value, bool):
        return math.nan
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan
    return number if math.isfinite(number) else math.nan


def _to_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return default


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _first_text(*values: Any) -> str:
    for value in values:
        text = _text(value)
        if text:
            return text
    return ""


# ---------------------------------------------------------------------------
# Public normalizers
# ---------------------------------------------------------------------------


def extract_latitude(raw: Mapping[str, Any]) -> float:
    return _to_float(_first_defined(raw, _LAT_ALIASES))


def extract_longitude(raw: Mapping[str, Any]) -> float:
    return _to_float(_first_defined(raw, _LNG_ALIASES))


def normalize_type(value: Any) -> str:
    """Map a free-form route type onto ``map-recommend`` or ``yoga``."""
    s = _text(value).lower()
    if not s:
        return DEFAULT_TYPE

    if s in _TYPE_MAP:
        return _TYPE_MAP[s]

    for keywords, canonical in _TYPE_KEYWORDS:
        if any(k in s for k in keywords):
            return canonical

    return DEFAULT_TYPE


def normalize_biz_type(value: Any, locale: Locale = Locale.ZH) -> str:
    """Collapse yoga synonyms to the locale's search term; pass others through."""
    raw = _text(value).lower()
    if not raw:
        return _YOGA_KEYWORD[locale]

    if raw in _YOGA_VARIANTS or "瑜" in raw or "yoga" in raw:
        return _YOGA_KEYWORD[locale]

    return raw


def to_locale(value: Any) -> Locale:
    v = _text(value).lower()
    if v.startswith("zh") or v in _ZH_ALIASES:
        return Locale.ZH
    return Locale.EN


def infer_intent(sequence_type: Any, locale: Locale = Locale.ZH) -> str:
    """Translate a training-sequence code into an intent phrase."""
    phrases = _SEQUENCE_INTENTS.get(_text(sequence_type).lower())
    if phrases is None:
        return DEFAULT_INTENT[locale]
    return phrases[locale]


def normalize_radius(value: Any, default_radius_m: int) -> int:
    number = _to_float(value)
    if math.isnan(number) or number <= 0:
        return max(1, default_radius_m)
    return max(1, int(number + 0.5))


def normalize(raw: Any, default_radius_m: int = 3000) -> Query:
    """
    Build a canonical Query from a loosely-shaped request mapping.

    Never raises. Missing or non-numeric coordinates come back as NaN and
    must be rejected by the caller.
    """
    if not isinstance(raw, Mapping):
        raw = {}

    locale = to_locale(raw.get("locale"))
    raw_type = raw.get("type")
    raw_biz_type = raw.get("bizType")

    category = normalize_type(_first_text(raw_type, raw_biz_type) or DEFAULT_TYPE)
    biz_type = normalize_biz_type(
        _first_text(raw_biz_type, raw_type, raw.get("category")) or DEFAULT_BIZ_TYPE,
        locale,
    )

    user_intent = _text(raw.get("userIntent")) or None
    sequence_type = _text(raw.get("sequenceType"))
    if sequence_type:
        intent = infer_intent(sequence_type, locale)
    elif user_intent:
        intent = user_intent
    else:
        intent = DEFAULT_INTENT[locale]

    return Query(
        latitude=extract_latitude(raw),
        longitude=extract_longitude(raw),
        radius_m=normalize_radius(raw.get("radius"), default_radius_m),
        category=category,
        biz_type=biz_type,
        locale=locale,
        intent=intent,
        user_intent=user_intent,
        sequence_type=sequence_type or None,
        enable_reasons=_to_bool(raw.get("enableReasons"), True),
        use_generative=_to_bool(raw.get("useLLM"), False),
    )
