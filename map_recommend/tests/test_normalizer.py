from __future__ import annotations

import math

import pytest

from map_recommend.query.models import Locale
from map_recommend.query.normalizer import (
    DEFAULT_INTENT,
    extract_latitude,
    extract_longitude,
    infer_intent,
    normalize,
    normalize_biz_type,
    normalize_type,
    to_locale,
)

YOGA_SYNONYMS = ["yoga", "pose", "yujia", "瑜伽", "瑜珈", "瑜伽馆", "瑜珈馆"]


# ── Coordinates ──────────────────────────────────────────────────────────


class TestCoordinates:
    def test_flat_keys(self):
        query = normalize({"lat": "39.9", "lng": 116.4})
        assert query.latitude == 39.9
        assert query.longitude == 116.4

    def test_long_names(self):
        query = normalize({"latitude": 31.2, "longitude": 121.5})
        assert (query.latitude, query.longitude) == (31.2, 121.5)

    def test_lon_alias(self):
        assert extract_longitude({"lon": "-0.12"}) == -0.12

    def test_nested_location(self):
        raw = {"location": {"latitude": 22.5, "longitude": 114.1}}
        assert extract_latitude(raw) == 22.5
        assert extract_longitude(raw) == 114.1

    def test_nested_coords(self):
        raw = {"coords": {"lat": 1.5, "lng": 2.5}}
        assert (extract_latitude(raw), extract_longitude(raw)) == (1.5, 2.5)

    def test_flat_key_wins_over_nested(self):
        raw = {"lat": 10, "latitude": 20, "location": {"lat": 30}}
        assert extract_latitude(raw) == 10

    def test_missing_is_nan(self):
        query = normalize({})
        assert math.isnan(query.latitude)
        assert math.isnan(query.longitude)

    @pytest.mark.parametrize("value", ["abc", "", True, [1], {"x": 1}, "inf", float("nan")])
    def test_unusable_values_are_nan(self, value):
        assert math.isnan(extract_latitude({"lat": value}))

    def test_location_string_is_not_traversed(self):
        assert math.isnan(extract_latitude({"location": "116.4,39.9"}))

    @pytest.mark.parametrize("lat,lng", [(0, 0), (-90, 180), (90, -180), ("45.5", "-73.25")])
    def test_in_range_values_round_trip(self, lat, lng):
        query = normalize({"lat": lat, "lng": lng})
        assert query.latitude == float(lat)
        assert query.longitude == float(lng)
        assert query.has_valid_coordinates

    def test_out_of_range_kept_but_flagged(self):
        query = normalize({"lat": 95, "lng": 10})
        assert query.latitude == 95
        assert not query.has_valid_coordinates


# ── Never raises ─────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "not a mapping",
        42,
        [],
        {"lat": object(), "lng": None},
        {"radius": [], "locale": 5, "type": 3.5, "bizType": {"a": 1}},
        {"sequenceType": None, "userIntent": 0, "enableReasons": "maybe"},
        {"location": None, "coords": []},
        {"lat": 39.9, "lng": 116.4, "radius": 10**400},
        {"lat": 10**400, "lng": 116.4},
    ],
)
def test_normalize_never_raises(raw):
    query = normalize(raw)
    assert query.radius_m > 0
    assert query.locale in (Locale.ZH, Locale.EN)


def test_oversized_integers_treated_as_invalid():
    query = normalize({"lat": 10**400, "lng": 116.4, "radius": 10**400})
    assert math.isnan(query.latitude)
    assert not query.has_valid_coordinates
    assert query.radius_m == 3000


# ── Category / business type ─────────────────────────────────────────────


class TestNormalizeType:
    @pytest.mark.parametrize("value", ["map", "MAP-recommend", " 地图 ", "poi"])
    def test_exact_map(self, value):
        assert normalize_type(value) == "map-recommend"

    @pytest.mark.parametrize("value", YOGA_SYNONYMS)
    def test_exact_yoga(self, value):
        assert normalize_type(value) == "yoga"

    def test_containment_yoga(self):
        assert normalize_type("hot-yoga-class") == "yoga"
        assert normalize_type("瑜伽工作室") == "yoga"

    def test_map_keywords_checked_before_yoga(self):
        assert normalize_type("yoga map") == "map-recommend"

    @pytest.mark.parametrize("value", [None, "", "   ", "gym"])
    def test_default(self, value):
        assert normalize_type(value) == "map-recommend"


class TestNormalizeBizType:
    @pytest.mark.parametrize("value", YOGA_SYNONYMS + ["瑜伽馆yoga", "YogaWorks"])
    def test_yoga_synonyms_per_locale(self, value):
        assert normalize_biz_type(value, Locale.ZH) == "瑜伽"
        assert normalize_biz_type(value, Locale.EN) == "yoga"

    def test_other_keywords_pass_through(self):
        assert normalize_biz_type("  Coffee ", Locale.EN) == "coffee"
        assert normalize_biz_type("健身房", Locale.ZH) == "健身房"

    def test_empty_defaults_to_yoga(self):
        assert normalize_biz_type(None, Locale.ZH) == "瑜伽"
        assert normalize_biz_type("", Locale.EN) == "yoga"

    @pytest.mark.parametrize("token", YOGA_SYNONYMS)
    @pytest.mark.parametrize("decorate", [str.upper, str.title, lambda s: f"  {s}\t"])
    @pytest.mark.parametrize("locale,expected", [(Locale.ZH, "瑜伽"), (Locale.EN, "yoga")])
    def test_type_then_biz_type_is_stable(self, token, decorate, locale, expected):
        assert normalize_biz_type(normalize_type(decorate(token)), locale) == expected
        assert normalize_biz_type(decorate(token), locale) == expected


# ── Locale / intent / radius / flags ─────────────────────────────────────


class TestLocale:
    @pytest.mark.parametrize("value", ["zh", "zh-CN", "ZH_tw", " cn ", "Chinese"])
    def test_chinese(self, value):
        assert to_locale(value) == Locale.ZH

    @pytest.mark.parametrize("value", [None, "", "en-US", "fr", "china"])
    def test_everything_else_is_english(self, value):
        assert to_locale(value) == Locale.EN


class TestIntent:
    def test_known_sequence(self):
        assert infer_intent("beginner", Locale.ZH) == "入门体验"
        assert infer_intent("beginner", Locale.EN) == "beginner experience"

    def test_unknown_sequence_uses_default(self):
        assert infer_intent("handstand", Locale.ZH) == DEFAULT_INTENT[Locale.ZH]

    def test_sequence_takes_precedence_over_user_intent(self):
        query = normalize({"locale": "zh", "sequenceType": "yin-yoga", "userIntent": "放松"})
        assert query.intent == "阴瑜伽"
        assert query.user_intent == "放松"

    def test_user_intent_override(self):
        query = normalize({"userIntent": "  prenatal  "})
        assert query.intent == "prenatal"

    def test_default_intent(self):
        assert normalize({}).intent == "yoga practice"
        assert normalize({"locale": "zh"}).intent == "瑜伽练习"


class TestRadius:
    def test_positive_override(self):
        assert normalize({"radius": "1500"}).radius_m == 1500
        assert normalize({"radius": 800.6}).radius_m == 801

    @pytest.mark.parametrize("value", [None, 0, -5, "abc", "", []])
    def test_falls_back_to_default(self, value):
        assert normalize({"radius": value}).radius_m == 3000
        assert normalize({"radius": value}, default_radius_m=2000).radius_m == 2000


class TestFlagsAndSources:
    def test_defaults(self):
        query = normalize({})
        assert query.enable_reasons is True
        assert query.use_generative is False
        assert query.category == "map-recommend"
        assert query.biz_type == "yoga"

    @pytest.mark.parametrize("value,expected", [("false", False), ("0", False), (0, False), ("TRUE", True), (True, True)])
    def test_enable_reasons_coercion(self, value, expected):
        assert normalize({"enableReasons": value}).enable_reasons is expected

    def test_use_llm_flag(self):
        assert normalize({"useLLM": "1"}).use_generative is True

    def test_unrecognized_flag_keeps_default(self):
        assert normalize({"enableReasons": "sometimes"}).enable_reasons is True

    def test_biz_type_precedence(self):
        query = normalize({"bizType": "coffee", "type": "yoga", "category": "gym"})
        assert query.biz_type == "coffee"
        assert query.category == "yoga"

    def test_category_used_when_no_biz_type_or_type(self):
        assert normalize({"category": "gym"}).biz_type == "gym"

    def test_route_type_alone(self):
        query = normalize({"type": "map"})
        assert query.category == "map-recommend"
        assert query.biz_type == "map"
