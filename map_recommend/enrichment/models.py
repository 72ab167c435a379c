from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from ..query.models import Locale, Query
from ..search.models import POIRecord


class SearchEcho(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    lat: float
    lng: float
    biz_type: str
    radius: int
    locale: Locale
    user_intent: str | None = None

    @classmethod
    def from_query(cls, query: Query) -> SearchEcho:
        return cls(
            lat=query.latitude,
            lng=query.longitude,
            biz_type=query.biz_type,
            radius=query.radius_m,
            locale=query.locale,
            user_intent=query.user_intent or (query.intent if query.sequence_type else None),
        )


class EnrichmentResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    pois: list[POIRecord] = Field(default_factory=list)
    total: int = 0
    search_echo: SearchEcho
    has_reasons: bool = False

    @model_validator(mode="after")
    def _total_matches_pois(self) -> EnrichmentResult:
        if self.total != len(self.pois):
            raise ValueError(f"total={self.total} but {len(self.pois)} pois")
        return self


class ResponseEnvelope(BaseModel):
    code: int
    message: str
    data: EnrichmentResult | None = None

    @classmethod
    def success(cls, data: EnrichmentResult) -> ResponseEnvelope:
        return cls(code=200, message="success", data=data)

    @classmethod
    def failure(cls, code: int, message: str) -> ResponseEnvelope:
        return cls(code=code, message=message, data=None)

    def to_wire(self) -> dict[str, Any]:
        """camelCase keys, absent optional fields left out, ``data`` always present."""
        body = self.model_dump(by_alias=True, exclude_none=True, mode="json")
        body.setdefault("data", None)
        return body
