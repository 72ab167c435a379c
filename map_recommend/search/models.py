from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class POIRecord(BaseModel):
    """One provider result. Only ``recommend_reason`` is written after parsing."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    type_name: str | None = None
    type_code: str | None = None
    address: str | None = None
    city_area: str | None = None
    city_name: str | None = None
    coordinates: str | None = None
    phone: str | None = None
    distance_meters: float | None = Field(default=None, ge=0)
    rating: float | None = None
    cost_estimate: float | None = None
    photo_urls: list[str] = Field(default_factory=list, max_length=3)
    recommend_reason: str | None = None
