from __future__ import annotations

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Locale(str, Enum):
    ZH = "zh"
    EN = "en"


class Query(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = math.nan
    longitude: float = math.nan
    radius_m: int = Field(default=3000, ge=1)
    category: str = "map-recommend"
    biz_type: str = "yoga"
    locale: Locale = Locale.EN
    intent: str = "yoga practice"
    user_intent: str | None = None
    sequence_type: str | None = None
    enable_reasons: bool = True
    use_generative: bool = False

    @property
    def has_valid_coordinates(self) -> bool:
        return (
            math.isfinite(self.latitude)
            and math.isfinite(self.longitude)
            and -90.0 <= self.latitude <= 90.0
            and -180.0 <= self.longitude <= 180.0
        )
