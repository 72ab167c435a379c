from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class SearchConfig:
    api_key: str = os.getenv("AMAP_KEY", "")
    endpoint: str = os.getenv("AMAP_ENDPOINT", "https://restapi.amap.com/v3/place/around")
    default_radius_m: int = int(os.getenv("DEFAULT_RADIUS_M", "3000"))
    page_size: int = int(os.getenv("AMAP_PAGE_SIZE", "20"))
    timeout: float = float(os.getenv("AMAP_TIMEOUT", "10.0"))


DEFAULT_SEARCH_CONFIG = SearchConfig()
