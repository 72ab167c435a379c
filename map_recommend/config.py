from __future__ import annotations

import os
from dataclasses import dataclass, field

from .llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from .search.config import DEFAULT_SEARCH_CONFIG, SearchConfig


@dataclass(frozen=True)
class ServiceConfig:
    """
    Everything the request pipeline needs, built once at process start.

    Components receive the slice they need (``search``, ``llm``) as an
    argument instead of reading the environment themselves.
    """

    search: SearchConfig = field(default_factory=lambda: DEFAULT_SEARCH_CONFIG)
    llm: LLMConfig = field(default_factory=lambda: DEFAULT_LLM_CONFIG)
    reason_deadline_ms: int = int(os.getenv("REASON_DEADLINE_MS", "5000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()


DEFAULT_SERVICE_CONFIG = ServiceConfig()
