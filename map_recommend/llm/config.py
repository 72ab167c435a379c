from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class LLMConfig:
    api_key: str = os.getenv("GROQ_API_KEY", "")
    model: str = os.getenv("LLM_MODEL", "llama-3.1-8b-instant")
    timeout: float = float(os.getenv("LLM_TIMEOUT", "3.0"))
    max_tokens: int = 64
    temperature: float = 0.7
    enabled: bool = os.getenv("LLM_ENABLED", "true").lower() not in ("0", "false", "no", "off")


DEFAULT_LLM_CONFIG = LLMConfig()
