from __future__ import annotations

import logging

from groq import AsyncGroq

from ..errors import GenerationError
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)


def is_configured(config: LLMConfig = DEFAULT_LLM_CONFIG) -> bool:
    return bool(config.enabled and config.api_key)


async def generate_text(
    system: str,
    user: str,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> str:
    """
    Send one system + user exchange and return the first choice's text.

    Raises GenerationError when the service is unconfigured, the call fails,
    or the reply carries no content.
    """
    if not is_configured(config):
        raise GenerationError("LLM is not configured")

    try:
        client = AsyncGroq(api_key=config.api_key, timeout=config.timeout)
        response = await client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            max_tokens=config.max_tokens,
            temperature=config.temperature,
        )
        content = response.choices[0].message.content or ""
    except Exception as exc:
        raise GenerationError(f"Groq call failed: {exc}") from exc

    if not isinstance(content, str):
        raise GenerationError(f"Groq returned malformed content: {content!r}")
    text = content.strip()
    if not text:
        raise GenerationError("Groq returned empty content")
    return text
