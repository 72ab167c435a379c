from __future__ import annotations


class MapRecommendError(Exception):
    """Base class for failures the request pipeline knows how to report."""

    code: int = 500


class InvalidInput(MapRecommendError):
    code = 400


class ConfigurationError(MapRecommendError):
    code = 500


class ProviderError(MapRecommendError):
    code = 500


class GenerationError(MapRecommendError):
    """Raised by the LLM wrapper; always absorbed by the reason engine."""


class BatchTimeout(MapRecommendError):
    """Raised when a batch misses its deadline; absorbed by the orchestrator."""
