"""Generative-model commentary layered on top of a weather snapshot."""

from .base import TextGenerator
from .client import ANALYSIS_SCHEMA, AIEnrichmentClient
from .models import AIAnalysisResult, EnrichmentState
from .openai_provider import OpenAITextGenerator

__all__ = [
    "AIAnalysisResult",
    "AIEnrichmentClient",
    "ANALYSIS_SCHEMA",
    "EnrichmentState",
    "OpenAITextGenerator",
    "TextGenerator",
]
