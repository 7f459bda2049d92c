"""Provider-agnostic generative-text interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Literal

ReasoningEffort = Literal["low", "medium", "high"]


class TextGenerator(ABC):
    """Base contract for the generative-text service behind AI enrichment."""

    @abstractmethod
    async def complete(self, prompt: str, *, model: str) -> str:
        """Return free-text output for a single prompt."""

    @abstractmethod
    async def complete_structured(
        self,
        prompt: str,
        *,
        model: str,
        schema_name: str,
        schema: dict[str, Any],
        reasoning_effort: ReasoningEffort = "high",
    ) -> str:
        """Return raw JSON text constrained to the given JSON schema."""

    @abstractmethod
    async def close(self) -> None:
        """Release provider resources."""
