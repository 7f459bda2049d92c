"""OpenAI-backed generative-text provider."""

from __future__ import annotations

import logging
from typing import Any

import openai
from openai import AsyncOpenAI

from ..config import Settings
from ..exceptions import ProviderError
from ..redaction import sanitize_text
from .base import ReasoningEffort, TextGenerator


class OpenAITextGenerator(TextGenerator):
    """Chat-completions client used for both enrichment tiers."""

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self._client = client or AsyncOpenAI(
            api_key=settings.openai_api_key,
            base_url=str(settings.openai_base_url) if settings.openai_base_url else None,
            timeout=settings.ai_timeout_seconds,
            max_retries=0,
        )

    async def __aenter__(self) -> OpenAITextGenerator:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.close()

    async def complete(self, prompt: str, *, model: str) -> str:
        return await self._create(
            context="text completion",
            model=model,
            messages=[{"role": "user", "content": prompt}],
        )

    async def complete_structured(
        self,
        prompt: str,
        *,
        model: str,
        schema_name: str,
        schema: dict[str, Any],
        reasoning_effort: ReasoningEffort = "high",
    ) -> str:
        return await self._create(
            context="structured completion",
            model=model,
            messages=[{"role": "user", "content": prompt}],
            response_format={
                "type": "json_schema",
                "json_schema": {"name": schema_name, "strict": True, "schema": schema},
            },
            reasoning_effort=reasoning_effort,
        )

    async def _create(self, *, context: str, **kwargs: Any) -> str:
        try:
            response = await self._client.chat.completions.create(**kwargs)
        except openai.APIStatusError as exc:
            raise ProviderError(
                f"OpenAI {context} failed with status {exc.status_code}: "
                f"{sanitize_text(str(exc))[:300]}",
                status_code=exc.status_code,
            ) from exc
        except openai.OpenAIError as exc:
            raise ProviderError(
                f"OpenAI {context} request failed: {sanitize_text(str(exc))[:300]}"
            ) from exc

        if not response.choices:
            raise ProviderError(f"OpenAI {context} returned no choices.")
        content = response.choices[0].message.content
        self.logger.debug("OpenAI %s returned %d chars", context, len(content or ""))
        return content or ""
