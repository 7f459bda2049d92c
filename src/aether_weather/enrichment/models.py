"""Typed results for the AI enrichment tiers."""

from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator

T = TypeVar("T")

EnrichmentStatus = Literal["empty", "pending", "ready", "failed"]


class AIAnalysisResult(BaseModel):
    """Deep-analysis output; absent or malformed fields collapse to ""."""

    model_config = ConfigDict(frozen=True)

    advice: str = ""
    outfit: str = ""
    details: str = ""

    @field_validator("advice", "outfit", "details", mode="before")
    @classmethod
    def non_string_to_empty(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return ""
        return value.strip()


class EnrichmentState(BaseModel, Generic[T]):
    """Tagged outcome of a best-effort enrichment request."""

    model_config = ConfigDict(frozen=True)

    status: EnrichmentStatus = "empty"
    value: T | None = None
    reason: str | None = None

    @classmethod
    def empty(cls) -> EnrichmentState[T]:
        return cls(status="empty")

    @classmethod
    def pending(cls) -> EnrichmentState[T]:
        return cls(status="pending")

    @classmethod
    def ready(cls, value: T) -> EnrichmentState[T]:
        return cls(status="ready", value=value)

    @classmethod
    def failed(cls, reason: str) -> EnrichmentState[T]:
        return cls(status="failed", reason=reason)

    @property
    def is_pending(self) -> bool:
        return self.status == "pending"

    @property
    def is_ready(self) -> bool:
        return self.status == "ready"
