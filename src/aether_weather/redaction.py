"""Helpers for redacting sensitive values from log output."""

from __future__ import annotations

import re

REDACTED = "[REDACTED]"

_AUTH_TOKEN_INLINE_RE = re.compile(
    r"(?i)\b(bearer)\s+[A-Za-z0-9\-._~+/]+=*",
)
_OPENAI_KEY_RE = re.compile(r"\bsk-[A-Za-z0-9\-_]{8,}")
_KEY_VALUE_SECRET_RE = re.compile(
    r"""(?ix)
    \b
    (
      authorization|
      token|
      secret|
      api[_-]?key|
      openai[_-]?api[_-]?key
    )
    \s*[:=]\s*
    ([^\s,;]+)
    """
)


def sanitize_text(text: str) -> str:
    """Redact sensitive content embedded in plain text."""
    sanitized = _AUTH_TOKEN_INLINE_RE.sub(r"\1 " + REDACTED, text)
    sanitized = _OPENAI_KEY_RE.sub(REDACTED, sanitized)
    sanitized = _KEY_VALUE_SECRET_RE.sub(lambda m: f"{m.group(1)}={REDACTED}", sanitized)
    return sanitized
