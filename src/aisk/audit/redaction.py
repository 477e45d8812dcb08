"""Secret redaction for audit records.

Applied to every audit event before it reaches disk. Two layers:

- Structured data: values stored under a sensitive-looking key are replaced
  wholesale, recursively through nested mappings and sequences.
- Free text: ``Bearer <token>`` and ``key: value`` / ``key=value`` fragments
  are rewritten so the secret part is replaced.

Redaction is lossy by design of the audit format; the original values are
never recoverable from the log.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

REDACTED = "[REDACTED]"

_SENSITIVE_KEY_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"token",
        r"secret",
        r"password",
        r"authorization",
        r"api[_-]?key",
    )
)

_BEARER_PATTERN = re.compile(r"\b(bearer\s+)[A-Za-z0-9\-._~+/]+=*", re.IGNORECASE)
_KEY_VALUE_PATTERN = re.compile(
    r"\b([\w-]*(?:token|secret|password|api[_-]?key|authorization))\s*[:=]\s*([^\s,;]+)",
    re.IGNORECASE,
)


def is_sensitive_key(key: object) -> bool:
    """Check whether a mapping key names a secret.

    Args:
        key: Mapping key. Non-string keys are compared by their ``str()`` form.

    Returns:
        True if any sensitive pattern matches the key.
    """
    text = str(key)
    return any(pattern.search(text) for pattern in _SENSITIVE_KEY_PATTERNS)


def redact_text(text: str) -> str:
    """Redact inline secrets from free text.

    Example::

        >>> redact_text("api_key: SECRET123")
        'api_key=[REDACTED]'

    Args:
        text: Arbitrary text, such as an error message or a path.

    Returns:
        The text with bearer tokens and key/value secrets replaced.
    """
    if not text:
        return text
    redacted = _BEARER_PATTERN.sub(r"\g<1>" + REDACTED, text)
    return _KEY_VALUE_PATTERN.sub(r"\g<1>=" + REDACTED, redacted)


def redact_value(value: Any) -> Any:
    """Recursively redact a JSON-like value.

    Strings are scanned for inline secrets, mappings have sensitive keys
    masked, and lists and tuples are redacted element by element. Other
    values are returned unchanged.
    """
    if isinstance(value, str):
        return redact_text(value)
    if isinstance(value, Mapping):
        return redact_mapping(value) or {}
    if isinstance(value, (list, tuple)):
        return [redact_value(item) for item in value]
    return value


def redact_mapping(data: Mapping[Any, Any] | None) -> dict[str, Any] | None:
    """Return a redacted copy of a details mapping.

    Args:
        data: Mapping to redact. ``None`` and empty mappings yield ``None``.

    Returns:
        A new dictionary with string keys, or ``None`` when there is nothing
        to record.
    """
    if not data:
        return None

    result: dict[str, Any] = {}
    for key, value in data.items():
        if is_sensitive_key(key):
            result[str(key)] = REDACTED
        else:
            result[str(key)] = redact_value(value)
    return result
