"""Tests for audit secret redaction."""

from __future__ import annotations

import pytest

from aisk.audit.redaction import (
    REDACTED,
    is_sensitive_key,
    redact_mapping,
    redact_text,
    redact_value,
)


class TestSensitiveKeys:
    """Tests for key classification."""

    @pytest.mark.parametrize(
        "key",
        ["token", "GITHUB_TOKEN", "client_secret", "Password", "authorization", "api_key", "apiKey", "API-KEY"],
    )
    def test_sensitive(self, key: str) -> None:
        """Key names containing secret markers are sensitive."""
        assert is_sensitive_key(key)

    @pytest.mark.parametrize("key", ["path", "skill", "count", "api", "keyboard"])
    def test_not_sensitive(self, key: str) -> None:
        """Ordinary keys are left alone."""
        assert not is_sensitive_key(key)


class TestRedactText:
    """Tests for free-text redaction."""

    def test_key_value_with_colon(self) -> None:
        """Colon-separated secrets are normalized to key=[REDACTED]."""
        assert redact_text("api_key: SECRET123") == "api_key=[REDACTED]"

    def test_key_value_with_equals(self) -> None:
        """Assignments inside longer messages are masked."""
        assert redact_text("failed with token=abc123, retrying") == (
            "failed with token=[REDACTED], retrying"
        )

    def test_prefixed_key_names(self) -> None:
        """Keys ending in a sensitive word are masked too."""
        assert redact_text("github_token=ghp_abc123 access_token: xyz") == (
            "github_token=[REDACTED] access_token=[REDACTED]"
        )

    def test_hyphenated_prefix(self) -> None:
        """Hyphenated key names keep their full prefix."""
        assert redact_text("x-api-key=abc") == "x-api-key=[REDACTED]"

    def test_bearer_token(self) -> None:
        """Bearer tokens are masked while the scheme is kept."""
        assert redact_text("sent Bearer abc.def-ghi==") == "sent Bearer [REDACTED]"

    def test_authorization_header(self) -> None:
        """The header value is masked by both rules."""
        result = redact_text("Authorization: Bearer xyz")
        assert "xyz" not in result
        assert result.startswith("Authorization=[REDACTED]")

    def test_plain_text_unchanged(self) -> None:
        """Text without secrets passes through."""
        assert redact_text("copied /a/b to /c/d") == "copied /a/b to /c/d"

    def test_empty(self) -> None:
        """Empty strings stay empty."""
        assert redact_text("") == ""


class TestRedactMapping:
    """Tests for structured redaction."""

    def test_sensitive_values_replaced(self) -> None:
        """Values under sensitive keys are replaced wholesale."""
        result = redact_mapping({"token": "abc", "path": "/tmp/x"})
        assert result == {"token": REDACTED, "path": "/tmp/x"}

    def test_nested_structures(self) -> None:
        """Redaction recurses into mappings and lists."""
        data = {
            "request": {"headers": {"Authorization": "Bearer abc"}, "url": "https://x"},
            "items": [{"password": "p"}, "api_key=zzz"],
        }
        result = redact_mapping(data)
        assert result == {
            "request": {"headers": {"Authorization": REDACTED}, "url": "https://x"},
            "items": [{"password": REDACTED}, "api_key=[REDACTED]"],
        }

    def test_empty_mapping_is_none(self) -> None:
        """Nothing to record yields None."""
        assert redact_mapping({}) is None
        assert redact_mapping(None) is None

    def test_input_not_mutated(self) -> None:
        """The caller's mapping is left untouched."""
        data = {"secret": "s"}
        redact_mapping(data)
        assert data == {"secret": "s"}

    def test_non_string_values_pass_through(self) -> None:
        """Numbers and booleans are kept as they are."""
        assert redact_value(3) == 3
        assert redact_value(True) is True
