"""Tests for the Sentry before_send hook and init_sentry.

The hook must redact secrets and drop submitted source code. No real
Sentry SDK calls are made.
"""

from unittest.mock import patch

from app.core.sentry import _scrub_dict, _scrub_secrets, init_sentry


class TestScrubDict:
    def test_redacts_llm_keys(self) -> None:
        d = {"openai_api_key": "sk-abc123", "anthropic_api_key": "sk-ant", "name": "test"}
        _scrub_dict(d)
        assert d["openai_api_key"] == "[REDACTED]"
        assert d["anthropic_api_key"] == "[REDACTED]"
        assert d["name"] == "test"

    def test_redacts_dsn_and_token(self) -> None:
        d = {"sentry_dsn": "https://sentry.io/123", "access_token": "tok"}
        _scrub_dict(d)
        assert d == {"sentry_dsn": "[REDACTED]", "access_token": "[REDACTED]"}

    def test_redacts_submitted_source(self) -> None:
        d = {
            "codeSource": "input",
            "code": "export default function Page() {}",
            "packageJson": '{"dependencies": {}}',
            "files": [{"name": "a.tsx", "content": "..."}],
        }
        _scrub_dict(d)
        assert d["code"] == "[REDACTED]"
        assert d["packageJson"] == "[REDACTED]"
        assert d["files"] == "[REDACTED]"
        assert d["codeSource"] == "input"

    def test_preserves_non_sensitive_values(self) -> None:
        d = {"projectName": "storefront", "filename": "page.tsx"}
        _scrub_dict(d)
        assert d == {"projectName": "storefront", "filename": "page.tsx"}

    def test_recurses_into_nested_dicts(self) -> None:
        d = {"body": {"content": "{}", "settings": {"API_KEY": "secret"}}}
        _scrub_dict(d)
        assert d["body"]["content"] == "[REDACTED]"
        assert d["body"]["settings"]["API_KEY"] == "[REDACTED]"


class TestScrubSecrets:
    def test_scrubs_extra_and_request_data(self) -> None:
        event = {
            "extra": {"anthropic_api_key": "sk-ant-xyz"},
            "request": {"data": {"code": "<img src='/a.png' />"}},
        }
        result = _scrub_secrets(event, None)
        assert result["extra"]["anthropic_api_key"] == "[REDACTED]"
        assert result["request"]["data"]["code"] == "[REDACTED]"

    def test_handles_missing_sections(self) -> None:
        event = {"message": "boom"}
        assert _scrub_secrets(event, None) is event

    def test_handles_non_dict_request_data(self) -> None:
        event = {"extra": {}, "request": {"data": "raw-body-string"}}
        result = _scrub_secrets(event, None)
        assert result["request"]["data"] == "raw-body-string"


class TestInitSentry:
    def test_no_op_when_dsn_is_empty(self) -> None:
        with patch("sentry_sdk.init") as mock_init:
            init_sentry(dsn="", environment="test")
            init_sentry(dsn="   ", environment="test")
        mock_init.assert_not_called()

    def test_initialises_with_scrubber(self) -> None:
        with patch("sentry_sdk.init") as mock_init:
            init_sentry(dsn="https://key@example.ingest.sentry.io/1", environment="production")

        kwargs = mock_init.call_args.kwargs
        assert kwargs["environment"] == "production"
        assert kwargs["send_default_pii"] is False
        assert kwargs["before_send"] is _scrub_secrets
