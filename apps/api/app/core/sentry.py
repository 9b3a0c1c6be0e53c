"""Sentry SDK integration for the PerfPilot API.

Captures exceptions and performance traces without leaking secrets or
user source code.

Key decisions:
  - `send_default_pii=False`: no client IPs or cookies are sent.
  - `before_send` hook redacts any event field whose key contains a
    sensitive keyword (api_key, secret, password, token, dsn) and drops
    submitted source code bodies (code, content, packageJson).
  - `traces_sample_rate=0.1`: 10% of transactions sampled.
  - No-op when SENTRY_DSN is empty.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

_SENSITIVE_KEYS = frozenset({"api_key", "secret", "password", "token", "dsn"})

# Request body fields that carry user source code
_SOURCE_KEYS = frozenset({"code", "content", "packagejson", "files"})


def _scrub_secrets(event: dict[str, Any], hint: Any) -> dict[str, Any]:
    """Sentry before_send hook: redact secrets and submitted source code.

    Walks the event's `extra` and `request.data` dicts and replaces the
    values of matching keys with "[REDACTED]".
    """
    _scrub_dict(event.get("extra", {}))
    request_data = event.get("request", {}).get("data", {})
    if isinstance(request_data, dict):
        _scrub_dict(request_data)
    return event


def _scrub_dict(d: dict[str, Any]) -> None:
    """Recursively redact sensitive values in-place."""
    for key in list(d.keys()):
        lowered = key.lower()
        if lowered in _SOURCE_KEYS or any(s in lowered for s in _SENSITIVE_KEYS):
            d[key] = "[REDACTED]"
        elif isinstance(d[key], dict):
            _scrub_dict(d[key])


def init_sentry(dsn: str, environment: str = "development") -> None:
    """Initialise the Sentry SDK.

    Called from `create_app()`. If `dsn` is empty, this is a no-op so
    local and CI environments are unaffected.

    Args:
        dsn: Sentry DSN string. Empty string disables Sentry entirely.
        environment: Sentry environment tag ("development" | "production").
    """
    if not dsn or not dsn.strip():
        logger.debug("Sentry DSN not configured; skipping initialisation")
        return

    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        integrations=[
            FastApiIntegration(),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.1,
        send_default_pii=False,
        before_send=_scrub_secrets,
    )
    logger.info("Sentry initialised (environment=%s)", environment)
