"""Helpers shared by the HTTP gateways."""

from __future__ import annotations

import httpx


def failure_reason(response: httpx.Response) -> str:
    """Best human-readable reason for a non-2xx response.

    Prefers the backend's own ``detail``/``message`` field and falls back
    to the status line.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("detail", "message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return f"{value.strip()} (HTTP {response.status_code})"

    return f"HTTP {response.status_code} {response.reason_phrase}".strip()
