"""Environment-driven settings for the storefront client.

Nothing about the backend is hard-coded: the base URL and timeouts come
from ``EVERGREEN_*`` environment variables, with local-development
defaults.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from evergreen.domain.exceptions import ConfigurationError, ValidationError
from evergreen.domain.model.value_objects import Money

DEFAULT_BACKEND_URL = "http://localhost:8000"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_FLAT_RATE = "10.00"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    backend_url: str = DEFAULT_BACKEND_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    shipping_flat_rate: Money = Money.of(DEFAULT_FLAT_RATE)
    free_shipping_threshold: Money | None = None
    log_level: str = "WARNING"
    log_json: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        backend_url = env.get("EVERGREEN_BACKEND_URL", "").strip() or DEFAULT_BACKEND_URL
        if not backend_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"EVERGREEN_BACKEND_URL must be an http(s) URL, got {backend_url!r}"
            )

        raw_timeout = env.get("EVERGREEN_HTTP_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(
                f"EVERGREEN_HTTP_TIMEOUT must be a number, got {raw_timeout!r}"
            ) from exc
        if timeout <= 0:
            raise ConfigurationError("EVERGREEN_HTTP_TIMEOUT must be positive")

        flat_rate = _money(env, "EVERGREEN_SHIPPING_FLAT_RATE", DEFAULT_FLAT_RATE)
        threshold_raw = env.get("EVERGREEN_FREE_SHIPPING_THRESHOLD", "").strip()
        threshold = (
            _money(env, "EVERGREEN_FREE_SHIPPING_THRESHOLD", threshold_raw)
            if threshold_raw
            else None
        )

        return cls(
            backend_url=backend_url.rstrip("/"),
            timeout_seconds=timeout,
            shipping_flat_rate=flat_rate,
            free_shipping_threshold=threshold,
            log_level=env.get("EVERGREEN_LOG_LEVEL", "WARNING").strip().upper(),
            log_json=_flag(env, "EVERGREEN_LOG_JSON"),
        )


def _money(env: Mapping[str, str], key: str, default: str) -> Money:
    raw = env.get(key, default)
    try:
        return Money.of(raw.strip())
    except ValidationError as exc:
        raise ConfigurationError(f"{key} must be a non-negative amount, got {raw!r}") from exc


def _flag(env: Mapping[str, str], key: str) -> bool:
    raw = env.get(key, "").strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    raise ConfigurationError(f"{key} must be a boolean, got {raw!r}")
