"""Application configuration read from environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_ORDER_SIZE_LIMIT = 1000000
DEFAULT_CORS_ORIGIN = "*"


class ConfigError(ValueError):
    """Raised when the configuration is missing or invalid."""


@dataclass(frozen=True)
class Config:
    """Settings for the HTTP service."""

    port: str
    cors_origin: str = DEFAULT_CORS_ORIGIN
    order_size_limit: int = DEFAULT_ORDER_SIZE_LIMIT


def load_config(environ: Mapping[str, str] | None = None) -> Config:
    """Build a Config from ``environ`` (the process environment by default).

    Reads PORT, CORS_ORIGIN and ORDER_SIZE_LIMIT; empty values count as unset.
    """
    env = os.environ if environ is None else environ

    def lookup(name: str) -> str | None:
        value = env.get(name)
        return value if value else None

    port = lookup("PORT")
    if port is None:
        raise ConfigError("port must be set")

    cors_origin = lookup("CORS_ORIGIN") or DEFAULT_CORS_ORIGIN

    raw_limit = lookup("ORDER_SIZE_LIMIT")
    if raw_limit is None:
        order_size_limit = DEFAULT_ORDER_SIZE_LIMIT
    else:
        try:
            order_size_limit = int(raw_limit.strip())
        except ValueError as exc:
            raise ConfigError(
                f"failed to unmarshal config: invalid order_size_limit {raw_limit!r}"
            ) from exc

    return Config(
        port=port, cors_origin=cors_origin, order_size_limit=order_size_limit
    )