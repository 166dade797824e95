"""Client configuration.

Values come from the constructor or from the environment:

- GUILDBOT_API_BASE    - OpenAPI base URL (overrides GUILDBOT_SANDBOX)
- GUILDBOT_SANDBOX     - "1"/"true" to use the sandbox OpenAPI
- GUILDBOT_TOKEN       - Authorization header value, sent as-is
- GUILDBOT_GATEWAY_URL - Websocket gateway URL for ``guildbot listen``
- GUILDBOT_TIMEOUT     - HTTP timeout in seconds
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

API_BASE = "https://api.sgroup.qq.com"
SANDBOX_API_BASE = "https://sandbox.api.sgroup.qq.com"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class ClientConfig:
    """Configuration for the OpenAPI client and gateway listener."""

    api_base: str = API_BASE
    token: str | None = None
    gateway_url: str | None = None
    timeout: float = 30.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientConfig:
        """Build a config from GUILDBOT_* environment variables.

        Raises:
            ValueError: If GUILDBOT_TIMEOUT is not a positive number
        """
        env = os.environ if environ is None else environ

        api_base = env.get("GUILDBOT_API_BASE")
        if not api_base:
            sandbox = env.get("GUILDBOT_SANDBOX", "").strip().lower() in _TRUTHY
            api_base = SANDBOX_API_BASE if sandbox else API_BASE

        raw_timeout = env.get("GUILDBOT_TIMEOUT")
        timeout = 30.0
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(f"GUILDBOT_TIMEOUT must be a number, got {raw_timeout!r}") from None
            if timeout <= 0:
                raise ValueError(f"GUILDBOT_TIMEOUT must be positive, got {raw_timeout!r}")

        return cls(
            api_base=api_base.rstrip("/"),
            token=env.get("GUILDBOT_TOKEN") or None,
            gateway_url=env.get("GUILDBOT_GATEWAY_URL") or None,
            timeout=timeout,
        )
