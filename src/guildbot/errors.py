"""Exception types raised by guildbot."""

from __future__ import annotations

from typing import Any


class GuildbotError(Exception):
    """Base class for all guildbot errors."""


class DecodeError(GuildbotError):
    """An inbound frame or its event payload could not be decoded."""


class PagerRequiredError(GuildbotError, ValueError):
    """Listing messages requires a pager."""

    def __init__(self) -> None:
        super().__init__("pager must not be None")


class APIError(GuildbotError):
    """The OpenAPI answered with a non-success status code."""

    def __init__(self, status_code: int, body: Any = None, trace_id: str | None = None):
        self.status_code = status_code
        self.body = body
        self.trace_id = trace_id
        super().__init__(f"API request failed with status {status_code}: {body!r}")
