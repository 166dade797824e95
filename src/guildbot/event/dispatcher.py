"""Event dispatcher.

Entry point for inbound envelopes. Looks up the route for the envelope's
(op, type) pair and runs it; envelopes without a route go to the ``plain``
fallback handler, or are dropped silently when no fallback is registered.

Errors are not handled here. ``DecodeError`` from a malformed payload and any
exception raised by a handler propagate to the caller unchanged.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any

from ..protocol.payload import Envelope
from .handlers import HandlerRegistry, default_handlers
from .routes import lookup_route

logger = logging.getLogger(__name__)


class Dispatcher:
    """Routes envelopes to the handlers of a registry."""

    def __init__(self, handlers: HandlerRegistry | None = None) -> None:
        self.handlers = handlers if handlers is not None else default_handlers

    def dispatch(self, payload: Envelope) -> Any:
        """Decode and deliver one envelope.

        Returns:
            The handler's return value, or None if nothing handled the envelope

        Raises:
            DecodeError: If a routed envelope's payload is malformed
        """
        route = lookup_route(payload.op, payload.type)
        if route is not None:
            logger.debug(f"Dispatching {payload.type} (seq={payload.seq}) to '{route.slot}'")
            return route.run(payload, self.handlers)

        # The fallback sees the complete frame, not just the unwrapped payload
        if self.handlers.plain is not None:
            logger.debug(f"Passing unrouted op={payload.op} type={payload.type!r} to plain handler")
            return self.handlers.plain(payload, payload.raw)

        logger.debug(f"Ignoring unrouted op={payload.op} type={payload.type!r}")
        return None

    async def dispatch_async(self, payload: Envelope) -> Any:
        """Like ``dispatch``, awaiting the handler's result if it is awaitable."""
        result = self.dispatch(payload)
        if inspect.isawaitable(result):
            result = await result
        return result


def dispatch(payload: Envelope) -> Any:
    """Dispatch an envelope against the process-wide ``default_handlers``."""
    return Dispatcher().dispatch(payload)
