"""Inbound transport.

Only the frame-to-dispatcher loop lives here; the gateway session protocol
is left to the embedding application.
"""

from .gateway import GatewayListener

__all__ = ["GatewayListener"]
