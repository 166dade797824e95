"""guildbot - event dispatch core for guild/group chat bot clients.

Inbound gateway frames are parsed into envelopes, routed by
(op code, event type) to a typed decoder and delivered to the callback the
application registered for that event category.
"""

from .errors import APIError, DecodeError, GuildbotError, PagerRequiredError
from .event import Dispatcher, HandlerRegistry, default_handlers, dispatch
from .protocol import Envelope, EventType, OPCode, parse_data
from .protocol.intents import Intent

__version__ = "0.1.0"

__all__ = [
    "APIError",
    "DecodeError",
    "Dispatcher",
    "Envelope",
    "EventType",
    "GuildbotError",
    "HandlerRegistry",
    "Intent",
    "OPCode",
    "PagerRequiredError",
    "default_handlers",
    "dispatch",
    "parse_data",
]
