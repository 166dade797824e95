"""Event dispatch.

Routes decoded gateway events to the callbacks an application registers:

    handlers = HandlerRegistry()
    handlers.message = on_message
    dispatcher = Dispatcher(handlers)
    dispatcher.dispatch(Envelope.parse(frame))
"""

from .dispatcher import Dispatcher, dispatch
from .handlers import (
    SLOT_INTENTS,
    EventHandler,
    HandlerRegistry,
    PlainHandler,
    default_handlers,
    intent_for,
)
from .routes import ROUTES, Route, lookup_route

__all__ = [
    # Dispatch
    "Dispatcher",
    "dispatch",
    # Registry
    "EventHandler",
    "HandlerRegistry",
    "PlainHandler",
    "SLOT_INTENTS",
    "default_handlers",
    "intent_for",
    # Routing
    "ROUTES",
    "Route",
    "lookup_route",
]
