"""Handler registry.

Holds one optional callback per event category plus the ``plain`` fallback.
Registration is plain assignment; the last callback assigned to a slot wins.

Usage:
    handlers = HandlerRegistry()

    @handlers.on("at_message")
    def on_at_message(payload: Envelope, message: Message) -> None:
        ...

    handlers.plain = lambda payload, raw: log_unknown(payload.type, raw)
    dispatcher = Dispatcher(handlers)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, fields
from typing import Any, TypeVar

from ..protocol.intents import Intent
from ..protocol.payload import Envelope

logger = logging.getLogger(__name__)

# Typed handlers receive the envelope and the decoded record.
EventHandler = Callable[[Envelope, Any], Any]
# The fallback receives the envelope and the complete raw frame.
PlainHandler = Callable[[Envelope, bytes], Any]

H = TypeVar("H", bound=Callable[..., Any])

# Intent bit each slot subscribes to. ``plain`` has none.
SLOT_INTENTS: dict[str, Intent] = {
    "guild": Intent.GUILDS,
    "channel": Intent.GUILDS,
    "guild_member": Intent.GUILD_MEMBERS,
    "message": Intent.GUILD_MESSAGES,
    "message_delete": Intent.GUILD_MESSAGES,
    "message_reaction": Intent.GUILD_MESSAGE_REACTIONS,
    "at_message": Intent.PUBLIC_GUILD_MESSAGES,
    "public_message_delete": Intent.PUBLIC_GUILD_MESSAGES,
    "direct_message": Intent.DIRECT_MESSAGES,
    "direct_message_delete": Intent.DIRECT_MESSAGES,
    "audio": Intent.AUDIO,
    "message_audit": Intent.MESSAGE_AUDIT,
    "thread": Intent.FORUM,
    "post": Intent.FORUM,
    "reply": Intent.FORUM,
    "forum_audit": Intent.FORUM,
    "interaction": Intent.INTERACTION,
    "c2c_message": Intent.GROUP_AND_C2C,
    "group_at_message": Intent.GROUP_AND_C2C,
}


def intent_for(slot: str) -> Intent:
    """Get the intent bit a handler slot subscribes to."""
    if slot == "plain":
        return Intent.NONE
    try:
        return SLOT_INTENTS[slot]
    except KeyError:
        raise ValueError(f"Unknown handler slot: {slot}") from None


@dataclass
class HandlerRegistry:
    """Optional callbacks, one per event category.

    Populate during setup, before dispatch traffic starts. The dispatcher only
    reads the registry, so a populated registry can be shared by concurrent
    dispatch calls.
    """

    plain: PlainHandler | None = None

    guild: EventHandler | None = None
    channel: EventHandler | None = None
    guild_member: EventHandler | None = None

    message: EventHandler | None = None
    message_delete: EventHandler | None = None
    message_reaction: EventHandler | None = None

    at_message: EventHandler | None = None
    public_message_delete: EventHandler | None = None

    direct_message: EventHandler | None = None
    direct_message_delete: EventHandler | None = None

    audio: EventHandler | None = None
    message_audit: EventHandler | None = None

    thread: EventHandler | None = None
    post: EventHandler | None = None
    reply: EventHandler | None = None
    forum_audit: EventHandler | None = None

    interaction: EventHandler | None = None

    c2c_message: EventHandler | None = None
    group_at_message: EventHandler | None = None

    @classmethod
    def slots(cls) -> list[str]:
        """Names of all handler slots, ``plain`` first."""
        return [f.name for f in fields(cls)]

    def on(self, slot: str) -> Callable[[H], H]:
        """Decorator form of slot assignment.

        Args:
            slot: Slot name (e.g., "message", "interaction", "plain")

        Raises:
            ValueError: If the slot does not exist
        """
        if slot not in self.slots():
            raise ValueError(f"Unknown handler slot: {slot}")

        def decorator(func: H) -> H:
            if getattr(self, slot) is not None:
                logger.debug(f"Replacing handler for slot '{slot}'")
            setattr(self, slot, func)
            return func

        return decorator

    def registered(self) -> list[str]:
        """Names of slots that currently hold a callback."""
        return [name for name in self.slots() if getattr(self, name) is not None]

    def intents(self) -> Intent:
        """Intent bitmask needed to receive every registered category."""
        result = Intent.NONE
        for name in self.registered():
            result |= intent_for(name)
        return result


# Process-wide registry for applications that do not build their own.
default_handlers = HandlerRegistry()
