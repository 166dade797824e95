"""Routing table.

Maps (operation code, event tag) to the record an event decodes into and the
handler slot it is delivered to. Built once at import and read-only after.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from operator import attrgetter
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel

from ..protocol.decoder import parse_data
from ..protocol.opcodes import EventType, OPCode
from ..protocol.payload import Envelope
from ..protocol.records import (
    AudioAction,
    Channel,
    ForumAuditResult,
    Guild,
    Interaction,
    Member,
    Message,
    MessageAudited,
    MessageDelete,
    MessageReaction,
    Post,
    Reply,
    Thread,
)
from .handlers import HandlerRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Route:
    """Decode an event into ``model`` and hand it to the ``slot`` handler."""

    model: type[BaseModel]
    slot: str
    _get_handler: Callable[[HandlerRegistry], Any] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_get_handler", attrgetter(self.slot))

    def run(self, payload: Envelope, handlers: HandlerRegistry) -> Any:
        """Decode the payload and invoke the slot's handler, if any.

        Decoding happens even when the slot is empty, so a malformed payload
        is always reported.

        Returns:
            Whatever the handler returned, or None when the slot is empty

        Raises:
            DecodeError: If the payload does not match ``model``
        """
        data = parse_data(payload.raw, self.model)
        handler = self._get_handler(handlers)
        if handler is None:
            logger.debug(f"No handler for {payload.type}, dropping")
            return None
        return handler(payload, data)


_GUILD = Route(Guild, "guild")
_CHANNEL = Route(Channel, "channel")
_GUILD_MEMBER = Route(Member, "guild_member")
_MESSAGE_REACTION = Route(MessageReaction, "message_reaction")
_AUDIO = Route(AudioAction, "audio")
_MESSAGE_AUDIT = Route(MessageAudited, "message_audit")
_THREAD = Route(Thread, "thread")
_POST = Route(Post, "post")
_REPLY = Route(Reply, "reply")

ROUTES: Mapping[int, Mapping[str, Route]] = MappingProxyType(
    {
        OPCode.DISPATCH: MappingProxyType(
            {
                EventType.GUILD_CREATE: _GUILD,
                EventType.GUILD_UPDATE: _GUILD,
                EventType.GUILD_DELETE: _GUILD,
                EventType.CHANNEL_CREATE: _CHANNEL,
                EventType.CHANNEL_UPDATE: _CHANNEL,
                EventType.CHANNEL_DELETE: _CHANNEL,
                EventType.GUILD_MEMBER_ADD: _GUILD_MEMBER,
                EventType.GUILD_MEMBER_UPDATE: _GUILD_MEMBER,
                EventType.GUILD_MEMBER_REMOVE: _GUILD_MEMBER,
                EventType.MESSAGE_CREATE: Route(Message, "message"),
                EventType.MESSAGE_DELETE: Route(MessageDelete, "message_delete"),
                EventType.MESSAGE_REACTION_ADD: _MESSAGE_REACTION,
                EventType.MESSAGE_REACTION_REMOVE: _MESSAGE_REACTION,
                EventType.AT_MESSAGE_CREATE: Route(Message, "at_message"),
                EventType.PUBLIC_MESSAGE_DELETE: Route(MessageDelete, "public_message_delete"),
                EventType.DIRECT_MESSAGE_CREATE: Route(Message, "direct_message"),
                EventType.DIRECT_MESSAGE_DELETE: Route(MessageDelete, "direct_message_delete"),
                EventType.AUDIO_START: _AUDIO,
                EventType.AUDIO_FINISH: _AUDIO,
                EventType.AUDIO_ON_MIC: _AUDIO,
                EventType.AUDIO_OFF_MIC: _AUDIO,
                EventType.MESSAGE_AUDIT_PASS: _MESSAGE_AUDIT,
                EventType.MESSAGE_AUDIT_REJECT: _MESSAGE_AUDIT,
                EventType.FORUM_THREAD_CREATE: _THREAD,
                EventType.FORUM_THREAD_UPDATE: _THREAD,
                EventType.FORUM_THREAD_DELETE: _THREAD,
                EventType.FORUM_POST_CREATE: _POST,
                EventType.FORUM_POST_DELETE: _POST,
                EventType.FORUM_REPLY_CREATE: _REPLY,
                EventType.FORUM_REPLY_DELETE: _REPLY,
                EventType.FORUM_AUDIT_RESULT: Route(ForumAuditResult, "forum_audit"),
                EventType.INTERACTION_CREATE: Route(Interaction, "interaction"),
                EventType.C2C_MESSAGE_CREATE: Route(Message, "c2c_message"),
                EventType.GROUP_AT_MESSAGE_CREATE: Route(Message, "group_at_message"),
            }
        ),
    }
)


def lookup_route(op: int, event_type: str) -> Route | None:
    """Find the route for an (op, tag) pair. Returns None when there is none."""
    return ROUTES.get(op, {}).get(event_type)
