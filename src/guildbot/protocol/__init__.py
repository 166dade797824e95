"""Gateway wire protocol.

Defines the envelope every inbound frame is parsed into, the operation code
and event tag enumerations, the typed event records and the partial decoder
that turns a frame's ``d`` payload into one of those records.
"""

from .decoder import extract_data, parse_data
from .opcodes import EventType, OPCode
from .payload import DATA_FIELD, Envelope
from .records import (
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
    User,
)

__all__ = [
    # Envelope
    "DATA_FIELD",
    "Envelope",
    "EventType",
    "OPCode",
    # Decoding
    "extract_data",
    "parse_data",
    # Records
    "AudioAction",
    "Channel",
    "ForumAuditResult",
    "Guild",
    "Interaction",
    "Member",
    "Message",
    "MessageAudited",
    "MessageDelete",
    "MessageReaction",
    "Post",
    "Reply",
    "Thread",
    "User",
]
