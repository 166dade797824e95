"""Gateway intents.

The identify frame subscribes to groups of events with a bitmask. A bot only
receives the events whose intent bit it asked for.
"""

from __future__ import annotations

from enum import IntFlag


class Intent(IntFlag):
    """Gateway subscription bits."""

    NONE = 0
    GUILDS = 1 << 0
    GUILD_MEMBERS = 1 << 1
    GUILD_MESSAGES = 1 << 9
    GUILD_MESSAGE_REACTIONS = 1 << 10
    DIRECT_MESSAGES = 1 << 12
    GROUP_AND_C2C = 1 << 25
    INTERACTION = 1 << 26
    MESSAGE_AUDIT = 1 << 27
    FORUM = 1 << 28
    AUDIO = 1 << 29
    PUBLIC_GUILD_MESSAGES = 1 << 30
