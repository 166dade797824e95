"""Typed event records.

One model per event family. All fields default to a zero value so a payload
that omits a field still decodes; a field present with the wrong JSON type is
a validation error. Unknown fields are ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# =============================================================================
# Shared
# =============================================================================


class User(BaseModel):
    """A user, bot or group member."""

    id: str = ""
    username: str = ""
    avatar: str = ""
    bot: bool = False
    union_openid: str = ""
    union_user_account: str = ""
    # Set on C2C and group messages
    user_openid: str = ""
    member_openid: str = ""


class Member(BaseModel):
    """Guild member (GUILD_MEMBER_* payload)."""

    guild_id: str = ""
    joined_at: str = ""
    nick: str = ""
    user: User | None = None
    roles: list[str] = Field(default_factory=list)
    op_user_id: str = ""


# =============================================================================
# Guild / Channel
# =============================================================================


class Guild(BaseModel):
    """Guild (GUILD_* payload)."""

    id: str = ""
    name: str = ""
    icon: str = ""
    owner_id: str = ""
    owner: bool = False
    member_count: int = 0
    max_members: int = 0
    description: str = ""
    joined_at: str = ""
    op_user_id: str = ""


class Channel(BaseModel):
    """Channel (CHANNEL_* payload)."""

    id: str = ""
    guild_id: str = ""
    name: str = ""
    type: int = 0
    sub_type: int = 0
    position: int = 0
    parent_id: str = ""
    owner_id: str = ""
    private_type: int = 0
    speak_permission: int = 0
    application_id: str = ""
    permissions: str = ""
    op_user_id: str = ""


# =============================================================================
# Messages
# =============================================================================


class MessageAttachment(BaseModel):
    url: str = ""
    content_type: str = ""
    filename: str = ""
    height: int = 0
    width: int = 0
    size: int = 0


class MessageReference(BaseModel):
    message_id: str = ""
    ignore_get_message_error: bool = False


class Message(BaseModel):
    """A message.

    Guild, @-mention, direct, C2C and group messages all share this shape;
    which fields are populated depends on the source.
    """

    id: str = ""
    channel_id: str = ""
    guild_id: str = ""
    content: str = ""
    timestamp: str = ""
    edited_timestamp: str = ""
    mention_everyone: bool = False
    author: User | None = None
    attachments: list[MessageAttachment] = Field(default_factory=list)
    embeds: list[dict[str, Any]] = Field(default_factory=list)
    mentions: list[User] = Field(default_factory=list)
    member: Member | None = None
    ark: dict[str, Any] | None = None
    seq: int = 0
    seq_in_channel: str = ""
    message_reference: MessageReference | None = None
    src_guild_id: str = ""
    # Group messages
    group_id: str = ""
    group_openid: str = ""


class MessageDelete(BaseModel):
    """Deleted message and the user who deleted it."""

    message: Message = Field(default_factory=Message)
    op_user: User = Field(default_factory=User)


class Emoji(BaseModel):
    id: str = ""
    type: int = 0


class ReactionTarget(BaseModel):
    id: str = ""
    type: int = 0


class MessageReaction(BaseModel):
    """Emoji reaction added to or removed from a target."""

    user_id: str = ""
    channel_id: str = ""
    guild_id: str = ""
    target: ReactionTarget = Field(default_factory=ReactionTarget)
    emoji: Emoji = Field(default_factory=Emoji)


class MessageAudited(BaseModel):
    """Result of the platform's audit of a proactive message."""

    audit_id: str = ""
    message_id: str = ""
    guild_id: str = ""
    channel_id: str = ""
    audit_time: str = ""
    create_time: str = ""
    seq_in_channel: str = ""


# =============================================================================
# Audio
# =============================================================================


class AudioAction(BaseModel):
    """Audio playback or microphone state change in an audio channel."""

    guild_id: str = ""
    channel_id: str = ""
    audio_url: str = ""
    text: str = ""


# =============================================================================
# Forum
# =============================================================================


class ThreadInfo(BaseModel):
    thread_id: str = ""
    title: str = ""
    content: str = ""
    date_time: str = ""


class PostInfo(BaseModel):
    thread_id: str = ""
    post_id: str = ""
    content: str = ""
    date_time: str = ""


class ReplyInfo(BaseModel):
    thread_id: str = ""
    post_id: str = ""
    reply_id: str = ""
    content: str = ""
    date_time: str = ""


class Thread(BaseModel):
    guild_id: str = ""
    channel_id: str = ""
    author_id: str = ""
    thread_info: ThreadInfo = Field(default_factory=ThreadInfo)


class Post(BaseModel):
    guild_id: str = ""
    channel_id: str = ""
    author_id: str = ""
    post_info: PostInfo = Field(default_factory=PostInfo)


class Reply(BaseModel):
    guild_id: str = ""
    channel_id: str = ""
    author_id: str = ""
    reply_info: ReplyInfo = Field(default_factory=ReplyInfo)


class ForumAuditResult(BaseModel):
    """Outcome of a forum content audit."""

    task_id: str = ""
    guild_id: str = ""
    channel_id: str = ""
    author_id: str = ""
    thread_id: str = ""
    post_id: str = ""
    reply_id: str = ""
    type: int = 0  # 1 thread, 2 post, 3 reply
    result: int = 0  # 0 passed, 1 rejected
    err_msg: str = ""
    date_time: str = ""


# =============================================================================
# Interaction
# =============================================================================


class InteractionData(BaseModel):
    name: str = ""
    type: int = 0
    resolved: dict[str, Any] = Field(default_factory=dict)


class Interaction(BaseModel):
    """Button click or command interaction."""

    id: str = ""
    application_id: str = ""
    type: int = 0
    data: InteractionData = Field(default_factory=InteractionData)
    guild_id: str = ""
    channel_id: str = ""
    version: int = 0
    # Group and C2C interactions
    group_openid: str = ""
    chat_type: int = 0
    scene: str = ""
    user_openid: str = ""
    timestamp: str = ""
