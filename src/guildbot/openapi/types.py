"""OpenAPI request and response types for the message endpoints."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel


class MessageReferenceToCreate(BaseModel):
    message_id: str
    ignore_get_message_error: bool | None = None


class MediaInfo(BaseModel):
    """Reference to an uploaded file (from ``MediaMessage.file_info``)."""

    file_info: str


class MessageToCreate(BaseModel):
    """Body of a post/patch message request.

    Fields left as None are omitted from the request. Passive replies set
    ``msg_id`` (or ``event_id``) to the message or event being answered.
    """

    content: str | None = None
    msg_type: int | None = None  # 0 text, 2 markdown, 3 ark, 4 embed, 7 media
    embed: dict[str, Any] | None = None
    ark: dict[str, Any] | None = None
    image: str | None = None
    markdown: dict[str, Any] | None = None
    keyboard: dict[str, Any] | None = None
    media: MediaInfo | None = None
    message_reference: MessageReferenceToCreate | None = None
    msg_id: str | None = None
    event_id: str | None = None
    msg_seq: int | None = None

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SettingGuideToCreate(BaseModel):
    content: str


class MessageMediaToCreate(BaseModel):
    """Body of a C2C/group file upload."""

    file_type: int  # 1 image, 2 video, 3 voice, 4 file
    url: str
    srv_send_msg: bool = False

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class MediaMessage(BaseModel):
    """Result of a C2C/group file upload."""

    file_uuid: str = ""
    file_info: str = ""
    ttl: int = 0
    id: str = ""


class MessagePagerType(str, Enum):
    """Direction to page from the anchor message."""

    AROUND = "around"
    BEFORE = "before"
    AFTER = "after"


class MessagesPager(BaseModel):
    """Paging parameters for listing channel messages."""

    type: MessagePagerType = MessagePagerType.BEFORE
    id: str = ""
    limit: int = 20

    def query_params(self) -> dict[str, str]:
        params = {"limit": str(self.limit)}
        if self.id:
            params[self.type.value] = self.id
        return params
