"""OpenAPI client (message endpoints)."""

from .messages import MessageAPI
from .types import (
    MediaInfo,
    MediaMessage,
    MessageMediaToCreate,
    MessagePagerType,
    MessageReferenceToCreate,
    MessagesPager,
    MessageToCreate,
    SettingGuideToCreate,
)

__all__ = [
    "MessageAPI",
    "MediaInfo",
    "MediaMessage",
    "MessageMediaToCreate",
    "MessagePagerType",
    "MessageReferenceToCreate",
    "MessagesPager",
    "MessageToCreate",
    "SettingGuideToCreate",
]
