"""Message endpoints of the OpenAPI.

Thin async wrappers over httpx. Each call is one request; there is no retry
or rate limiting here.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from ..config import ClientConfig
from ..errors import APIError, DecodeError, PagerRequiredError
from ..protocol.records import Message
from .types import (
    MediaMessage,
    MessageMediaToCreate,
    MessagesPager,
    MessageToCreate,
    SettingGuideToCreate,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

TRACE_ID_HEADER = "X-Tps-trace-ID"


def _p(value: str) -> str:
    """Escape a path parameter."""
    return quote(value, safe="")


def _decode(model: type[M], data: Any) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"Response does not match {model.__name__}: {e}") from e


class MessageAPI:
    """Fetch, send, edit and retract messages.

    Usage:
        async with MessageAPI.from_config(ClientConfig.from_env()) as api:
            msg = await api.post_message(channel_id, MessageToCreate(content="hi"))
    """

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    @classmethod
    def from_config(cls, config: ClientConfig) -> MessageAPI:
        headers = {"Authorization": config.token} if config.token else {}
        client = httpx.AsyncClient(
            base_url=config.api_base,
            headers=headers,
            timeout=httpx.Timeout(config.timeout),
        )
        return cls(client)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> MessageAPI:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        body: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        response = await self._client.request(method, path, json=body, params=params)
        if not response.is_success:
            trace_id = response.headers.get(TRACE_ID_HEADER)
            try:
                detail: Any = response.json()
            except ValueError:
                detail = response.text
            logger.warning(f"{method} {path} failed: {response.status_code} (trace_id={trace_id})")
            raise APIError(response.status_code, detail, trace_id)
        return response

    # =========================================================================
    # Channel messages
    # =========================================================================

    async def message(self, channel_id: str, message_id: str) -> Message:
        """Fetch a single message."""
        response = await self._request(
            "GET", f"/channels/{_p(channel_id)}/messages/{_p(message_id)}"
        )
        data = response.json()
        result = _decode(Message, data)
        if not result.id:
            # Some deployments wrap the message as {"message": {...}}
            wrapped = data.get("message") if isinstance(data, dict) else None
            if not isinstance(wrapped, dict):
                raise DecodeError("Response has neither a message id nor a 'message' member")
            result = _decode(Message, wrapped)
        return result

    async def messages(self, channel_id: str, pager: MessagesPager | None) -> list[Message]:
        """List messages of a channel around/before/after an anchor message.

        Raises:
            PagerRequiredError: If no pager is given
        """
        if pager is None:
            raise PagerRequiredError()
        response = await self._request(
            "GET", f"/channels/{_p(channel_id)}/messages", params=pager.query_params()
        )
        data = response.json()
        if not isinstance(data, list):
            raise DecodeError(f"Expected a list of messages, got {type(data).__name__}")
        return [_decode(Message, item) for item in data]

    async def post_message(self, channel_id: str, msg: MessageToCreate) -> Message:
        """Send a message to a channel."""
        response = await self._request(
            "POST", f"/channels/{_p(channel_id)}/messages", body=msg.to_body()
        )
        return _decode(Message, response.json())

    async def patch_message(
        self, channel_id: str, message_id: str, msg: MessageToCreate
    ) -> Message:
        """Edit a message the bot sent."""
        response = await self._request(
            "PATCH",
            f"/channels/{_p(channel_id)}/messages/{_p(message_id)}",
            body=msg.to_body(),
        )
        return _decode(Message, response.json())

    async def retract_message(
        self, channel_id: str, message_id: str, hidetip: bool = False
    ) -> None:
        """Retract (delete) a message.

        Args:
            hidetip: Hide the "message was retracted" notice
        """
        params = {"hidetip": "true"} if hidetip else None
        await self._request(
            "DELETE",
            f"/channels/{_p(channel_id)}/messages/{_p(message_id)}",
            params=params,
        )

    async def post_setting_guide(self, channel_id: str, at_user_ids: list[str]) -> Message:
        """Send the setting guide, mentioning each user in ``at_user_ids``."""
        guide = SettingGuideToCreate(content="".join(f"<@{uid}>" for uid in at_user_ids))
        response = await self._request(
            "POST", f"/channels/{_p(channel_id)}/settingguide", body=guide.model_dump()
        )
        return _decode(Message, response.json())

    # =========================================================================
    # C2C and group messages
    # =========================================================================

    async def post_c2c_message(self, user_openid: str, msg: MessageToCreate) -> Message:
        """Send a private message to a user."""
        response = await self._request(
            "POST", f"/v2/users/{_p(user_openid)}/messages", body=msg.to_body()
        )
        return _decode(Message, response.json())

    async def post_c2c_file(self, user_openid: str, media: MessageMediaToCreate) -> MediaMessage:
        """Upload a file for a private chat."""
        response = await self._request(
            "POST", f"/v2/users/{_p(user_openid)}/files", body=media.to_body()
        )
        return _decode(MediaMessage, response.json())

    async def post_group_message(self, group_openid: str, msg: MessageToCreate) -> Message:
        """Send a message to a group."""
        response = await self._request(
            "POST", f"/v2/groups/{_p(group_openid)}/messages", body=msg.to_body()
        )
        return _decode(Message, response.json())

    async def post_group_file(
        self, group_openid: str, media: MessageMediaToCreate
    ) -> MediaMessage:
        """Upload a file for a group chat."""
        response = await self._request(
            "POST", f"/v2/groups/{_p(group_openid)}/files", body=media.to_body()
        )
        return _decode(MediaMessage, response.json())
