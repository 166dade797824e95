"""Gateway listener.

Reads frames from a websocket connection and feeds them to a Dispatcher, one
at a time in receipt order. A frame that fails to decode, or whose handler
raises, is logged and skipped; the next frame is processed normally.

Session management (hello, identify, heartbeat, resume, reconnect) is not
handled here.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any

import websockets

from ..errors import DecodeError
from ..event.dispatcher import Dispatcher
from ..protocol.payload import Envelope

logger = logging.getLogger(__name__)


class GatewayListener:
    """Drive a Dispatcher from a gateway websocket."""

    def __init__(self, dispatcher: Dispatcher):
        self._dispatcher = dispatcher
        self._websocket: Any = None  # websockets ClientConnection
        self._running = False
        self.last_seq = 0
        self.handled = 0
        self.failed = 0

    @property
    def is_running(self) -> bool:
        return self._running

    async def handle_frame(self, frame: bytes | str) -> bool:
        """Parse and dispatch one frame.

        Returns:
            True if the frame was dispatched without error
        """
        try:
            payload = Envelope.parse(frame)
        except DecodeError as e:
            self.failed += 1
            logger.warning(f"Invalid gateway frame: {e}")
            return False

        if payload.seq > 0:
            self.last_seq = payload.seq

        try:
            await self._dispatcher.dispatch_async(payload)
        except DecodeError as e:
            self.failed += 1
            logger.warning(f"Dropping malformed {payload.type or payload.op} event: {e}")
            return False
        except Exception:
            self.failed += 1
            logger.exception(f"Handler for {payload.type or payload.op} failed")
            return False

        self.handled += 1
        return True

    async def listen(self, url: str) -> None:
        """Connect to ``url`` and dispatch frames until closed or stopped."""
        self._running = True
        logger.info(f"Connecting to gateway {url}")
        try:
            async with websockets.connect(url) as websocket:
                self._websocket = websocket
                async for frame in websocket:
                    if not self._running:
                        break
                    await self.handle_frame(frame)
        except websockets.ConnectionClosed as e:
            logger.info(f"Gateway connection closed: {e}")
        except asyncio.CancelledError:
            logger.info("Gateway listener cancelled")
            raise
        finally:
            self._running = False
            self._websocket = None
            logger.info(f"Gateway listener stopped (handled={self.handled}, failed={self.failed})")

    async def stop(self) -> None:
        """Stop listening and close the connection."""
        self._running = False
        if self._websocket is not None:
            with contextlib.suppress(websockets.ConnectionClosed):
                await self._websocket.close()
