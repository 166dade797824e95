"""Gateway envelope.

An envelope is one inbound gateway frame. Only the outer fields are read
eagerly; the event payload under ``d`` stays in ``raw`` until a route decodes
it into a typed record.

Example (dispatch frame):
    {
        "op": 0,
        "s": 42,
        "t": "AT_MESSAGE_CREATE",
        "id": "AT_MESSAGE_CREATE:a1b2c3",
        "d": {"id": "m1", "content": "<@!1234> hi", ...}
    }

Example (control frame):
    {"op": 10, "d": {"heartbeat_interval": 45000}}
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import DecodeError
from .opcodes import EventType, OPCode

# Name of the member wrapping the event-specific payload in every frame.
DATA_FIELD = "d"


class Envelope(BaseModel):
    """One inbound frame: operation code, event tag and the raw frame bytes.

    ``op`` and ``type`` are plain ``int``/``str`` so that codes and tags this
    client does not know yet still parse; they compare equal to the
    corresponding ``OPCode``/``EventType`` members.
    """

    model_config = ConfigDict(frozen=True)

    op: int
    type: str = ""
    seq: int = 0
    id: str = ""
    raw: bytes = b""

    def is_dispatch(self) -> bool:
        """Check if this frame carries an event."""
        return self.op == OPCode.DISPATCH

    @classmethod
    def parse(cls, frame: bytes | str) -> Envelope:
        """Read the outer fields of a frame, keeping the full frame as ``raw``.

        Raises:
            DecodeError: If the frame is not a JSON object, has no integer ``op``,
                or carries a non-string ``t``/``id``
        """
        raw = frame.encode("utf-8") if isinstance(frame, str) else bytes(frame)
        try:
            outer = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"Invalid frame: {e}") from e

        if not isinstance(outer, dict):
            raise DecodeError(f"Frame must be a JSON object, got {type(outer).__name__}")

        op = outer.get("op")
        if isinstance(op, bool) or not isinstance(op, int):
            raise DecodeError(f"Frame has no integer op code: {op!r}")

        tag = outer.get("t") or ""
        if not isinstance(tag, str):
            raise DecodeError(f"Frame event type must be a string: {tag!r}")

        event_id = outer.get("id") or ""
        if not isinstance(event_id, str):
            raise DecodeError(f"Frame id must be a string: {event_id!r}")

        seq = outer.get("s")
        try:
            return cls(
                op=op,
                type=tag,
                seq=seq if isinstance(seq, int) and not isinstance(seq, bool) else 0,
                id=event_id,
                raw=raw,
            )
        except ValidationError as e:
            raise DecodeError(f"Invalid frame: {e}") from e

    @classmethod
    def create(
        cls,
        op: int | OPCode,
        event_type: str | EventType = "",
        data: Any = None,
        seq: int = 0,
        event_id: str = "",
    ) -> Envelope:
        """Build an envelope (and its raw frame) from parts.

        Used by tests and tooling; real frames come from ``parse``.
        """
        tag = event_type.value if isinstance(event_type, EventType) else event_type
        frame: dict[str, Any] = {"op": int(op), "s": seq, "t": tag, "id": event_id}
        if data is not None:
            frame[DATA_FIELD] = data
        return cls(
            op=int(op),
            type=tag,
            seq=seq,
            id=event_id,
            raw=json.dumps(frame).encode("utf-8"),
        )
