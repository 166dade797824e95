"""Unit tests for envelope parsing and partial decoding."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from guildbot.errors import DecodeError
from guildbot.protocol import (
    Envelope,
    EventType,
    Interaction,
    Member,
    Message,
    MessageDelete,
    OPCode,
    extract_data,
    parse_data,
)

# =============================================================================
# Envelope
# =============================================================================


class TestEnvelopeParse:
    """Tests for Envelope.parse."""

    def test_dispatch_frame(self):
        frame = b'{"op": 0, "s": 42, "t": "AT_MESSAGE_CREATE", "id": "evt-1", "d": {"id": "m1"}}'
        payload = Envelope.parse(frame)

        assert payload.op == OPCode.DISPATCH
        assert payload.type == EventType.AT_MESSAGE_CREATE
        assert payload.seq == 42
        assert payload.id == "evt-1"
        assert payload.raw == frame
        assert payload.is_dispatch() is True

    def test_control_frame_defaults(self):
        payload = Envelope.parse('{"op": 10, "d": {"heartbeat_interval": 45000}}')

        assert payload.op == OPCode.HELLO
        assert payload.type == ""
        assert payload.seq == 0
        assert payload.id == ""
        assert payload.is_dispatch() is False

    def test_null_tag_and_seq(self):
        payload = Envelope.parse(b'{"op": 11, "s": null, "t": null}')

        assert payload.type == ""
        assert payload.seq == 0

    def test_unknown_tag_and_op_are_kept(self):
        payload = Envelope.parse(b'{"op": 99, "t": "BRAND_NEW_EVENT"}')

        assert payload.op == 99
        assert payload.type == "BRAND_NEW_EVENT"

    def test_str_frame_is_stored_as_bytes(self):
        payload = Envelope.parse('{"op": 0, "t": "GUILD_CREATE", "d": {"name": "café"}}')

        assert isinstance(payload.raw, bytes)
        assert json.loads(payload.raw)["d"]["name"] == "café"

    @pytest.mark.parametrize(
        "frame",
        [
            b"not json",
            b"[1, 2, 3]",
            b'"op"',
            b'{"t": "MESSAGE_CREATE"}',
            b'{"op": "0"}',
            b'{"op": true}',
            b'{"op": 0, "t": 123, "d": {}}',
            b'{"op": 0, "t": ["MESSAGE_CREATE"]}',
            b'{"op": 0, "id": 7}',
            b"\xff\xfe",
        ],
    )
    def test_invalid_frames(self, frame):
        with pytest.raises(DecodeError):
            Envelope.parse(frame)

    def test_envelope_is_immutable(self):
        payload = Envelope.parse(b'{"op": 0}')

        with pytest.raises(ValidationError):
            payload.op = 1


class TestEnvelopeCreate:
    """Tests for Envelope.create."""

    def test_round_trips_through_parse(self):
        created = Envelope.create(OPCode.DISPATCH, EventType.MESSAGE_DELETE, {"x": 1}, seq=5, event_id="e")
        parsed = Envelope.parse(created.raw)

        assert parsed == created

    def test_without_data_has_no_d(self):
        payload = Envelope.create(OPCode.HEARTBEAT_ACK)

        assert "d" not in json.loads(payload.raw)


# =============================================================================
# Partial decoder
# =============================================================================


class TestExtractData:
    """Tests for extract_data."""

    def test_returns_sub_document_unvalidated(self):
        assert extract_data(b'{"op": 0, "d": [1, "two"]}') == [1, "two"]

    @pytest.mark.parametrize("frame", [b'{"op": 0}', b'{"op": 0, "d": null}', b"[]", b"{"])
    def test_missing_or_invalid(self, frame):
        with pytest.raises(DecodeError):
            extract_data(frame)


class TestParseData:
    """Tests for parse_data."""

    def test_decodes_nested_records(self):
        frame = json.dumps(
            {
                "op": 0,
                "t": "AT_MESSAGE_CREATE",
                "d": {
                    "id": "m1",
                    "channel_id": "c1",
                    "guild_id": "g1",
                    "content": "<@!10> roll",
                    "author": {"id": "u1", "username": "alice", "bot": False},
                    "member": {"nick": "Al", "roles": ["1", "4"]},
                    "mentions": [{"id": "10", "bot": True}],
                    "attachments": [{"url": "https://example.invalid/a.png", "width": 10}],
                    "seq": 7,
                    "message_reference": {"message_id": "m0"},
                    "future_field": {"ignored": True},
                },
            }
        )

        message = parse_data(frame, Message)

        assert message.id == "m1"
        assert message.author.username == "alice"
        assert message.member.roles == ["1", "4"]
        assert message.mentions[0].bot is True
        assert message.attachments[0].width == 10
        assert message.message_reference.message_id == "m0"
        assert message.seq == 7

    def test_missing_fields_get_zero_values(self):
        member = parse_data(b'{"op": 0, "d": {}}', Member)

        assert member.guild_id == ""
        assert member.user is None
        assert member.roles == []

    def test_nested_defaults(self):
        deleted = parse_data(b'{"op": 0, "d": {"op_user": {"id": "u9"}}}', MessageDelete)

        assert deleted.message.id == ""
        assert deleted.op_user.id == "u9"

    def test_interaction(self):
        frame = b'{"op": 0, "d": {"id": "i1", "type": 11, "data": {"type": 11, "resolved": {"button_id": "b1"}}}}'
        interaction = parse_data(frame, Interaction)

        assert interaction.type == 11
        assert interaction.data.resolved == {"button_id": "b1"}

    def test_returns_fresh_instance(self):
        frame = b'{"op": 0, "d": {"id": "m1"}}'

        assert parse_data(frame, Message) is not parse_data(frame, Message)

    @pytest.mark.parametrize(
        "frame",
        [
            b'{"op": 0}',
            b'{"op": 0, "d": null}',
            b'{"op": 0, "d": "text"}',
            b'{"op": 0, "d": {"id": 1}}',
            b'{"op": 0, "d": {"mentions": {"id": "u"}}}',
            b'{"op": 0, "d": {"seq": "5"}}',
            b'{"op": 0, "d": {"seq": 5.0}}',
            b'{"op": 0, "d": {"mention_everyone": "true"}}',
        ],
    )
    def test_decode_errors(self, frame):
        with pytest.raises(DecodeError) as exc_info:
            parse_data(frame, Message)

        assert "Message" in str(exc_info.value) or "payload" in str(exc_info.value)

    def test_validation_error_is_chained(self):
        with pytest.raises(DecodeError) as exc_info:
            parse_data(b'{"op": 0, "d": {"id": 1}}', Message)

        assert isinstance(exc_info.value.__cause__, ValidationError)
