"""Tests for the guildbot CLI."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from guildbot.cli import main
from guildbot.event import HandlerRegistry


class TestRoutesCommand:
    def test_table(self):
        result = CliRunner().invoke(main, ["routes"])

        assert result.exit_code == 0
        assert "GROUP_AT_MESSAGE_CREATE" in result.output
        assert "forum_audit" in result.output

    def test_json(self):
        result = CliRunner().invoke(main, ["routes", "--format", "json"])

        assert result.exit_code == 0
        rows = json.loads(result.output)
        assert len(rows) == 34
        at_message = next(r for r in rows if r["type"] == "AT_MESSAGE_CREATE")
        assert at_message == {
            "op": "DISPATCH",
            "type": "AT_MESSAGE_CREATE",
            "record": "Message",
            "slot": "at_message",
            "intent": 1 << 30,
        }


class TestDecodeCommand:
    def test_decode_from_stdin(self):
        frame = '{"op": 0, "s": 9, "t": "MESSAGE_CREATE", "d": {"id": "m1", "content": "hi"}}'

        result = CliRunner().invoke(main, ["decode"], input=frame)

        assert result.exit_code == 0
        output = json.loads(result.output)
        assert output["slot"] == "message"
        assert output["seq"] == 9
        assert output["data"]["content"] == "hi"

    def test_decode_from_file(self, tmp_path):
        path = tmp_path / "frame.json"
        path.write_text('{"op": 0, "t": "AUDIO_START", "d": {"audio_url": "u"}}')

        result = CliRunner().invoke(main, ["decode", str(path)])

        assert result.exit_code == 0
        assert json.loads(result.output)["record"] == "AudioAction"

    def test_unrouted_frame(self):
        result = CliRunner().invoke(main, ["decode"], input='{"op": 10, "d": {}}')

        assert result.exit_code == 0
        assert "No route for op=HELLO" in result.output

    def test_decode_error(self):
        frame = '{"op": 0, "t": "MESSAGE_CREATE", "d": {"id": 1}}'

        result = CliRunner().invoke(main, ["decode"], input=frame)

        assert result.exit_code == 1
        assert "Decode failed" in result.output

    def test_invalid_frame(self):
        result = CliRunner().invoke(main, ["decode"], input="nope")

        assert result.exit_code == 1
        assert "Invalid frame" in result.output

    def test_non_string_tag(self):
        result = CliRunner().invoke(main, ["decode"], input='{"op": 0, "t": 123}')

        assert result.exit_code == 1
        assert "Invalid frame" in result.output

    def test_numeric_string_is_not_coerced(self):
        frame = '{"op": 0, "t": "MESSAGE_CREATE", "d": {"id": "m1", "seq": "5"}}'

        result = CliRunner().invoke(main, ["decode"], input=frame)

        assert result.exit_code == 1
        assert "Decode failed" in result.output


class TestIntentsCommand:
    def test_intents(self):
        result = CliRunner().invoke(main, ["intents", "guild", "c2c_message"])

        assert result.exit_code == 0
        expected = (1 << 0) | (1 << 25)
        assert result.output.strip() == f"{expected} ({expected:#x})"

    def test_unknown_slot(self):
        result = CliRunner().invoke(main, ["intents", "bogus"])

        assert result.exit_code == 2
        assert "Unknown handler slot" in result.output


class TestListenCommand:
    def test_requires_url(self, monkeypatch):
        monkeypatch.delenv("GUILDBOT_GATEWAY_URL", raising=False)

        result = CliRunner().invoke(main, ["listen"])

        assert result.exit_code == 2
        assert "No gateway URL" in result.output

    def test_listens_on_url(self):
        with patch("guildbot.cli.GatewayListener") as listener_cls:
            listener_cls.return_value.listen = AsyncMock()
            result = CliRunner().invoke(main, ["listen", "--url", "wss://gw.example.invalid"])

        assert result.exit_code == 0
        listener_cls.return_value.listen.assert_awaited_once_with("wss://gw.example.invalid")
        handlers = listener_cls.call_args.args[0].handlers
        assert handlers.registered() == HandlerRegistry.slots()
        assert handlers.plain is handlers.message


class TestConfigCommand:
    def test_json(self, monkeypatch):
        monkeypatch.setenv("GUILDBOT_TOKEN", "secret")
        monkeypatch.delenv("GUILDBOT_API_BASE", raising=False)
        monkeypatch.delenv("GUILDBOT_SANDBOX", raising=False)

        result = CliRunner().invoke(main, ["config", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["token_set"] is True
        assert "secret" not in result.output

    def test_invalid_timeout(self, monkeypatch):
        monkeypatch.setenv("GUILDBOT_TIMEOUT", "never")

        result = CliRunner().invoke(main, ["config"])

        assert result.exit_code == 1
        assert "GUILDBOT_TIMEOUT" in result.output
