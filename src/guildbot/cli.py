"""guildbot CLI.

Tools for inspecting and exercising the event dispatch core.

Usage:
    guildbot routes                        # Show the routing table
    guildbot routes --format json          # Routing table as JSON
    guildbot decode frame.json             # Decode a captured gateway frame
    cat frame.json | guildbot decode       # ... from stdin
    guildbot intents message at_message    # Intent bitmask for handler slots
    guildbot listen --url wss://...        # Log events from a gateway
    guildbot config                        # Show configuration
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any

import click

from .config import ClientConfig
from .errors import DecodeError
from .event.dispatcher import Dispatcher
from .event.handlers import HandlerRegistry, intent_for
from .event.routes import ROUTES, lookup_route
from .protocol.decoder import parse_data
from .protocol.opcodes import EventType, OPCode
from .protocol.payload import Envelope
from .transport.gateway import GatewayListener

# Output format options
FORMAT_TABLE = "table"
FORMAT_JSON = "json"


def _op_name(op: int) -> str:
    try:
        return OPCode(op).name
    except ValueError:
        return str(op)


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Logging level",
)
def main(log_level: str) -> None:
    """guildbot - event dispatch for guild/group chat bots."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@main.command("routes")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice([FORMAT_TABLE, FORMAT_JSON]),
    default=FORMAT_TABLE,
    help="Output format",
)
def show_routes(output_format: str) -> None:
    """Show the routing table."""
    rows: list[dict[str, Any]] = []
    for op, table in ROUTES.items():
        for event_type, route in table.items():
            rows.append(
                {
                    "op": _op_name(op),
                    "type": EventType(event_type).value,
                    "record": route.model.__name__,
                    "slot": route.slot,
                    "intent": int(intent_for(route.slot)),
                }
            )

    if output_format == FORMAT_JSON:
        click.echo(json.dumps(rows, indent=2))
        return

    click.echo(f"{'OP':<10} {'TYPE':<28} {'RECORD':<18} {'SLOT':<22} INTENT")
    click.echo("-" * 90)
    for row in rows:
        click.echo(
            f"{row['op']:<10} {row['type']:<28} {row['record']:<18} "
            f"{row['slot']:<22} {row['intent']:#x}"
        )


@main.command("decode")
@click.argument("frame_file", type=click.File("rb"), default="-")
def decode_frame(frame_file: Any) -> None:
    """Decode a captured gateway frame and print the typed record.

    Reads FRAME_FILE, or stdin when omitted.
    """
    raw = frame_file.read()
    try:
        payload = Envelope.parse(raw)
    except DecodeError as e:
        click.echo(f"Invalid frame: {e}", err=True)
        sys.exit(1)

    route = lookup_route(payload.op, payload.type)
    if route is None:
        click.echo(
            f"No route for op={_op_name(payload.op)} type={payload.type or '-'}; "
            "would be passed to the plain handler",
            err=True,
        )
        return

    try:
        record = parse_data(payload.raw, route.model)
    except DecodeError as e:
        click.echo(f"Decode failed: {e}", err=True)
        sys.exit(1)

    click.echo(
        json.dumps(
            {
                "type": payload.type,
                "seq": payload.seq,
                "slot": route.slot,
                "record": route.model.__name__,
                "data": record.model_dump(),
            },
            indent=2,
        )
    )


@main.command("intents")
@click.argument("slots", nargs=-1, required=True)
def show_intents(slots: tuple[str, ...]) -> None:
    """Print the intent bitmask needed for the given handler SLOTS."""
    handlers = HandlerRegistry()
    for slot in slots:
        try:
            handlers.on(slot)(lambda payload, data: None)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="SLOTS") from e

    intents = handlers.intents()
    click.echo(f"{int(intents)} ({int(intents):#x})")


@main.command("listen")
@click.option("--url", default=None, help="Gateway websocket URL (default: GUILDBOT_GATEWAY_URL)")
def listen(url: str | None) -> None:
    """Connect to a gateway and log every event received."""
    config = ClientConfig.from_env()
    url = url or config.gateway_url
    if not url:
        raise click.UsageError("No gateway URL; pass --url or set GUILDBOT_GATEWAY_URL")

    def echo_event(payload: Envelope, data: Any) -> None:
        body = data.model_dump() if hasattr(data, "model_dump") else data.decode("utf-8", "replace")
        click.echo(f"[{payload.seq}] {payload.type or _op_name(payload.op)}: {body}")

    handlers = HandlerRegistry()
    for slot in HandlerRegistry.slots():
        handlers.on(slot)(echo_event)

    listener = GatewayListener(Dispatcher(handlers))
    click.echo(f"Listening on {url}", err=True)
    try:
        asyncio.run(listener.listen(url))
    except KeyboardInterrupt:
        click.echo("\nShutting down", err=True)


@main.command("config")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def show_config(output_json: bool) -> None:
    """Show configuration resolved from the environment."""
    try:
        config = ClientConfig.from_env()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    data = {
        "api_base": config.api_base,
        "gateway_url": config.gateway_url,
        "timeout": config.timeout,
        "token_set": config.token is not None,
    }

    if output_json:
        click.echo(json.dumps(data, indent=2))
        return

    click.echo("guildbot configuration")
    click.echo("-" * 40)
    click.echo(f"API base:     {data['api_base']}")
    click.echo(f"Gateway URL:  {data['gateway_url'] or 'not set'}")
    click.echo(f"Timeout:      {data['timeout']}s")
    click.echo(f"Token:        {'set' if data['token_set'] else 'not set'}")


if __name__ == "__main__":
    main()
