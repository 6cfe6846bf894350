"""
Hyprland Event Monitor CLI

Usage:
    hyprland-event-monitor listen [--output log|rich|json] [--signature SIG] [--socket PATH]
    hyprland-event-monitor decode [LINE ...]       (reads stdin when no LINE given)
    hyprland-event-monitor tags
"""

import asyncio
import json
import logging
import signal
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .catalog import DEFAULT_CATALOG
from .config import ListenerConfig
from .errors import ConfigError, DecodeError, ListenerConnectionError
from .interpreter import interpret
from .listener import EventListener, ListenerStats
from .logging_config import setup_logging
from .sinks import EventSink, JsonLinesSink, LoggingSink, RichConsoleSink

logger = logging.getLogger(__name__)


def make_sink(output: str) -> EventSink:
    """Build the sink for an --output choice."""
    if output == "rich":
        return RichConsoleSink()
    if output == "json":
        return JsonLinesSink()
    return LoggingSink()


async def run_listener(socket_path: Path, sink: EventSink) -> ListenerStats:
    """Run one listener until EOF, SIGINT/SIGTERM or a connection error."""
    listener = EventListener(socket_path=socket_path, sink=sink)

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, listener.stop)

    try:
        return await listener.start()
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(sig)


@click.group()
def cli():
    """Decode and follow the Hyprland event socket."""
    pass


@cli.command()
@click.option('--signature', help='Instance signature (default: $HYPRLAND_INSTANCE_SIGNATURE)')
@click.option('--runtime-dir', type=click.Path(path_type=Path), help='Runtime dir (default: $XDG_RUNTIME_DIR)')
@click.option('--socket', 'socket_path', type=click.Path(path_type=Path), help='Explicit event socket path')
@click.option('--output', type=click.Choice(['log', 'rich', 'json']), default='log', show_default=True,
              help='How to report events')
@click.option('--log-level', default='INFO', show_default=True, help='Logging level')
def listen(signature: Optional[str], runtime_dir: Optional[Path], socket_path: Optional[Path],
           output: str, log_level: str):
    """
    Follow the event socket until it closes or Ctrl+C.

    Exit codes:
      0 - Stream ended or stopped
      1 - Configuration or connection error
    """
    setup_logging(log_level)
    console = Console(stderr=True)

    try:
        config = ListenerConfig.from_environment(
            instance_signature=signature,
            runtime_dir=runtime_dir,
            socket_path=socket_path,
        )
        resolved = config.resolve_socket_path()
    except (ConfigError, ValidationError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    try:
        stats = asyncio.run(run_listener(resolved, make_sink(output)))
    except ListenerConnectionError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        sys.exit(1)

    logger.info(f"Listener stats: {stats.to_dict()}")


@cli.command()
@click.argument('lines', nargs=-1)
def decode(lines: Tuple[str, ...]):
    """
    Decode notification lines and print one JSON object per line.

    LINES: raw lines such as 'workspacev2>>3,main'. Read from stdin if omitted.

    Exit code 1 if any line failed to decode.
    """
    if lines:
        source = lines
    else:
        source = (line.rstrip("\r\n") for line in sys.stdin if line.strip())

    failed = False
    for line in source:
        try:
            record = interpret(line).to_dict()
        except DecodeError as e:
            failed = True
            record = e.to_dict()
        click.echo(json.dumps(record))

    if failed:
        sys.exit(1)


@cli.command()
def tags():
    """List every event tag the decoder understands."""
    console = Console()

    table = Table(title="Hyprland Events", show_header=True, header_style="bold cyan")
    table.add_column("Tag", style="cyan")
    table.add_column("Arity", justify="right")
    table.add_column("Fields")
    table.add_column("Model", style="dim")

    for descriptor in DEFAULT_CATALOG:
        fields = ", ".join(f"{name}:{kind.value}" for name, kind in descriptor.fields) or "-"
        table.add_row(descriptor.tag, str(descriptor.arity), fields, descriptor.event_type.__name__)

    console.print(table)


if __name__ == "__main__":
    cli()
