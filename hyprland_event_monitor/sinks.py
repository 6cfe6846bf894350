"""Consumers of decoded events.

A sink receives every decoded event and every per-line decode error from
the listener, in wire order. Sink methods may be plain functions or return
an awaitable; the listener awaits it before reading the next line.
"""

import json
import logging
import sys
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional, Protocol, TextIO, Union

from rich.console import Console
from rich.text import Text

from .errors import DecodeError
from .events import HyprlandEvent, UnknownEvent

logger = logging.getLogger(__name__)

MaybeAwaitable = Union[None, Awaitable[None]]


class EventSink(Protocol):
    """Consumer contract for the stream listener."""

    def receive_event(self, event: HyprlandEvent, line_number: int) -> MaybeAwaitable:
        """Handle one successfully decoded event."""
        ...

    def receive_error(self, error: DecodeError, line_number: int) -> MaybeAwaitable:
        """Handle one line that failed to decode."""
        ...


class LoggingSink:
    """Logs each event at INFO and each decode error at ERROR."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self.log = log or logger

    def receive_event(self, event: HyprlandEvent, line_number: int) -> None:
        self.log.info(
            f"Event received (line {line_number}): {event!r}",
            extra={"line_number": line_number, "event_tag": event.event_tag},
        )

    def receive_error(self, error: DecodeError, line_number: int) -> None:
        self.log.error(
            f"Error (line {line_number}): {error}",
            extra={"line_number": line_number, "error_code": error.code.name},
        )


class CallbackSink:
    """Adapts plain or async callables to the sink contract.

    Either callback may be omitted; the corresponding notifications are
    then dropped.
    """

    def __init__(
        self,
        on_event: Optional[Callable[[HyprlandEvent], Any]] = None,
        on_error: Optional[Callable[[DecodeError], Any]] = None,
    ) -> None:
        self.on_event = on_event
        self.on_error = on_error

    def receive_event(self, event: HyprlandEvent, line_number: int) -> MaybeAwaitable:
        if self.on_event is not None:
            return self.on_event(event)
        return None

    def receive_error(self, error: DecodeError, line_number: int) -> MaybeAwaitable:
        if self.on_error is not None:
            return self.on_error(error)
        return None


class JsonLinesSink:
    """Writes one JSON object per event or error to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream or sys.stdout

    def _write(self, record: dict) -> None:
        self.stream.write(json.dumps(record) + "\n")
        self.stream.flush()

    def receive_event(self, event: HyprlandEvent, line_number: int) -> None:
        self._write({"line": line_number, **event.to_dict()})

    def receive_error(self, error: DecodeError, line_number: int) -> None:
        self._write({"line": line_number, **error.to_dict()})


class RichConsoleSink:
    """Colored one-line rendering of the event stream for terminals."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    @staticmethod
    def format_event(event: HyprlandEvent, line_number: int) -> Text:
        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]  # HH:MM:SS.mmm
        style = "yellow" if isinstance(event, UnknownEvent) else "bold cyan"

        text = Text.assemble(
            (f"{timestamp} ", "dim"),
            (f"#{line_number:<6}", "dim"),
            (f"{event.event_tag:<20}", style),
        )
        fields = event.model_dump()
        for i, (name, value) in enumerate(fields.items()):
            if i:
                text.append("  ")
            text.append(f"{name}=", style="dim")
            if isinstance(value, bool):
                text.append(str(value).lower(), style="green" if value else "red")
            else:
                text.append(repr(value) if isinstance(value, str) else str(value))
        return text

    def receive_event(self, event: HyprlandEvent, line_number: int) -> None:
        self.console.print(self.format_event(event, line_number))

    def receive_error(self, error: DecodeError, line_number: int) -> None:
        self.console.print(
            Text.assemble(
                ("✗ ", "red"),
                (f"#{line_number:<6}", "dim"),
                (error.message, "red"),
            )
        )
