"""Stream listener for the Hyprland notification socket.

Owns one connection, reads it line by line and hands each line to the
interpreter. Decode failures are reported to the sink and never stop the
loop; only transport failures end it.

State machine: IDLE -> CONNECTING -> STREAMING -> CLOSED
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from .config import ListenerConfig
from .errors import DecodeError, ErrorCode, FormatError, ListenerConnectionError
from .events import UnknownEvent
from .interpreter import Interpreter
from .sinks import EventSink, LoggingSink

logger = logging.getLogger(__name__)

# asyncio's default StreamReader limit; one notification never comes close
DEFAULT_LINE_LIMIT = 2 ** 16


class ListenerState(Enum):
    """Lifecycle of a listener instance."""
    IDLE = "idle"
    CONNECTING = "connecting"
    STREAMING = "streaming"
    CLOSED = "closed"


@dataclass
class ListenerStats:
    """Counters for one listener's lifetime."""
    lines_read: int = 0
    events_emitted: int = 0
    decode_errors: int = 0
    unknown_events: int = 0
    sink_failures: int = 0
    connected_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lines_read": self.lines_read,
            "events_emitted": self.events_emitted,
            "decode_errors": self.decode_errors,
            "unknown_events": self.unknown_events,
            "sink_failures": self.sink_failures,
            "connected_at": self.connected_at.isoformat() if self.connected_at else None,
            "closed_at": self.closed_at.isoformat() if self.closed_at else None,
        }


class EventListener:
    """Reads notifications from one connection and feeds them to a sink.

    Either a socket path (connected on run) or an already-open
    asyncio.StreamReader (see from_stream) must be given.
    """

    def __init__(
        self,
        socket_path: Optional[Union[str, Path]] = None,
        sink: Optional[EventSink] = None,
        interpreter: Optional[Interpreter] = None,
        line_limit: int = DEFAULT_LINE_LIMIT,
    ) -> None:
        """
        Initialize listener.

        Args:
            socket_path: Path to the compositor's .socket2.sock
            sink: Consumer for events and decode errors (default: LoggingSink)
            interpreter: Line interpreter (default: built-in catalog)
            line_limit: Maximum accepted line length in bytes
        """
        self.socket_path = Path(socket_path) if socket_path is not None else None
        self.sink: EventSink = sink or LoggingSink()
        self.interpreter = interpreter or Interpreter()
        self.line_limit = line_limit
        self.stats = ListenerStats()

        self._state = ListenerState.IDLE
        self._reader: Optional[asyncio.StreamReader] = None
        self._writer: Optional[asyncio.StreamWriter] = None
        self._stop_event = asyncio.Event()
        self._task: Optional["asyncio.Task[ListenerStats]"] = None

    @classmethod
    def from_config(cls, config: ListenerConfig, **kwargs) -> "EventListener":
        """Create a listener for the socket a config resolves to.

        Raises:
            ConfigError: If the socket path cannot be resolved
        """
        return cls(socket_path=config.resolve_socket_path(), **kwargs)

    @classmethod
    def from_stream(
        cls,
        reader: asyncio.StreamReader,
        writer: Optional[asyncio.StreamWriter] = None,
        **kwargs,
    ) -> "EventListener":
        """Create a listener over an already-open connection.

        The listener takes ownership of the writer (if given) and closes it
        when the loop ends.
        """
        listener = cls(**kwargs)
        listener._reader = reader
        listener._writer = writer
        return listener

    @property
    def state(self) -> ListenerState:
        return self._state

    @property
    def task(self) -> Optional["asyncio.Task[ListenerStats]"]:
        return self._task

    async def connect(self) -> None:
        """Open the unix socket connection.

        Raises:
            ListenerConnectionError: If the socket cannot be opened
        """
        if self._state is not ListenerState.IDLE:
            raise RuntimeError(f"Cannot connect a listener in state {self._state.value}")
        if self.socket_path is None:
            raise ValueError("EventListener needs a socket_path or an open stream")

        self._state = ListenerState.CONNECTING
        logger.info(f"Connecting to Hyprland event socket {self.socket_path}")
        try:
            self._reader, self._writer = await asyncio.open_unix_connection(
                str(self.socket_path), limit=self.line_limit
            )
        except OSError as e:
            self._state = ListenerState.CLOSED
            self.stats.closed_at = datetime.now()
            raise ListenerConnectionError(str(self.socket_path), e.strerror or str(e)) from e

        logger.info("Connected to Hyprland event socket")

    def start(self) -> "asyncio.Task[ListenerStats]":
        """Schedule run() as a task and return it.

        Awaiting the task yields the final stats, or raises
        ListenerConnectionError on a transport failure.
        """
        if self._task is not None:
            raise RuntimeError("Listener already started")
        self._task = asyncio.create_task(self.run(), name="hyprland-event-listener")
        return self._task

    def stop(self) -> None:
        """Ask the loop to exit. Safe to call at any time, including mid-read."""
        if not self._stop_event.is_set():
            logger.info("Stop requested for event listener")
            self._stop_event.set()

    async def run(self) -> ListenerStats:
        """Connect if needed, then stream until EOF, stop() or an I/O error.

        Returns:
            Final ListenerStats

        Raises:
            ListenerConnectionError: Connect failure or read error mid-stream
        """
        if self._state is not ListenerState.IDLE:
            raise RuntimeError(f"Cannot run a listener in state {self._state.value}")
        if self._task is not None and self._task is not asyncio.current_task():
            raise RuntimeError("Listener is already running in its own task")

        stop_waiter: Optional[asyncio.Future] = None
        read: Optional[asyncio.Future] = None

        try:
            if self._reader is None:
                await self.connect()

            self._state = ListenerState.STREAMING
            self.stats.connected_at = datetime.now()
            stop_waiter = asyncio.ensure_future(self._stop_event.wait())

            while not self._stop_event.is_set():
                read = asyncio.ensure_future(self._read_line())
                done, _ = await asyncio.wait(
                    {read, stop_waiter}, return_when=asyncio.FIRST_COMPLETED
                )
                if read not in done:
                    read.cancel()
                    break

                try:
                    data = read.result()
                except ValueError as e:
                    # Line exceeded the reader limit and has been discarded
                    self.stats.lines_read += 1
                    await self._report_error(FormatError("<oversized line>", reason=str(e)))
                    continue
                except OSError as e:
                    raise ListenerConnectionError(
                        str(self.socket_path) if self.socket_path else None,
                        e.strerror or str(e),
                        code=ErrorCode.READ_FAILED,
                    ) from e

                if not data:
                    logger.info("End of stream from Hyprland event socket")
                    break

                await self._process_line(data.decode("utf-8", errors="replace").rstrip("\r\n"))
        finally:
            for pending in (read, stop_waiter):
                if pending is not None and not pending.done():
                    pending.cancel()
            await self._close()

        logger.info(
            f"Event listener closed: {self.stats.events_emitted} events, "
            f"{self.stats.decode_errors} decode errors"
        )
        return self.stats

    async def _read_line(self) -> bytes:
        """Read one line, including its newline; b"" at EOF.

        StreamReader.readline() only drops what is buffered when a line
        overruns the limit, so the rest of that line would come back as a
        line of its own. Here the whole line is consumed through its newline
        before ValueError is raised.
        """
        try:
            return await self._reader.readuntil(b"\n")
        except asyncio.IncompleteReadError as e:
            return e.partial
        except asyncio.LimitOverrunError as e:
            consumed = e.consumed

        while True:
            await self._reader.readexactly(consumed)
            try:
                await self._reader.readuntil(b"\n")
                break
            except asyncio.IncompleteReadError:
                break
            except asyncio.LimitOverrunError as e:
                consumed = e.consumed

        raise ValueError("Line exceeds the reader limit")

    async def _process_line(self, line: str) -> None:
        self.stats.lines_read += 1
        try:
            event = self.interpreter.interpret(line)
        except DecodeError as e:
            await self._report_error(e)
            return

        if isinstance(event, UnknownEvent):
            self.stats.unknown_events += 1
        self.stats.events_emitted += 1
        await self._deliver(self.sink.receive_event, event)

    async def _report_error(self, error: DecodeError) -> None:
        self.stats.decode_errors += 1
        await self._deliver(self.sink.receive_error, error)

    async def _deliver(self, handler: Callable[..., Any], item: Any) -> None:
        line_number = self.stats.lines_read
        try:
            result = handler(item, line_number)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            # A broken consumer must not take the listener down with it
            self.stats.sink_failures += 1
            logger.error(f"Sink failed on line {line_number}: {e}", exc_info=True)

    async def _close(self) -> None:
        self._state = ListenerState.CLOSED
        self.stats.closed_at = datetime.now()
        self._reader = None
        writer, self._writer = self._writer, None
        if writer is None:
            return

        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            # Peer already gone; the transport is closed either way
            logger.debug(f"Error while closing event socket: {e}")
