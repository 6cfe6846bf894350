"""
Hyprland Event Monitor

Typed decoding of the Hyprland notification socket (.socket2.sock) and an
asyncio listener that streams decoded events to pluggable sinks.
"""

__version__ = "1.0.0"

from .catalog import DEFAULT_CATALOG, EventCatalog, EventDescriptor, FieldKind
from .config import ListenerConfig
from .errors import (
    ArityError,
    ConfigError,
    DecodeError,
    ErrorCode,
    FieldTypeError,
    FormatError,
    HyprlandEventError,
    ListenerConnectionError,
)
from .events import EVENT_TYPES, HyprlandEvent, UnknownEvent
from .interpreter import Interpreter, interpret
from .listener import EventListener, ListenerState, ListenerStats
from .sinks import CallbackSink, EventSink, JsonLinesSink, LoggingSink, RichConsoleSink

__all__ = [
    "ArityError",
    "CallbackSink",
    "ConfigError",
    "DEFAULT_CATALOG",
    "DecodeError",
    "EVENT_TYPES",
    "ErrorCode",
    "EventCatalog",
    "EventDescriptor",
    "EventListener",
    "EventSink",
    "FieldKind",
    "FieldTypeError",
    "FormatError",
    "HyprlandEvent",
    "HyprlandEventError",
    "Interpreter",
    "JsonLinesSink",
    "ListenerConfig",
    "ListenerConnectionError",
    "ListenerState",
    "ListenerStats",
    "LoggingSink",
    "RichConsoleSink",
    "UnknownEvent",
    "interpret",
]
