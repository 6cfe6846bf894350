"""
Error taxonomy for the Hyprland event monitor.

Per-line decode errors (FormatError, ArityError, FieldTypeError) are
recoverable: the listener reports them and keeps reading. Connection errors
are terminal for the connection they occur on.
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(Enum):
    """
    Error codes for the Hyprland event monitor.

    Code ranges:
    - 1000-1099: Decode errors (one notification line)
    - 1100-1199: Connection errors
    - 1200-1299: Configuration errors
    """

    # Decode errors (1000-1099)
    INVALID_FORMAT = 1000
    ARITY_MISMATCH = 1001
    INVALID_FIELD = 1002
    UNKNOWN_TAG = 1003

    # Connection errors (1100-1199)
    CONNECT_FAILED = 1100
    READ_FAILED = 1101

    # Configuration errors (1200-1299)
    MISSING_SIGNATURE = 1200


class HyprlandEventError(Exception):
    """Base exception for Hyprland event monitor errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for structured output.

        Returns:
            Error dictionary with code, name, message and context
        """
        result = {
            "code": self.code.value,
            "error": self.code.name.lower(),
            "message": self.message
        }

        if self.context:
            result["context"] = self.context

        return result


class DecodeError(HyprlandEventError):
    """A single notification line could not be decoded.

    Attributes:
        raw_line: The offending line, when known (set by the interpreter)
        tag: The event tag, if the line got far enough to have one
        payload: The raw payload after the delimiter
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        tag: Optional[str] = None,
        payload: Optional[str] = None,
        raw_line: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.tag = tag
        self.payload = payload
        self.raw_line = raw_line

        merged = {}
        if tag is not None:
            merged["tag"] = tag
        if payload is not None:
            merged["payload"] = payload
        if raw_line is not None:
            merged["raw_line"] = raw_line
        merged.update(context or {})

        super().__init__(code=code, message=message, context=merged)

    def with_raw_line(self, raw_line: str) -> "DecodeError":
        """Attach the full raw line once the interpreter knows it."""
        self.raw_line = raw_line
        self.context["raw_line"] = raw_line
        return self


class FormatError(DecodeError):
    """Line lacks the tag/payload delimiter."""

    def __init__(self, raw_line: str, reason: str = "missing '>>' delimiter"):
        super().__init__(
            code=ErrorCode.INVALID_FORMAT,
            message=f"Invalid event format ({reason}): {raw_line!r}",
            raw_line=raw_line,
        )


class ArityError(DecodeError):
    """Payload field count does not match the event's expected count."""

    def __init__(self, tag: str, payload: str, expected: int, actual: int):
        """
        Initialize arity error.

        Args:
            tag: Event tag being decoded
            payload: Raw payload
            expected: Number of fields the event requires
            actual: Number of comma-separated fields found
        """
        self.expected = expected
        self.actual = actual
        super().__init__(
            code=ErrorCode.ARITY_MISMATCH,
            message=(
                f"[{tag}] expected {expected} fields, got {actual}: {payload!r}"
            ),
            tag=tag,
            payload=payload,
            context={"expected": expected, "actual": actual},
        )


class FieldTypeError(DecodeError):
    """A numeric field failed to parse as an unsigned 32-bit integer."""

    def __init__(self, tag: str, payload: str, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(
            code=ErrorCode.INVALID_FIELD,
            message=(
                f"[{tag}] field '{field}' is not an unsigned 32-bit integer: "
                f"{value!r} (payload {payload!r})"
            ),
            tag=tag,
            payload=payload,
            context={"field": field, "value": value},
        )


class ListenerConnectionError(HyprlandEventError, ConnectionError):
    """Transport-level failure on the notification socket.

    Terminal for the connection; never retried by the listener.
    """

    def __init__(self, socket_path: Optional[str], reason: str, code: ErrorCode = ErrorCode.CONNECT_FAILED):
        self.socket_path = socket_path
        self.reason = reason
        if code is ErrorCode.READ_FAILED:
            message = f"Read from {socket_path or 'stream'} failed: {reason}"
        else:
            message = f"Cannot connect to {socket_path}: {reason}"
        super().__init__(
            code=code,
            message=message,
            context={"socket_path": socket_path, "reason": reason}
        )


class ConfigError(HyprlandEventError):
    """Listener configuration cannot be resolved into a socket path."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            code=ErrorCode.MISSING_SIGNATURE,
            message=message,
            context=context
        )
