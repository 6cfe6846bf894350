"""Line interpreter: raw notification line -> typed event."""

import logging
from typing import Optional, Tuple

from .catalog import DEFAULT_CATALOG, EventCatalog
from .errors import DecodeError, ErrorCode, FormatError
from .events import HyprlandEvent, UnknownEvent

logger = logging.getLogger(__name__)

DELIMITER = ">>"


def split_line(raw_line: str) -> Tuple[str, str]:
    """Split a line into (tag, payload) on the first '>>'.

    Raises:
        FormatError: If the delimiter is absent
    """
    tag, sep, payload = raw_line.partition(DELIMITER)
    if not sep:
        raise FormatError(raw_line)
    return tag, payload


class Interpreter:
    """Routes raw lines to the event catalog.

    Stateless apart from the (immutable) catalog; one instance can serve any
    number of listeners.
    """

    def __init__(self, catalog: Optional[EventCatalog] = None) -> None:
        self.catalog = catalog or DEFAULT_CATALOG

    def interpret(self, raw_line: str) -> HyprlandEvent:
        """Decode one line.

        Unknown tags are not errors: a warning is logged and an UnknownEvent
        carrying the tag and payload is returned.

        Raises:
            FormatError: No '>>' delimiter
            ArityError, FieldTypeError: Malformed payload for a known tag
        """
        tag, payload = split_line(raw_line)

        descriptor = self.catalog.lookup(tag)
        if descriptor is None:
            logger.warning(
                f"Unhandled event type '{tag}' (payload={payload!r})",
                extra={"code": ErrorCode.UNKNOWN_TAG.name, "tag": tag, "payload": payload},
            )
            return UnknownEvent(tag=tag, payload=payload)

        try:
            return descriptor.decode(payload)
        except DecodeError as e:
            raise e.with_raw_line(raw_line)


_default_interpreter = Interpreter()


def interpret(raw_line: str) -> HyprlandEvent:
    """Decode one line with the default catalog."""
    return _default_interpreter.interpret(raw_line)
