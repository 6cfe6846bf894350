"""Event catalog: tag -> descriptor registry and payload decoders.

Descriptors are derived once, at import time, from the field order and
annotations of the models in events.py. Supporting a new protocol event is
a matter of adding a model to EVENT_TYPES.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type

from .errors import ArityError, FieldTypeError
from .events import EVENT_TYPES, UINT32_MAX, HyprlandEvent

logger = logging.getLogger(__name__)


class FieldKind(str, Enum):
    """Wire type of a single payload field."""
    TEXT = "text"
    UINT = "uint"
    FLAG = "bool"


def parse_uint32(value: str) -> int:
    """Parse an unsigned 32-bit integer.

    Only ASCII digits are accepted: no sign, no whitespace, no underscores.

    Raises:
        ValueError: If the text is not a valid uint32
    """
    if not value or not (value.isascii() and value.isdigit()):
        raise ValueError(f"not an unsigned integer: {value!r}")
    number = int(value)
    if number > UINT32_MAX:
        raise ValueError(f"out of range for uint32: {value!r}")
    return number


def parse_flag(value: str) -> bool:
    """Truthy-1 boolean: only the literal "1" is true."""
    return value == "1"


def _field_kind(annotation: Any) -> FieldKind:
    # bool is checked before int; bool is a subclass of int
    if annotation is bool:
        return FieldKind.FLAG
    if annotation is int:
        return FieldKind.UINT
    if annotation is str:
        return FieldKind.TEXT
    raise TypeError(f"Unsupported event field type: {annotation!r}")


@dataclass(frozen=True)
class EventDescriptor:
    """Wire schema for one event tag."""

    tag: str
    event_type: Type[HyprlandEvent]
    fields: Tuple[Tuple[str, FieldKind], ...]

    @property
    def arity(self) -> int:
        return len(self.fields)

    @classmethod
    def from_model(cls, event_type: Type[HyprlandEvent]) -> "EventDescriptor":
        """Build a descriptor from a model's declared fields, in order."""
        if not event_type.TAG:
            raise ValueError(f"{event_type.__name__} has no wire tag")
        fields = tuple(
            (name, _field_kind(info.annotation))
            for name, info in event_type.model_fields.items()
        )
        return cls(tag=event_type.TAG, event_type=event_type, fields=fields)

    def split(self, payload: str) -> List[str]:
        """Split a payload into exactly `arity` raw field values.

        Zero-field events ignore the payload. One-field events take the
        payload verbatim, commas included.

        Raises:
            ArityError: If a multi-field payload has the wrong part count
        """
        if self.arity == 0:
            return []
        if self.arity == 1:
            return [payload]

        parts = payload.split(",")
        if len(parts) != self.arity:
            raise ArityError(self.tag, payload, expected=self.arity, actual=len(parts))
        return parts

    def decode(self, payload: str) -> HyprlandEvent:
        """Decode a payload into this descriptor's event model.

        Raises:
            ArityError: Wrong number of comma-separated fields
            FieldTypeError: An unsigned-int field is not a valid uint32
        """
        values: Dict[str, Any] = {}
        for (name, kind), raw in zip(self.fields, self.split(payload)):
            if kind is FieldKind.UINT:
                try:
                    values[name] = parse_uint32(raw)
                except ValueError:
                    raise FieldTypeError(self.tag, payload, field=name, value=raw) from None
            elif kind is FieldKind.FLAG:
                values[name] = parse_flag(raw)
            else:
                values[name] = raw

        return self.event_type(**values)

    def format(self) -> str:
        """Wire signature, e.g. 'workspacev2>>ID,NAME'."""
        return f"{self.tag}>>" + ",".join(name.upper() for name, _ in self.fields)


class EventCatalog:
    """Registry of all known event tags.

    Holds no mutable state after construction; safe to share.
    """

    def __init__(self, event_types: Iterable[Type[HyprlandEvent]] = EVENT_TYPES) -> None:
        self._descriptors: Dict[str, EventDescriptor] = {}
        for event_type in event_types:
            descriptor = EventDescriptor.from_model(event_type)
            if descriptor.tag in self._descriptors:
                raise ValueError(f"Duplicate event tag: {descriptor.tag}")
            self._descriptors[descriptor.tag] = descriptor
        logger.debug(f"Event catalog built with {len(self._descriptors)} tags")

    def __contains__(self, tag: object) -> bool:
        return tag in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self):
        return iter(self._descriptors.values())

    def lookup(self, tag: str) -> Optional[EventDescriptor]:
        """Exact, case-sensitive tag lookup."""
        return self._descriptors.get(tag)

    def tags(self) -> List[str]:
        """Known tags in registration order."""
        return list(self._descriptors)

    def decode(self, tag: str, payload: str) -> HyprlandEvent:
        """Decode a payload for a known tag.

        Raises:
            KeyError: If the tag is not in the catalog
            ArityError, FieldTypeError: If the payload is malformed
        """
        descriptor = self._descriptors.get(tag)
        if descriptor is None:
            raise KeyError(tag)
        return descriptor.decode(payload)


DEFAULT_CATALOG = EventCatalog()
