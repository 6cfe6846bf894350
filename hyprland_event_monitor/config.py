"""Listener configuration and notification socket path resolution.

The listener never reads the environment itself; callers build a
ListenerConfig (explicitly or via from_environment) and hand the resolved
path to the listener.
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)

SIGNATURE_ENV = "HYPRLAND_INSTANCE_SIGNATURE"
RUNTIME_DIR_ENV = "XDG_RUNTIME_DIR"

EVENT_SOCKET_NAME = ".socket2.sock"
LEGACY_SOCKET_ROOT = Path("/tmp/hypr")


class ListenerConfig(BaseModel):
    """Where to find the compositor's notification socket."""

    instance_signature: Optional[str] = Field(
        None, description="Compositor instance identifier (HYPRLAND_INSTANCE_SIGNATURE)"
    )
    runtime_dir: Optional[Path] = Field(
        None, description="XDG runtime directory; sockets live under <runtime_dir>/hypr/<signature>"
    )
    socket_path: Optional[Path] = Field(
        None, description="Explicit socket path, overrides signature-based resolution"
    )

    @field_validator("instance_signature")
    @classmethod
    def validate_signature(cls, v: Optional[str]) -> Optional[str]:
        """Reject signatures that would escape the socket directory."""
        if v is None:
            return v
        v = v.strip()
        if not v:
            return None
        if "/" in v or v in (".", ".."):
            raise ValueError(f"Invalid instance signature: {v!r}")
        return v

    @classmethod
    def from_environment(cls, env: Optional[Mapping[str, str]] = None, **overrides) -> "ListenerConfig":
        """Build a config from HYPRLAND_INSTANCE_SIGNATURE and XDG_RUNTIME_DIR.

        Args:
            env: Environment mapping (defaults to os.environ)
            **overrides: Explicit values that take precedence when not None
        """
        if env is None:
            env = os.environ

        values = {
            "instance_signature": env.get(SIGNATURE_ENV),
            "runtime_dir": env.get(RUNTIME_DIR_ENV) or None,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def resolve_socket_path(self) -> Path:
        """Resolve the notification socket path.

        Order: explicit socket_path, then <runtime_dir>/hypr/<sig>/.socket2.sock,
        then the legacy /tmp/hypr/<sig>/.socket2.sock.

        Raises:
            ConfigError: If no explicit path is set and the signature is missing
        """
        if self.socket_path is not None:
            return self.socket_path

        if not self.instance_signature:
            raise ConfigError(
                f"{SIGNATURE_ENV} is not set; is Hyprland running?",
                context={"runtime_dir": str(self.runtime_dir) if self.runtime_dir else None},
            )

        if self.runtime_dir is not None:
            path = self.runtime_dir / "hypr" / self.instance_signature / EVENT_SOCKET_NAME
        else:
            path = LEGACY_SOCKET_ROOT / self.instance_signature / EVENT_SOCKET_NAME

        logger.debug(f"Resolved event socket path: {path}")
        return path
