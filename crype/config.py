"""Server settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class ServerConfig:
    """Listening port and database location for the order server."""

    port: str
    db_path: str

    @property
    def address(self) -> Tuple[str, int]:
        """Host and port to listen on; an empty port picks any free one."""
        if not self.port:
            return ("", 0)
        if not (self.port.isascii() and self.port.isdigit()):
            raise ValueError(f"invalid port {self.port!r}")
        number = int(self.port)
        if number > 65535:
            raise ValueError(f"invalid port {self.port!r}")
        return ("", number)


def load_config(environ: Optional[Mapping[str, str]] = None) -> ServerConfig:
    """Build a configuration from CRYPE_PORT and CRYPE_DB_NAME."""
    env = os.environ if environ is None else environ
    return ServerConfig(
        port=env.get("CRYPE_PORT", ""),
        db_path=env.get("CRYPE_DB_NAME", ""),
    )