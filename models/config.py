from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6600
DEFAULT_TIMEOUT = 10


@dataclass
class ServerConfig:
    """Connection settings for the playback server.

    Attributes:
        host: Hostname or socket path of the MPD server
        port: TCP port of the MPD server
        timeout: Socket timeout in seconds for every request
        password: Optional password sent after connecting
    """
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    timeout: int = DEFAULT_TIMEOUT
    password: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerConfig:
        """Read settings from ``TAPEDECK_*`` variables, falling back to ``MPD_*``."""
        env = os.environ if environ is None else environ

        host = env.get("TAPEDECK_HOST") or env.get("MPD_HOST") or DEFAULT_HOST
        port = _read_int(env, ("TAPEDECK_PORT", "MPD_PORT"), DEFAULT_PORT)
        timeout = _read_int(env, ("TAPEDECK_TIMEOUT",), DEFAULT_TIMEOUT)
        password = env.get("TAPEDECK_PASSWORD") or None

        return cls(host=host, port=port, timeout=timeout, password=password)


def _read_int(env: Mapping[str, str], names: tuple[str, ...], default: int) -> int:
    for name in names:
        raw = env.get(name)
        if not raw:
            continue
        try:
            value = int(raw)
        except ValueError:
            logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
            return default
        if value <= 0:
            logger.warning(f"Ignoring non-positive {name}={value}, using {default}")
            return default
        return value
    return default
