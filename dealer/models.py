from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .history import DEFAULT_HISTORY_LIMIT

DEFAULT_ADDRESS = "0.0.0.0:3000"


def parse_address(address: str) -> Tuple[str, int]:
    host, sep, port = address.rpartition(":")
    if not sep or not host:
        raise ValueError(f"Invalid address {address!r}, expected host:port")
    try:
        return host, int(port)
    except ValueError:
        raise ValueError(f"Invalid port in address {address!r}") from None


@dataclass
class DealerConfig:
    host: str = "0.0.0.0"
    port: int = 3000
    history_page_size: int = 10
    history_limit: int = DEFAULT_HISTORY_LIMIT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DealerConfig":
        env = os.environ if environ is None else environ
        host, port = parse_address(env.get("ADDRESS", DEFAULT_ADDRESS))
        return cls(host=host, port=port)
