from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Optional, Sequence

from .models import DealerConfig
from .server import DealerServer


def parse_config(argv: Optional[Sequence[str]] = None) -> tuple[DealerConfig, str]:
    # Defaults come from ADDRESS=host:port; flags win over the environment.
    defaults = DealerConfig.from_env()
    parser = argparse.ArgumentParser(description="Poker hand dealer server")
    parser.add_argument("--host", default=defaults.host)
    parser.add_argument("--port", type=int, default=defaults.port)
    parser.add_argument(
        "--history-page-size",
        type=int,
        default=defaults.history_page_size,
        help="Number of access history items per page",
    )
    parser.add_argument(
        "--history-limit",
        type=int,
        default=defaults.history_limit,
        help="Most recently accessed deck pages kept in the access history",
    )
    parser.add_argument("--log-level", default="INFO", help="Python logging level name")
    args = parser.parse_args(argv)

    config = DealerConfig(
        host=args.host,
        port=args.port,
        history_page_size=args.history_page_size,
        history_limit=args.history_limit,
    )
    return config, args.log_level.upper()


def main() -> None:
    config, log_level = parse_config()
    logging.basicConfig(level=log_level)
    server = DealerServer(config)
    asyncio.run(server.start())


if __name__ == "__main__":
    main()
