"""Main entry point for the MCP demo servers.

Starts one of the tools, resources or prompts servers over stdio. Each
server is its own process; the demo client spawns them one at a time.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from logging_config import get_logger, setup_logging
from mcp_server import SERVERS

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="MCP capability demo servers (stdio)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py tools                 # Calculator and weather tools
  python main.py resources             # User, product and config resources
  python main.py prompts --debug       # Prompt templates with debug logging
  python main.py tools --syslog        # Log to syslog instead of stderr
        """,
    )

    parser.add_argument(
        "capability",
        choices=sorted(SERVERS),
        help="Which demo server to run",
    )

    parser.add_argument(
        "--syslog", action="store_true", help="Log to syslog (default: stderr)"
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )

    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None) -> None:
    """Run the selected demo server until its client disconnects."""
    args = parse_args(argv)

    setup_logging(
        use_syslog=args.syslog,
        log_level=logging.DEBUG if args.debug else logging.INFO,
    )

    server = SERVERS[args.capability]()
    await server.run()


def cli() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.error(f"服务器错误: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
