"""
Command line entry point for the Clave catalog API.

    python -m clave --port 9000
    clave --source-url http://localhost:8787 -v

Host, port and data source default to the values in settings.toml (and the
CLAVE_* environment variables); flags given here win over both.
"""

import argparse
import asyncio
import dataclasses
import logging
import sys

from clave import __version__
from clave.config import get_settings
from clave.server import ClaveServer


def setup_logging(verbose: bool = False) -> None:
    """Log to stderr; DEBUG shows slug tiers, field decoding and cover URLs."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # httpx logs every upstream request at INFO
    for name in ("asyncio", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="clave",
        description="Serve the American Clave catalog (albums, players, editorial groups) as JSON",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log slug resolution and field decoding at DEBUG",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=None,
        help="API port (default: [web] port in settings.toml)",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Bind address (default: [web] host in settings.toml)",
    )
    parser.add_argument(
        "--source-url",
        default=None,
        help="Catalog worker base URL (overrides CLAVE_DATA_SOURCE_URL)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args(argv)


async def run_server(host: str | None, port: int | None, source_url: str | None = None) -> None:
    settings = get_settings()
    if source_url:
        settings = dataclasses.replace(settings, data_source_url=source_url.rstrip("/"))

    server = ClaveServer(host=host, port=port, settings=settings)
    await server.run()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    logger = logging.getLogger(__name__)
    logger.info("Clave %s starting", __version__)

    try:
        asyncio.run(run_server(host=args.host, port=args.port, source_url=args.source_url))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except Exception as e:
        logger.exception("Clave crashed: %s", e)
        return 1

    logger.info("Clave stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
