"""Command-line launcher for the page server."""

from __future__ import annotations

import argparse
import logging
import signal
import time
from dataclasses import replace
from typing import Optional, Sequence

from app_config import AppConfigurationError, load_app_config

from . import __version__
from .config import ServerConfig, ServerConfigurationError
from .service import PageServer

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lime",
        description="Serve a folder of HTML pages and static assets locally.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help="path to the configuration file (default: lime.toml)",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    serve_parser = commands.add_parser("serve", help="start an HTML server")
    serve_parser.add_argument("--host", "-H", default=None, help="host to listen on")
    serve_parser.add_argument("--port", "-p", type=int, default=None, help="port to listen on")
    serve_parser.add_argument(
        "--log-level",
        "-l",
        default="INFO",
        type=str.upper,
        choices=LOG_LEVELS,
        help="logging verbosity",
    )
    return parser


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # The transport logs every non-upgrade response as a rejected handshake.
    if level != "DEBUG":
        logging.getLogger("websockets").setLevel(logging.WARNING)
    return logging.getLogger("lime.cli")


def load_server_config(args: argparse.Namespace) -> tuple[ServerConfig, bool]:
    app_config = load_app_config(args.config)
    settings = app_config.server
    if args.host is not None:
        settings = replace(settings, host=args.host)
    if args.port is not None:
        settings = replace(settings, port=args.port)
    return ServerConfig.from_settings(settings), app_config.is_default


def print_banner(url: str, *, is_default: bool) -> None:
    print(f"\n Lime Web Server v{__version__}")
    if is_default:
        print(
            "  In order to configure Lime, create 'lime.toml' file "
            "in the current directory."
        )
    print(f"    Available on: {url}\n")


def run_serve(args: argparse.Namespace) -> int:
    logger = setup_logging(args.log_level)

    try:
        config, is_default = load_server_config(args)
    except (AppConfigurationError, ServerConfigurationError) as error:
        logger.error("Configuration error: %s", error)
        return 1

    for name, directory in (("pages", config.pages_dir), ("static", config.static_dir)):
        if not directory.is_dir():
            logger.warning("The %s directory does not exist: %s", name, directory)

    server = PageServer(config=config, logger=logging.getLogger("lime.server"))
    try:
        server.start()
    except RuntimeError as error:
        logger.error("%s", error)
        return 1

    print_banner(
        f"http://{config.host}:{server.bound_port or config.port}",
        is_default=is_default,
    )

    try:
        logger.info("Press Ctrl+C to stop.")

        shutdown = False

        def handle_signal(signum, frame) -> None:
            del frame
            nonlocal shutdown
            logger.info("Signal %s received, stopping.", signal.Signals(signum).name)
            shutdown = True

        signal.signal(signal.SIGINT, handle_signal)
        signal.signal(signal.SIGTERM, handle_signal)

        while not shutdown:
            time.sleep(0.2)

    except KeyboardInterrupt:
        logger.info("Stopping by user request.")
    finally:
        server.stop()

    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments and dispatch to the selected command."""
    args = build_parser().parse_args(argv)
    if args.command == "serve":
        return run_serve(args)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
