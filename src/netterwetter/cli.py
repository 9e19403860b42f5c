"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import http.server
import sys
from pathlib import Path

from netterwetter import __version__
from netterwetter.config import (
    ConfigError,
    Settings,
    get_settings,
    load_settings,
    require_fetch_settings,
)
from netterwetter.flows.build import build_all
from netterwetter.flows.fetch import fetch_all
from netterwetter.server import make_handler
from netterwetter.store import WeatherStore

EXIT_CONFIG_ERROR = 2


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="netterwetter",
        description="Collect Tomorrow.io forecasts and chart them",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Settings JSON file (default: data/settings.json)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("fetch", help="Run one fetch cycle (schedule hourly)")
    subparsers.add_parser("build", help="Build static chart pages")
    subparsers.add_parser("refresh", help="Fetch data and build site")
    subparsers.add_parser("info", help="Show application info")

    serve_parser = subparsers.add_parser("serve", help="Serve the chart page locally")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: api_port from settings)",
    )

    return parser


def _settings(args: argparse.Namespace) -> Settings:
    path = getattr(args, "settings", None)
    return load_settings(path) if path is not None else get_settings()


def cmd_fetch(args: argparse.Namespace) -> int:
    """Handle the 'fetch' command: one fetch cycle for all locations."""
    try:
        settings = _settings(args)
        require_fetch_settings(settings)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if getattr(args, "debug", False):
        print(f"Debug mode enabled. Locations: {settings.locations}")

    result = fetch_all(
        api_key=settings.api_key,
        locations=settings.locations,
        sleep_seconds=settings.sleep_seconds,
        data_dir=str(settings.data_dir),
        timeout=settings.request_timeout,
    )
    print(f"Done. {result['succeeded']}/{result['requests']} requests succeeded.")
    return 0


def cmd_build(args: argparse.Namespace) -> int:
    """Handle the 'build' command: render static chart pages."""
    try:
        settings = _settings(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    result = build_all(data_dir=str(settings.data_dir), site_dir=str(settings.site_dir))
    print(f"Built {result['pages']} page(s): {result['output']}")
    return 0


def cmd_refresh(args: argparse.Namespace) -> int:
    """Handle the 'refresh' command: fetch data then build site."""
    code = cmd_fetch(args)
    if code != 0:
        return code
    return cmd_build(args)


def cmd_info(args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    try:
        settings = _settings(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Data directory: {settings.data_dir}")
    print(f"Locations: {', '.join(settings.locations) or '(none)'}")
    print(f"API key configured: {'yes' if settings.api_key else 'no'}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: render the chart page per request."""
    try:
        settings = _settings(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    port = args.port if args.port is not None else settings.api_port
    handler = make_handler(WeatherStore(settings.data_dir))

    with http.server.HTTPServer(("", port), handler) as server:
        print(f"Serving chart on http://localhost:{port}/ (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "fetch": cmd_fetch,
        "build": cmd_build,
        "refresh": cmd_refresh,
        "serve": cmd_serve,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
