"""Delver CLI entry point.

Generates a dungeon and writes it as SVG, JSON or plain text, or runs the
HTTP rendering server. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import os
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from delver import __version__

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    _COLOR_ENABLED = sys.stdout.isatty()
except (AttributeError, ValueError):  # pragma: no cover - environment dependent
    _COLOR_ENABLED = False


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Delver dungeon generator

    Generate a room-and-maze dungeon layout and render it to a file, or run
    the HTTP server that renders layouts on demand. If no subcommand is given,
    `generate` is assumed.
    """

    epilog = dedent(
        """
        Restrictions:
          Width must be at least 13
          Height must be at least 13
          Cell size must be at least 24 pixels
          Rooms must be one of dense, default, sparse

        Environment variables:
          HOST                 Bind address for the web server (default: 127.0.0.1)
          PORT                 Port for the web server (default: 5000)
          DELVER_LOG_LEVEL     Structured log threshold: debug, info, warn, error
          DELVER_LOG_JSON      Emit structured logs as JSON lines when set to 1

        Examples:
          # Default 41x21 dungeon with a random seed
          python run.py generate

          # Reproducible dense dungeon written as JSON
          python run.py generate --seed 42 --rooms dense --filename dungeon.json

          # Serve layouts over HTTP
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="delver",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Delver {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a dungeon and write it to a file",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="Random seed for dungeon generation")
    gen_parser.add_argument("--width", type=int, default=41, help="Width of the dungeon (default: 41)")
    gen_parser.add_argument("--height", type=int, default=21, help="Height of the dungeon (default: 21)")
    gen_parser.add_argument("--cellsize", type=int, default=32, help="Size of each cell in pixels (default: 32)")
    gen_parser.add_argument("--rooms", default="default", help="Rough room frequency: sparse, default or dense")
    gen_parser.add_argument("--filename", default="dungeon.svg", help="Output filename (default: dungeon.svg)")
    gen_parser.add_argument(
        "--format",
        dest="fmt",
        default=None,
        help="Output format: svg, json, ascii or obj (default: from the filename extension)",
    )
    gen_parser.add_argument("--verbose", action="store_true", help="Emit structured info logs to stderr")
    gen_parser.set_defaults(command="generate")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP rendering server",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 127.0.0.1)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    if len(argv) == 0 or argv[0].startswith("--") and argv[0] not in ("--help", "-h", "--version", "--env-file"):
        argv = ["generate"] + list(argv)

    return parser.parse_args(argv)


def _label(text: str) -> str:
    return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


def _value(val) -> str:
    return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)


def display_settings(config, filename: str) -> str:
    """Return the configuration banner printed before generation."""
    lines = [
        "",
        "Configuration:",
        f"  {_label('Seed      :')} {_value(config.seed)}",
        f"  {_label('Width     :')} {_value(config.width)}",
        f"  {_label('Height    :')} {_value(config.height)}",
        f"  {_label('Cell Size :')} {_value(config.cell_size)}",
        f"  {_label('Filename  :')} {_value(filename)}",
        f"  {_label('Rooms     :')} {_value(config.rooms)}",
        "",
    ]
    return "\n".join(lines)


def run_generate(args) -> int:
    from delver.dungeon import ConfigError, Dungeon, DungeonConfig
    from delver.logging_utils import set_level
    from delver.render import write_output

    if args.verbose:
        set_level("info")
    try:
        config = DungeonConfig.from_options(
            seed=args.seed,
            width=args.width,
            height=args.height,
            rooms=args.rooms,
            cell_size=args.cellsize,
        )
    except ConfigError as exc:
        print(f"\nError: {exc}\n")
        return 1
    if (config.width, config.height) != (args.width, args.height):
        print("  Width and height are forced to be odd")
    print(display_settings(config, args.filename))

    dungeon = Dungeon(config)
    try:
        fmt = write_output(dungeon, args.filename, args.fmt, config.cell_size)
    except (OSError, ValueError) as exc:
        print(f"\nError: {exc}\n")
        return 1

    title = f"{Fore.CYAN}{Style.BRIGHT}DUNGEON!{Style.RESET_ALL}" if _COLOR_ENABLED else "DUNGEON!"
    print(f"{title} {len(dungeon.rooms)} rooms written to {args.filename} ({fmt})")
    if dungeon.metrics.get("connector_exhausted"):
        print(f"  Warning: {dungeon.metrics['open_regions']} regions could not be connected")
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if args.command is None:
        # e.g. only --env-file was given
        args = parse_args(list(argv) + ["generate"])
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    if args.command == "server":
        # Import server entrypoint only after environment is ready
        from delver.server import start_server

        host = args.host or os.getenv("HOST", "127.0.0.1")
        port = int(args.port or os.getenv("PORT", "5000"))
        start_server(host=host, port=port, debug=args.debug)
        return 0
    return run_generate(args)


def cli() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    cli()
