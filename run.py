"""Delve CLI entry point.

Provides subcommands for generating a dungeon layout in the terminal and for
running the HTTP generation API. Accepts configuration via flags and
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from pathlib import Path
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def _load_version() -> str:
    try:
        return (Path(__file__).resolve().parent / "VERSION").read_text(encoding="utf-8").strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Delve dungeon layout generator

    Generate a rooms-and-corridors dungeon layout in the terminal, or run the
    HTTP API that serves layouts as JSON. Configuration can be provided via CLI
    flags or environment variables. If both are present, CLI flags take
    precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                        Bind address for the web server (default: 0.0.0.0)
          PORT                        Port for the web server (default: 5000)
          DUNGEON_WIDTH               Default grid width (default: 40)
          DUNGEON_HEIGHT              Default grid height (default: 30)
          DUNGEON_MIN_ROOM_WIDTH      Default minimum room width (default: 2)
          DUNGEON_MIN_ROOM_HEIGHT     Default minimum room height (default: 2)
          DUNGEON_BIG_ROOM_RATE       Default big room rate in percent (default: 20)
          DUNGEON_MAX_WALL_THICKNESS  Default max wall margin inside an area (default: 2)

        Examples:
          # Print a random 40x30 dungeon
          python run.py generate

          # Reproduce a dungeon by seed, as JSON
          python run.py generate --seed 1234 --json

          # Run the HTTP API on a custom port
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="Delve",
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
        version=f"Delve {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a dungeon and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate one dungeon layout and print it as ASCII ('#' wall, '.' floor) or JSON",
    )
    gen_parser.add_argument("--width", type=int, default=None, help="Grid width (4-100)")
    gen_parser.add_argument("--height", type=int, default=None, help="Grid height (4-100)")
    gen_parser.add_argument("--min-width", dest="min_width", type=int, default=None, help="Minimum room width (2-10)")
    gen_parser.add_argument(
        "--min-height", dest="min_height", type=int, default=None, help="Minimum room height (2-10)"
    )
    gen_parser.add_argument(
        "--big-room-rate",
        dest="big_room_rate",
        type=int,
        default=None,
        help="Percent chance an area that could split stays whole (0-100)",
    )
    gen_parser.add_argument(
        "--max-wall",
        dest="max_wall_thickness_in_area",
        type=int,
        default=None,
        help="Maximum wall margin between an area and its room (1-10)",
    )
    gen_parser.add_argument("--seed", default=None, help="Seed (integer or any string)")
    gen_parser.add_argument("--json", action="store_true", help="Print the layout as JSON")
    gen_parser.set_defaults(command="generate")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP generation API",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask generation API server",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # If no subcommand provided, default to generate
    if len(argv) == 0:
        argv = ["generate"]

    args = parser.parse_args(argv)
    return args


def _run_generate(args: argparse.Namespace) -> int:
    from delve.dungeon import ConfigurationError, DungeonConfig, DungeonGenerator, coerce_seed, default_config_from_env
    from delve.dungeon.tiles import render_ascii, to_rows

    params = {
        name: getattr(args, name, None)
        for name in ("width", "height", "min_width", "min_height", "big_room_rate", "max_wall_thickness_in_area")
    }
    try:
        params["seed"] = coerce_seed(getattr(args, "seed", None))
        config = DungeonConfig.from_mapping(params, default_config_from_env()).validate()
        layout = DungeonGenerator(config).run()
    except ConfigurationError as e:
        print(f"[ERROR] {e.field}: {e.message}", file=sys.stderr)
        return 2

    if getattr(args, "json", False):
        payload = {
            "seed": layout.seed,
            "config": config.to_dict(),
            "grid": to_rows(layout.grid),
            "rooms": [area.room.to_dict() for area in layout.areas],
            "passages": [[p.a, p.b] for p in layout.passages],
        }
        print(json.dumps(payload))
        return 0
    print(render_ascii(layout.grid))
    print(f"seed={layout.seed} areas={len(layout.areas)} passages={len(layout.passages)}")
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    # Load .env if requested, otherwise a default .env if present
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    mode = (getattr(args, "command", None) or "generate").lower()
    if mode == "generate":
        return _run_generate(args)

    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from delve.logging_utils import log
    from delve.server import start_server

    title = f"{Fore.CYAN}{Style.BRIGHT}Delve API Bootup{Style.RESET_ALL}" if _COLOR_ENABLED else "Delve API Bootup"

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
