"""
kmusic CLI - scan the library or run the web backend.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from kmusic.core.config import load_config
from kmusic.core.output import setup_from_config, setup_loguru

# Project root detection (where pyproject.toml exists)
PROJECT_ROOT = Path(__file__).parent.parent.parent

console = Console()


def run_scan(root: Optional[str] = None) -> int:
    """Scan the library and print statistics.

    Returns:
        Exit code (0 for success, 1 if the library root is missing)
    """
    from kmusic.domain.library import get_library_stats, load_overrides, scan_library

    config = load_config()
    if root:
        config.music.library_path = str(Path(root).expanduser())

    library_root = Path(config.music.library_path)
    if not library_root.is_dir():
        console.print(f"Library path does not exist: {library_root}", style="bold red")
        return 1

    overrides = load_overrides(config.music.metadata_path())
    tracks = scan_library(library_root, overrides, config.music.supported_formats)
    stats = get_library_stats(tracks)

    table = Table(title=f"Library: {library_root}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Tracks", str(stats["total_tracks"]))
    table.add_row("Artists", str(stats["artists"]))
    table.add_row("Albums", str(stats["albums"]))
    table.add_row("Total size", stats["total_size_str"])
    table.add_row("Total duration", stats["total_duration_str"])
    table.add_row("Metadata overrides", str(len(overrides)))
    for fmt, count in sorted(stats["formats"].items()):
        table.add_row(f"  .{fmt}", str(count))

    console.print(table)
    return 0


def run_serve(host: Optional[str] = None, port: Optional[int] = None) -> int:
    """Run the FastAPI backend under uvicorn."""
    import uvicorn

    config = load_config()
    uvicorn.run(
        "web.backend.main:app",
        host=host or config.web.host,
        port=port or config.web.port,
        app_dir=str(PROJECT_ROOT),
        log_level=config.logging.level.lower(),
    )
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="kmusic",
        description="Personal music library streaming backend",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser("scan", help="Scan the library and show stats")
    scan_parser.add_argument("--root", help="Library root (overrides config)")

    serve_parser = subparsers.add_parser("serve", help="Run the web backend")
    serve_parser.add_argument("--host", help="Bind address")
    serve_parser.add_argument("--port", type=int, help="Bind port")

    args = parser.parse_args(argv)

    if args.debug:
        setup_loguru(level="DEBUG", console_output=True)
    else:
        setup_from_config(load_config().logging)

    if args.command == "scan":
        return run_scan(args.root)
    if args.command == "serve":
        return run_serve(args.host, args.port)
    return 1


if __name__ == "__main__":
    sys.exit(main())
