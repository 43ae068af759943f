"""
Now Playing CLI - entry point

Runs the web backend and provides small admin utilities.
"""

import argparse
import getpass
import sys
from typing import Optional

from loguru import logger

from nowplaying.core.config import ensure_directories, load_config
from nowplaying.core.console import get_console, safe_print
from nowplaying.core.errors import StorageError

STATUS_STYLES = {
    "playing": "bold green",
    "queued": "white",
    "completed": "dim",
}


def run_serve(host: Optional[str], port: Optional[int], reload: bool) -> int:
    """Start the FastAPI backend with uvicorn.

    Returns:
        Exit code
    """
    import uvicorn

    from nowplaying.core.output import setup_loguru

    config = load_config()
    ensure_directories()
    setup_loguru(config.logging)

    host = host or config.web.host
    port = port or config.web.port
    reload = reload or config.web.auto_reload

    logger.info(f"Starting backend on {host}:{port} (reload={reload})")
    uvicorn.run("web.backend.main:app", host=host, port=port, reload=reload)
    return 0


def run_hash_password(password: Optional[str]) -> int:
    """Print a bcrypt hash for the ADMIN_PASSWORD setting."""
    from nowplaying.domain.auth import hash_password

    if password is None:
        password = getpass.getpass("Admin password: ")
        confirm = getpass.getpass("Confirm password: ")
        if password != confirm:
            print("Passwords do not match", file=sys.stderr)
            return 1

    if not password:
        print("Password must not be empty", file=sys.stderr)
        return 1

    print(hash_password(password))
    return 0


def run_show_queue() -> int:
    """Print the current queue as a table."""
    from rich.table import Table

    from nowplaying.domain.queue import SongStore

    store = SongStore.from_config(load_config())
    try:
        songs = store.list_songs()
    except StorageError as e:
        safe_print(f"Could not read queue: {e}", style="bold red")
        return 1

    if not songs:
        safe_print("No songs in queue", style="dim")
        return 0

    table = Table(title=f"Songs Queue ({store.path})")
    table.add_column("#", justify="right")
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Artist")
    table.add_column("Status")

    for position, song in enumerate(songs, start=1):
        table.add_row(
            str(position),
            song.id,
            song.title,
            song.artist,
            song.status.value,
            style=STATUS_STYLES.get(song.status.value),
        )

    get_console().print(table)
    return 0


def main() -> None:
    """Main entry point for the now-playing command."""
    parser = argparse.ArgumentParser(
        description="Now Playing - live event song queue",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="subcommand", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Run the web backend")
    serve_parser.add_argument("--host", help="Bind address (default from config)")
    serve_parser.add_argument("--port", type=int, help="Port (default from config)")
    serve_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    hash_parser = subparsers.add_parser(
        "hash-password", help="Print a bcrypt hash for ADMIN_PASSWORD"
    )
    hash_parser.add_argument(
        "password", nargs="?", help="Password to hash (prompted when omitted)"
    )

    subparsers.add_parser("queue", help="Show the current song queue")

    args = parser.parse_args()

    if args.subcommand == "serve":
        sys.exit(run_serve(args.host, args.port, args.reload))
    elif args.subcommand == "hash-password":
        sys.exit(run_hash_password(args.password))
    elif args.subcommand == "queue":
        sys.exit(run_show_queue())
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
