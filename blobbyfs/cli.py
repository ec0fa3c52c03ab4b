"""Command-line interface for the filesystem storage client."""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from blobbyfs.config import DEFAULT_CONFIG_PATH, Config, StorageConfig
from blobbyfs.errors import StorageError
from blobbyfs.models import ListingPage
from blobbyfs.storage import FileSystemStorage
from blobbyfs.utils import format_size, format_timestamp


def get_storage(args) -> FileSystemStorage:
    """Get storage client from --base-path or the configuration file."""
    if args.base_path:
        config = StorageConfig(base_path=args.base_path)
    else:
        config = Config.from_file(args.config).storage
    return FileSystemStorage.from_config(config)


def print_files(files) -> None:
    for entry in files:
        print(
            f"{format_timestamp(entry.last_modified):<20} | "
            f"{format_size(entry.size):>8} | {entry.key}"
        )


def print_page(page: ListingPage) -> None:
    for entry in page.dirs:
        print(f"{'':<20} | {'DIR':>8} | {entry.key}/")
    print_files(page.files)


def cmd_stat(args, storage: FileSystemStorage):
    """Show object metadata."""
    info = storage.stat(args.key)
    print(f"Key:           {args.key}")
    print(f"Size:          {info.size} ({format_size(info.size)})")
    print(f"Last modified: {format_timestamp(info.last_modified)}")


def cmd_get(args, storage: FileSystemStorage):
    """Download an object."""
    headers, data = storage.get(args.key)
    if args.output:
        Path(args.output).write_bytes(data)
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.flush()
    print(f"ETag: {headers.etag}", file=sys.stderr)


def cmd_put(args, storage: FileSystemStorage):
    """Upload a local file."""
    data = Path(args.file).read_bytes()
    last_modified = datetime.fromisoformat(args.mtime) if args.mtime else None
    headers = storage.put(args.key, data, last_modified=last_modified)
    print(f"Stored {args.key} ({format_size(headers.size)})")
    print(f"ETag: {headers.etag}")


def cmd_rm(args, storage: FileSystemStorage):
    """Delete an object."""
    storage.delete(args.key)
    print(f"Deleted {args.key}")


def cmd_rmdir(args, storage: FileSystemStorage):
    """Delete a directory tree."""
    if not args.yes:
        response = input(
            f"\nDelete directory '{args.key}' and everything below it?\n"
            f"This cannot be undone. Continue? [y/N]: "
        )
        if response.lower() not in ("y", "yes"):
            print("Cancelled")
            return

    storage.delete_subtree(args.key)
    print(f"Deleted directory {args.key}")


def cmd_ls(args, storage: FileSystemStorage):
    """List a directory, shallow or deep."""
    if not args.deep:
        print_page(storage.list(args.key))
        return

    if args.all:
        total = 0
        for entry in storage.walk(args.key):
            print_files([entry])
            total += 1
        print(f"\nTotal files: {total}")
        return

    page = storage.list(args.key, last_key=args.cursor, deep_query=True)
    print_files(page.files)
    if page.next_cursor is not None:
        print(f"\nNext cursor: {page.next_cursor}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Store, fetch and list objects in a directory-backed key space"
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG_PATH, help="Configuration file (TOML)"
    )
    parser.add_argument("--base-path", help="Storage root (overrides the configuration file)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    stat_parser = subparsers.add_parser("stat", help="Show object metadata")
    stat_parser.add_argument("key", help="Object key")

    get_parser = subparsers.add_parser("get", help="Download an object")
    get_parser.add_argument("key", help="Object key")
    get_parser.add_argument("--output", "-o", help="Write to this file instead of stdout")

    put_parser = subparsers.add_parser("put", help="Upload a file")
    put_parser.add_argument("key", help="Object key")
    put_parser.add_argument("file", help="Local file to upload")
    put_parser.add_argument("--mtime", help="Force last-modified time (ISO 8601)")

    rm_parser = subparsers.add_parser("rm", help="Delete an object")
    rm_parser.add_argument("key", help="Object key")

    rmdir_parser = subparsers.add_parser("rmdir", help="Delete a directory tree")
    rmdir_parser.add_argument("key", help="Directory key")
    rmdir_parser.add_argument(
        "--yes", "-y", action="store_true", help="Delete without confirmation"
    )

    ls_parser = subparsers.add_parser("ls", help="List a directory")
    ls_parser.add_argument("key", nargs="?", default="", help="Directory key (default: root)")
    ls_parser.add_argument("--deep", "-d", action="store_true", help="List the whole subtree")
    ls_parser.add_argument("--cursor", "-c", help="Cursor returned by a previous deep listing")
    ls_parser.add_argument(
        "--all", "-a", action="store_true", help="Follow cursors until the listing is complete"
    )

    return parser


COMMANDS = {
    "stat": cmd_stat,
    "get": cmd_get,
    "put": cmd_put,
    "rm": cmd_rm,
    "rmdir": cmd_rmdir,
    "ls": cmd_ls,
}


def main(argv=None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Default to listing the root if no command specified
    if not args.command:
        args.command = "ls"
        args.key = ""
        args.deep = False
        args.cursor = None
        args.all = False

    try:
        storage = get_storage(args)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        COMMANDS[args.command](args, storage)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
    except (StorageError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
