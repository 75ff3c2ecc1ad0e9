"""
padclip CLI — entry point for all operations.

Usage:
    padclip serve                     # Start the API server
    padclip migrate                   # Create PostgreSQL tables
    padclip status                    # Show configuration and store status
    padclip put ID CONTENT [--key K]  # Store an entry
    padclip get ID                    # Fetch an entry's public view
    padclip reveal ID --key K         # Decode a protected entry
    padclip version                   # Show version
"""

from __future__ import annotations

import argparse
import json
import logging

from padclip.errors import ClipboardError

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="padclip",
        description="padclip — a shared-secret clipboard with one-time-pad protected entries.",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")

    subparsers = parser.add_subparsers(dest="command")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: PADCLIP_HOST)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: PADCLIP_PORT)")

    # migrate
    migrate_parser = subparsers.add_parser("migrate", help="Run PostgreSQL migrations")
    migrate_group = migrate_parser.add_mutually_exclusive_group()
    migrate_group.add_argument("--dry-run", action="store_true", help="List pending without executing")
    migrate_group.add_argument("--check", action="store_true", help="Check if required tables exist")
    migrate_group.add_argument("--status", action="store_true", help="Show applied vs pending")

    # status
    subparsers.add_parser("status", help="Show configuration and store status")

    # put / get / reveal
    put_parser = subparsers.add_parser("put", help="Store an entry")
    put_parser.add_argument("id")
    put_parser.add_argument("content")
    put_parser.add_argument("--key", default=None, help="Protect with this key (same length as content)")

    get_parser = subparsers.add_parser("get", help="Fetch an entry (no protected content)")
    get_parser.add_argument("id")

    reveal_parser = subparsers.add_parser("reveal", help="Decode a protected entry")
    reveal_parser.add_argument("id")
    reveal_parser.add_argument("--key", required=True)

    # version
    subparsers.add_parser("version", help="Show version")

    args = parser.parse_args(argv)

    if args.version or args.command == "version":
        from padclip import __version__

        print(f"padclip {__version__}")
        return 0

    if args.command == "serve":
        return _cmd_serve(args)
    elif args.command == "migrate":
        return _cmd_migrate(args)
    elif args.command == "status":
        return _cmd_status()
    elif args.command in ("put", "get", "reveal"):
        return _cmd_entry(args)
    else:
        parser.print_help()
        return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn is required. Install with: pip install padclip")
        return 1

    from padclip.config import get_config

    cfg = get_config()
    logging.basicConfig(level=cfg.log_level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    host = args.host or cfg.host
    port = args.port or cfg.port
    print(f"Starting padclip API on {host}:{port} (store={cfg.store}, codec={cfg.codec})...")
    uvicorn.run("padclip.api.app:app", host=host, port=port)
    return 0


def _cmd_migrate(args: argparse.Namespace) -> int:
    from padclip.db import migrate

    try:
        if args.check:
            missing = migrate.missing_tables()
            if missing:
                print(f"Missing tables ({len(missing)}/{len(migrate.REQUIRED_TABLES)}):")
                for t in missing:
                    print(f"  - {t}")
                print("\nRun 'padclip migrate' to create them.")
                return 1
            print(f"All {len(migrate.REQUIRED_TABLES)} required tables present.")
            return 0

        if args.status:
            migrate.print_status(migrate.status())
            return 0

        migrate.apply(dry_run=args.dry_run)
        return 0
    except Exception as e:
        print(f"Error: Migration failed: {e}")
        print("Check PADCLIP_DB_* environment variables and ensure PostgreSQL is running.")
        return 1


def _cmd_status() -> int:
    from padclip import __version__
    from padclip.config import get_config
    from padclip.store import get_store

    cfg = get_config()
    print(f"padclip v{__version__}")
    print()
    print(f"  Codec:      {cfg.codec}")
    print(f"  Store:      {cfg.store}")
    if cfg.store == "sqlite":
        print(f"              {cfg.sqlite_path}")
    elif cfg.store == "postgres":
        print(f"              {cfg.db.host}:{cfg.db.port}/{cfg.db.name}")
    try:
        health = get_store(cfg).check_health()
        print(f"              {health['status']} — {health['entries']} entries")
    except Exception as e:
        print(f"              UNREACHABLE — {e}")
    print(f"  API:        {cfg.api_url}")
    static = "present" if cfg.static_dir.is_dir() else "not found"
    print(f"  Static:     {cfg.static_dir} ({static})")
    return 0


def _cmd_entry(args: argparse.Namespace) -> int:
    from padclip.service import get_service

    try:
        service = get_service()
        if args.command == "put":
            view = service.write(args.id, args.content, args.key)
            print(f"Stored {view.id}" + (" (protected)" if view.protected else ""))
        elif args.command == "get":
            print(json.dumps(service.read_plain(args.id).model_dump()))
        else:
            print(service.reveal(args.id, args.key))
        return 0
    except ClipboardError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
