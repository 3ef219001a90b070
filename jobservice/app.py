import argparse
import json
from pathlib import Path

from .env import load_env

from . import __version__
from .database import init_database
from .events import parse_event
from .handler import get_config, handle_request


def cmd_invoke(args: argparse.Namespace) -> None:
    event_path = Path(args.event)
    if not event_path.exists():
        raise SystemExit(f"Event file not found: {event_path}")

    with event_path.open("r", encoding="utf-8") as f:
        event = json.load(f)

    request = parse_event(event)
    if args.groups is not None:
        request.groups = [g.strip() for g in args.groups.split(",") if g.strip()]

    response = handle_request(request, get_config())
    print(json.dumps(response, indent=2))


def cmd_init_db(args: argparse.Namespace) -> None:
    options = get_config().engine_options()
    init_database(options["url"], options["connect_args"])
    print("jobs table ready.")


def main():
    # Load .env if present (DB_HOST, DATABASE_URL, etc.)
    load_env()
    parser = argparse.ArgumentParser(prog="jobservice", description="ATS job service — local tools")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    inv = subparsers.add_parser("invoke", help="Run the handler on an API Gateway event JSON file")
    inv.add_argument("--event", required=True, help="Path to event JSON")
    inv.add_argument("--groups", help="Comma-separated caller groups (overrides the event's claims)")
    inv.set_defaults(func=cmd_invoke)

    init = subparsers.add_parser("init-db", help="Create the jobs table on the configured database")
    init.set_defaults(func=cmd_init_db)

    args = parser.parse_args()

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
