import argparse
import dataclasses
import json
import sqlite3
import sys

from api.server import create_app
from config.settings import get_settings
from db import schema
from db.connection import get_connection
from db.repos.people_repo import PeopleRepo
from db.seed_data import seed_people
from models.sort_options import SortField
from services.event_loop import EventLoop
from services.outcomes import Found, NotFound
from services.people_client import PeopleApiClient
from services.reporting import format_person_detail, person_to_dict, print_directory
from utils.logging_setup import init_logging
from viewstate.controller import DirectoryController


def _client(args) -> PeopleApiClient:
    settings = get_settings()
    if getattr(args, "api_url", None):
        settings = dataclasses.replace(settings, api_base_url=args.api_url.rstrip("/"))
    return PeopleApiClient(settings)


def cmd_bootstrap(args):
    conn = get_connection(args.db)
    try:
        schema.bootstrap(conn)
    finally:
        conn.close()
    print("Schema ready")


def cmd_seed(args):
    conn = get_connection(args.db)
    try:
        schema.bootstrap(conn)
        ids = seed_people(PeopleRepo(conn))
    finally:
        conn.close()
    print(f"Seed data inserted ({len(ids)} people)")


def cmd_check_db(args):
    try:
        conn = get_connection(args.db)
        try:
            now = conn.execute("SELECT datetime('now')").fetchone()[0]
        finally:
            conn.close()
    except sqlite3.Error as e:
        print(f"DB connection failed: {e}")
        sys.exit(1)
    print(f"Connection OK. Server time: {now}")


def cmd_serve(args):
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_app(args.db),
        host=args.host or settings.server_host,
        port=args.port or settings.server_port,
        log_level=settings.log_level.lower(),
    )


def cmd_list(args):
    settings = get_settings()
    loop = EventLoop()
    controller = DirectoryController(_client(args), loop, debounce_seconds=settings.search_debounce_seconds)
    try:
        controller.start()
        loop.run_until(lambda: not controller.state.loading, timeout=settings.request_timeout_seconds + 5)
        if controller.state.loading:
            print("Timed out waiting for the people service")
            sys.exit(1)
        if args.search is not None:
            controller.set_search_text(args.search)
            controller.flush_search()
        # Each flag is one click: repeating a field toggles its direction
        for field in args.sort_by or []:
            controller.click_sort(SortField(field))
        if args.select is not None:
            match = next((p for p in controller.display_people() if p.entry_number == args.select), None)
            if match is None:
                print(f"No person with entry number {args.select} in the current view")
            else:
                controller.activate_row(match)
        print_directory(controller.view())
        failed = controller.state.error_message is not None
    finally:
        controller.close()
        loop.close()
    if failed:
        sys.exit(1)


def cmd_show(args):
    outcome = _client(args).fetch_record_by_id(args.id)
    if isinstance(outcome, Found):
        if args.text:
            print(format_person_detail(outcome.record))
        else:
            print(json.dumps(person_to_dict(outcome.record), indent=2, ensure_ascii=False))
        return
    if isinstance(outcome, NotFound):
        print("Person not found")
    else:
        print(f"Error: {outcome.message}")
    sys.exit(1)


def main():
    settings = get_settings()
    init_logging(settings.log_level)
    parser = argparse.ArgumentParser(description="People directory CLI")
    parser.add_argument("--db", default=settings.db_path, help="Path to SQLite DB (default from settings)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_boot = sub.add_parser("bootstrap", help="Create tables and indexes")
    p_boot.set_defaults(func=cmd_bootstrap)

    p_seed = sub.add_parser("seed", help="Insert or refresh the sample people")
    p_seed.set_defaults(func=cmd_seed)

    p_chk = sub.add_parser("check-db", help="Verify the database can be opened and queried")
    p_chk.set_defaults(func=cmd_check_db)

    p_srv = sub.add_parser("serve", help="Run the read-only people API")
    p_srv.add_argument("--host", default=None, help="Bind host (default from settings)")
    p_srv.add_argument("--port", type=int, default=None, help="Bind port (default from settings)")
    p_srv.set_defaults(func=cmd_serve)

    p_ls = sub.add_parser("list", help="Fetch, filter and sort the directory")
    p_ls.add_argument("--api-url", default=None, help="People API base URL (default from settings)")
    p_ls.add_argument("--search", "-q", default=None, help="Case-insensitive name filter")
    p_ls.add_argument(
        "--sort-by", "-s", action="append", choices=[f.value for f in SortField],
        help="Click a sort control (repeatable; clicking the active field again flips direction)",
    )
    p_ls.add_argument("--select", type=int, default=None, help="Open the detail card for this entry number")
    p_ls.set_defaults(func=cmd_list)

    p_show = sub.add_parser("show", help="Fetch one person by id")
    p_show.add_argument("--id", type=int, required=True, help="Person id")
    p_show.add_argument("--api-url", default=None, help="People API base URL (default from settings)")
    p_show.add_argument("--text", action="store_true", help="Print a detail card instead of JSON")
    p_show.set_defaults(func=cmd_show)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
