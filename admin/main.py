"""Main entry point for the CMS admin CLI."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from admin import __version__
from admin.config import Settings
from admin.errors import AdminError, MalformedPayload, PayloadInvalid, ReorderFailed
from admin.state import AppState
from content.kernel import registry
from content.kernel.aggregate import SectionAggregate
from content.kernel.validator import parse_json

logger = logging.getLogger(__name__)


def print_help():
    """Print help message."""
    print(f"""
CMS admin v{__version__}

Usage:
  cms-admin [options] <command> [args]

Commands:
  kinds                               List section kinds
  validate <kind> <file>              Validate a payload file (no network)
  pages                               List pages
  show <slug>                         Show a page's sections
  add <slug> <kind> <file> [--at N]   Add a section from a payload file
  edit <slug> <id> <file>             Replace a section's payload
  delete <slug> <id>                  Delete a section
  move <slug> <id> <index>            Move a section to a zero-based position
  reorder <slug> <id>...              Reorder sections (subset is spliced into place)
  reorder <slug> --kind K <id>...     Reorder the sections of one kind
  media <slug> <id>                   Show the media a section references

Options:
  --api-url URL       Section Store URL (default: $CMS_API_URL or http://localhost:4202)
  --log-level LEVEL   Logging level (default: $CMS_LOG_LEVEL or INFO)
  -h, --help          Show this help
  -v, --version       Show version

Environment:
  CMS_API_URL, CMS_SESSION_COOKIE, CMS_REQUEST_TIMEOUT, CMS_REORDER_TIMEOUT,
  CMS_REFETCH_AFTER_WRITE, CMS_LOG_LEVEL
""")


class UsageError(Exception):
    """Bad command line."""

    pass


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        command: str | None
        params: list[str] (positional arguments after the command)
        api_url: str | None
        log_level: str | None
        at: int | None
        kind: str | None
        show_help: bool
        show_version: bool
    """
    result: dict[str, Any] = {
        "command": None,
        "params": [],
        "api_url": None,
        "log_level": None,
        "at": None,
        "kind": None,
        "show_help": False,
        "show_version": False,
    }

    def value(i: int, name: str) -> str:
        if i + 1 >= len(args):
            raise UsageError(f"{name} requires a value")
        return args[i + 1]

    i = 0
    while i < len(args):
        arg = args[i]

        if arg == "--api-url":
            result["api_url"] = value(i, arg)
            i += 1
        elif arg == "--log-level":
            result["log_level"] = value(i, arg).upper()
            i += 1
        elif arg == "--at":
            raw = value(i, arg)
            if not raw.removeprefix("-").isdigit():
                raise UsageError(f"--at expects an integer, got {raw!r}")
            result["at"] = int(raw)
            i += 1
        elif arg == "--kind":
            result["kind"] = value(i, arg)
            i += 1
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-"):
            raise UsageError(f"Unknown option: {arg}")
        elif result["command"] is None:
            result["command"] = arg
        else:
            result["params"].append(arg)

        i += 1

    return result


# command → (positional count, accepts more)
ARITY: dict[str, tuple[int, bool]] = {
    "kinds": (0, False),
    "validate": (2, False),
    "pages": (0, False),
    "show": (1, False),
    "add": (3, False),
    "edit": (3, False),
    "delete": (2, False),
    "move": (3, False),
    "reorder": (2, True),
    "media": (2, False),
}


def check_arity(command: str, params: list[str]) -> None:
    if command not in ARITY:
        raise UsageError(f"Unknown command: {command}")
    count, variadic = ARITY[command]
    if len(params) < count or (not variadic and len(params) > count):
        raise UsageError(f"'{command}' expects {count}{' or more' if variadic else ''} argument(s)")
    if command == "move" and not params[2].removeprefix("-").isdigit():
        raise UsageError(f"index must be an integer, got {params[2]!r}")


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def print_page(page: SectionAggregate) -> None:
    print(f"{page.title or page.slug} ({page.slug})")
    if not len(page):
        print("  (no sections)")
    for s in page:
        spec = registry.spec_for(s.kind)
        summary = registry.summarize(s)
        print(f"  {s.order:>3}  {s.id:<20} {spec.label:<18} {summary}")


def print_errors(e: PayloadInvalid) -> None:
    print(f"Invalid {e.kind} payload:")
    for err in e.errors:
        print(f"  {err.field}: {err.message}")


def read_payload(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_kinds() -> int:
    for kind in registry.known_kinds():
        spec = registry.spec_for(kind)
        print(f"  {kind:<18} {spec.label:<18} {spec.category}")
    return 0


def cmd_validate(kind: str, path: str) -> int:
    result = registry.validate_json(kind, read_payload(path))
    if result.ok:
        print(json.dumps(result.payload, indent=2, ensure_ascii=False))
        return 0
    if result.malformed:
        print(result.error_text())
        return 1
    print_errors(PayloadInvalid(kind, result.errors))
    return 1


async def run_remote(settings: Settings, command: str, args: dict) -> int:
    params = args["params"]
    async with AppState.open(settings) as app:
        if command == "pages":
            for page in await app.store.list_pages():
                print(f"  {page.slug:<20} {page.title}")
            return 0

        page = await app.open_page(params[0])

        if command == "show":
            print_page(page)
        elif command == "add":
            raw, error = parse_json(read_payload(params[2]))
            if error is not None:
                raise MalformedPayload(error.message)
            created = await app.sections.add_section(params[1], raw, args["at"])
            print(f"Created {created.id} at order {created.order}")
            print_page(app.require_page())
        elif command == "edit":
            saved = await app.sections.update_payload_json(params[1], read_payload(params[2]))
            print(f"Saved {saved.id}")
            print_page(app.require_page())
        elif command == "delete":
            await app.sections.delete_section(params[1])
            print(f"Deleted {params[1]}")
            print_page(app.require_page())
        elif command == "move":
            print_page(await app.reorder.move(params[1], int(params[2])))
        elif command == "reorder":
            if args["kind"]:
                print_page(await app.reorder.reorder_kind(args["kind"], params[1:]))
            else:
                print_page(await app.reorder.reorder(params[1:]))
        elif command == "media":
            refs = await app.media_for(params[1])
            if not refs:
                print("  (no media)")
            for ref in refs:
                print(f"  {ref.id:<24} {'MISSING' if ref.missing else ref.url}")
        return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    try:
        args = parse_args(sys.argv[1:] if argv is None else argv)
        if args["show_help"] or (args["command"] is None and not args["show_version"]):
            print_help()
            return 0
        if args["show_version"]:
            print(f"cms-admin {__version__}")
            return 0
        check_arity(args["command"], args["params"])
    except UsageError as e:
        print(f"Error: {e}")
        print("Run 'cms-admin --help' for usage.")
        return 2

    overrides = {}
    if args["api_url"]:
        overrides["API_URL"] = args["api_url"]
    if args["log_level"]:
        overrides["LOG_LEVEL"] = args["log_level"]
    settings = Settings(**overrides)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    command = args["command"]
    try:
        if command == "kinds":
            return cmd_kinds()
        if command == "validate":
            return cmd_validate(*args["params"])
        return asyncio.run(run_remote(settings, command, args))
    except PayloadInvalid as e:
        print_errors(e)
        return 1
    except ReorderFailed as e:
        print(f"Error: {e}")
        for section_id, reason in e.failures.items():
            print(f"  {section_id}: {reason}")
        if e.page is not None:
            print_page(e.page)
        return 1
    except AdminError as e:
        print(f"Error: {e}")
        return 1
    except OSError as e:
        print(f"Error: {e}")
        return 1
    except Exception:
        logger.exception("Unexpected failure running %s", command)
        return 1


if __name__ == "__main__":
    sys.exit(main())
