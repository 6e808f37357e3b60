from __future__ import annotations

import argparse
import json
import os
import sys
import webbrowser
from pathlib import Path
from typing import List, Optional

from .catalog import StaticCatalog
from .config import config_from_env
from .errors import SaveFileError
from .host import LauncherHost
from .hub import Hub
from .model import LEVELS, CatalogItem
from .saves import default_filename, export_all, export_console, export_notes, import_file, stats_line, write_json
from .util.console import eprint
from .view import print_window


def _load_items(path: Optional[str]) -> Optional[list]:
    if not path:
        return None
    try:
        obj = json.loads(Path(path).read_text(encoding="utf-8", errors="replace"))
    except (OSError, ValueError) as e:
        raise SystemExit(f"Failed to load catalog items: {e}")
    if not isinstance(obj, list):
        raise SystemExit("Failed to load catalog items: expected a JSON list of {id, title, src}")
    return obj


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="savepoint",
        description="Game hub progress tracking: captured console logs, per-game notes, child-window agent.",
    )
    ap.add_argument("--home", default=None, help="Store directory (default: env SAVEPOINT_HOME or ~/.savepoint)")
    ap.add_argument("--items", default=None, help="Launcher catalog JSON list of {id, title, src} (default: stored dbg_items_v6)")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("logs", help="Show the most recent captured console entries")
    p.add_argument("--level", choices=LEVELS, default=None, help="Only show one level")
    p.add_argument("--limit", type=int, default=None, help="Display window size (default: 120)")

    p = sub.add_parser("log", help="Log a message through the captured console")
    p.add_argument("level", choices=LEVELS)
    p.add_argument("message", nargs="+")

    sub.add_parser("clear-logs", help="Empty the console log buffer")

    sub.add_parser("notes", help="List selectable games and saved notes")

    p = sub.add_parser("note", help="Show or set the note for one game key")
    p.add_argument("key")
    p.add_argument("text", nargs="?", default=None, help="New note text (omit to print the current note)")
    p.add_argument("--stdin", action="store_true", help="Read the new note text from stdin")

    p = sub.add_parser("inject", help="Enable/disable the child-window agent")
    p.add_argument("state", choices=["on", "off", "toggle", "status"])

    p = sub.add_parser("blanker", help="Build a child-window document for a game")
    p.add_argument("--title", required=True)
    p.add_argument("--src", required=True)
    p.add_argument("--auto-fs", action="store_true", help="Request fullscreen on first click")
    p.add_argument("--out", default=os.path.join("build", "blanker.html"), help="Output HTML path")
    p.add_argument("--no-open", action="store_true", help="Do not open the generated HTML in a browser")

    p = sub.add_parser("relay", help="Ingest agent messages (one JSON object per line)")
    p.add_argument("path", nargs="?", default="-", help="Message file (default: stdin)")
    p.add_argument("--origin", default=None, help="Origin the messages came from")

    p = sub.add_parser("export", help="Write a save file")
    p.add_argument("--kind", choices=["save", "notes", "console"], default="save")
    p.add_argument("--out", default=None, help="Output path (default: dbg-<kind>-<ms>.json)")

    p = sub.add_parser("import", help="Import a save file (all-or-nothing)")
    p.add_argument("path")

    p = sub.add_parser("clear", help="Clear ALL saved notes and console logs")
    p.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    sub.add_parser("stats", help="Print note/log counts")
    return ap


def _cmd_note(hub: Hub, args: argparse.Namespace) -> int:
    current = hub.notes.select(args.key)
    text = sys.stdin.read() if args.stdin else args.text
    if text is None:
        if args.key not in hub.notes:
            eprint(f"no note saved for {args.key!r}")
            return 1
        print(current)
        return 0
    hub.notes.edit(text)
    hub.notes.flush()
    print(f"saved note for {args.key!r}")
    return 0


def _cmd_blanker(hub: Hub, host: LauncherHost, args: argparse.Namespace) -> int:
    # The launcher finishes loading after the hub started: retry the patch now.
    host.load()
    hub.ready()
    html = host.open_blanker(CatalogItem(id=args.title, title=args.title, src=args.src), auto_fs=args.auto_fs)
    out_path = os.path.abspath(args.out)
    try:
        Path(out_path).parent.mkdir(parents=True, exist_ok=True)
        Path(out_path).write_text(html, encoding="utf-8")
    except OSError as e:
        raise SystemExit(f"Cannot write '{out_path}': {e}")
    print(out_path)
    if not args.no_open:
        try:
            webbrowser.open("file://" + out_path)
        except Exception:
            pass
    return 0


def _cmd_relay(hub: Hub, args: argparse.Namespace) -> int:
    if args.path == "-":
        lines = sys.stdin
    else:
        try:
            lines = Path(args.path).read_text(encoding="utf-8", errors="replace").splitlines()
        except OSError as e:
            raise SystemExit(f"Cannot read '{args.path}': {e}")
    accepted = 0
    for line in lines:
        line = line.strip()
        if not line:
            continue
        if hub.relay.handle_text(line, origin=args.origin) is not None:
            accepted += 1
    print(f"{accepted} message(s) relayed")
    return 0


def _cmd_export(hub: Hub, args: argparse.Namespace) -> int:
    if args.kind == "notes":
        data = export_notes(hub.notes)
    elif args.kind == "console":
        data = export_console(hub.buffer)
    else:
        data = export_all(hub.buffer, hub.notes)
    out = write_json(args.out or default_filename(args.kind), data)
    print(os.path.abspath(out))
    return 0


def main(argv: List[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        config = config_from_env(home=args.home)
    except ValueError as e:
        raise SystemExit(f"Invalid configuration: {e}")

    items = _load_items(args.items)
    host = LauncherHost()
    hub = Hub.open(
        config,
        host=host,
        catalog=StaticCatalog(items) if items is not None else None,
    )
    hub.start(banner=False)
    try:
        cmd = args.cmd
        if cmd == "logs":
            print_window(hub.buffer, limit=args.limit or config.display_limit, level=args.level)
        elif cmd == "log":
            getattr(hub.interceptor.target, args.level)(*args.message)
        elif cmd == "clear-logs":
            hub.buffer.clear()
        elif cmd == "notes":
            for key, label in hub.notes.choices():
                mark = "*" if key in hub.notes else " "
                print(f"{mark} {key}\t{label}")
        elif cmd == "note":
            return _cmd_note(hub, args)
        elif cmd == "inject":
            if args.state == "on":
                hub.patcher.set_enabled(True)
            elif args.state == "off":
                hub.patcher.set_enabled(False)
            elif args.state == "toggle":
                hub.patcher.toggle()
            print("Enabled: next Blanker opens will have the panel" if hub.patcher.enabled else "Disabled")
        elif cmd == "blanker":
            return _cmd_blanker(hub, host, args)
        elif cmd == "relay":
            return _cmd_relay(hub, args)
        elif cmd == "export":
            return _cmd_export(hub, args)
        elif cmd == "import":
            try:
                n_notes, n_logs = import_file(args.path, hub.buffer, hub.notes)
            except SaveFileError as e:
                raise SystemExit(f"[savepoint] ERROR: {e}")
            print(f"Import successful: {n_notes} note(s), {n_logs} console log(s)")
        elif cmd == "clear":
            if not args.yes:
                answer = input("Clear ALL saved notes and console logs? This cannot be undone. [y/N] ")
                if answer.strip().lower() not in ("y", "yes"):
                    print("Aborted.")
                    return 1
            hub.clear_all()
            print("Cleared.")
        elif cmd == "stats":
            print(stats_line(hub.buffer, hub.notes))
    finally:
        hub.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
