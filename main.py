"""Command-line entry point for the SBGN review tool."""
from __future__ import annotations

import argparse
import logging
import os
import sys
import threading
import time
import webbrowser
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from sbgn_review.config import DEFAULT_CONFIG_PATH, ReviewConfig, load_config
from sbgn_review.errors import ReviewError
from sbgn_review.io import list_working_set
from sbgn_review.ledger import open_ledger
from sbgn_review.web import create_app

LOGGER = logging.getLogger("sbgn_review")
console = Console()

LOCAL_HOSTS = {"127.0.0.1", "localhost", "0.0.0.0"}


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Review old/new SBGN renderings and edit their XML.")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Configuration YAML or JSON path")
    parser.add_argument("--host", default="127.0.0.1", help="Host/IP for the local web server")
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("PORT", "3000")),
        help="Port for the local web server (default: $PORT or 3000)",
    )
    parser.add_argument("--no-browser", action="store_true", help="Do not auto-open the browser")
    parser.add_argument("--print-files", action="store_true", help="Print the working set with statuses and exit")
    parser.add_argument("--verbose", action="store_true", help="Verbose logging")
    return parser


def launch_browser(host: str, port: int, delay: float = 1.2) -> None:
    if host not in LOCAL_HOSTS:
        return
    time.sleep(delay)
    try:
        webbrowser.open(f"http://{'127.0.0.1' if host == '0.0.0.0' else host}:{port}/")
    except webbrowser.Error as exc:
        LOGGER.warning("Could not open browser: %s", exc)


def print_working_set(cfg: ReviewConfig) -> int:
    bases = list_working_set(cfg)
    ledger = open_ledger(cfg.ledger_path)
    ledger.reconcile(bases)

    table = Table(title=f"{len(bases)} items")
    table.add_column("Base")
    table.add_column("Status")
    styles = {"accept": "green", "reject": "red"}
    for base in bases:
        status = ledger.get_status(base)
        table.add_row(base, f"[{styles[status]}]{status}[/]" if status else "-")
    console.print(table)
    return len(bases)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_argument_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = load_config(args.config)
        if args.print_files:
            print_working_set(cfg)
            return 0
        count = len(list_working_set(cfg))
    except ReviewError as exc:
        console.print(f"[red][!][/red] {exc.message}")
        return 1

    url = f"http://{args.host}:{args.port}"
    console.print(f"[green][*][/green] SBGN reviewer: {count} items from {cfg.sbgn_dir}")
    console.print(f"[green][*][/green] Serving at {url} (CTRL+C to stop)")

    if not args.no_browser:
        threading.Thread(target=launch_browser, args=(args.host, args.port), daemon=True).start()

    app = create_app(args.config)
    try:
        app.run(host=args.host, port=args.port, debug=False, use_reloader=False)
    except OSError as exc:
        console.print(f"[red][!][/red] Failed to start server: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
