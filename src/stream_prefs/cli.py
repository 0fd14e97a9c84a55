"""Developer CLI for inspecting and editing stored preferences."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from rich.console import Console

import stream_prefs.io.logging_setup
from stream_prefs.app.engine import PreferenceEngine
from stream_prefs.catalog import GLOBAL_NAMESPACE, build_registry
from stream_prefs.core.capabilities import StaticProber
from stream_prefs.errors import InvalidValueError
from stream_prefs.io.storage import FileBackend
from stream_prefs.report import format_value, render_capabilities, render_namespace


def _load_prober(path: str | None) -> StaticProber:
    if not path:
        return StaticProber()
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("capabilities file must hold a JSON object")
    return StaticProber.from_mapping(data)


def _parse_value(raw: str) -> object:
    """JSON when it parses, plain string otherwise."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stream-prefs", description="Inspect and edit stream preferences")
    parser.add_argument(
        "--capabilities",
        type=str,
        default=None,
        help="JSON file with environment facts and codec entries (default: all absent)",
    )
    parser.add_argument(
        "--store-dir",
        type=str,
        default=None,
        help="Directory holding namespace files (default: $STREAM_PREFS_CONFIG_DIR or XDG config)",
    )
    parser.add_argument("--namespace", type=str, default=GLOBAL_NAMESPACE, help="Namespace to operate on")

    sub = parser.add_subparsers(dest="command", required=True)
    show = sub.add_parser("show", help="Show every setting with its effective value")
    show.add_argument("--supported-only", action="store_true", help="Hide unsupported settings")
    get = sub.add_parser("get", help="Print one effective value as JSON")
    get.add_argument("key")
    set_ = sub.add_parser("set", help="Validate and store a value (JSON or plain string)")
    set_.add_argument("key")
    set_.add_argument("value")
    reset = sub.add_parser("reset", help="Forget the stored value of a key")
    reset.add_argument("key")
    return parser


def run(argv: list[str] | None = None, console: Console | None = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()

    backend = FileBackend(Path(args.store_dir) if args.store_dir else None)
    try:
        prober = _load_prober(args.capabilities)
    except (OSError, ValueError) as e:
        # missing file, unreadable file or malformed JSON
        console.print(f"error: cannot load capabilities from {args.capabilities}: {e}", markup=False, style="red")
        return 2
    engine = asyncio.run(PreferenceEngine.boot(build_registry(), prober, backend))
    try:
        facade = engine.settings(args.namespace)
        if args.command == "show":
            console.print(render_capabilities(engine.capabilities))
            console.print(render_namespace(facade, include_unsupported=not args.supported_only))
        elif args.command == "get":
            console.print(format_value(facade.get(args.key)), markup=False, highlight=False)
        elif args.command == "set":
            value = facade.set(args.key, _parse_value(args.value))
            console.print(f"{args.key} = {format_value(value)}", markup=False, highlight=False)
        elif args.command == "reset":
            value = facade.reset(args.key)
            console.print(f"{args.key} = {format_value(value)}", markup=False, highlight=False)
    except KeyError as e:
        # unknown key or unknown namespace
        console.print(f"error: {e.args[0] if e.args else e}", markup=False, style="red")
        return 2
    except InvalidValueError as e:
        console.print(f"error: {e}", markup=False, style="red")
        return 1
    return 0


def main() -> None:
    stream_prefs.io.logging_setup.configure("cli")
    sys.exit(run())
