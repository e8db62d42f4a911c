"""Command line entry point for resolving text objects in a file."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from .core.requests import SelectionRequest
from .core.spans import Span
from .documents.snapshot import DocumentSnapshot
from .errors import NotFoundError, TextObjectError
from .registry import build_default_registry
from .services.settings import SettingsStore, TextObjectSettings
from .utils import file_io, logging as logging_utils

_LOGGER = logging.getLogger(__name__)
_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}
_FALSE_VALUES = {"0", "false", "no", "off", "disabled"}


def configure_logging(settings: TextObjectSettings) -> Path:
    """Send package logs to the file under ``settings.log_dir`` and stderr."""

    level = logging.DEBUG if settings.debug_logging else logging.WARNING
    log_path = logging_utils.setup_logging(level, log_dir=settings.log_dir)
    _LOGGER.debug("Logging to %s (level=%s)", log_path, logging.getLevelName(level))
    return log_path


def load_settings(
    path: Optional[Path] = None,
    *,
    store: SettingsStore | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> TextObjectSettings:
    """Load persisted settings or fall back to defaults."""

    active_store = store or SettingsStore(path)
    try:
        return active_store.load(overrides=overrides)
    except (OSError, TypeError, ValueError) as exc:
        _LOGGER.warning("Failed to load settings from %s: %s", active_store.path, exc)
        return TextObjectSettings()


def resolve_text_object(
    text: str,
    key: str,
    *,
    offset: int,
    inner: bool,
    count: int = 1,
    bounds: Span | None = None,
    settings: TextObjectSettings | None = None,
) -> tuple[str, Span]:
    """Resolve ``key`` around ``offset`` in ``text`` and return ``(kind, span)``."""

    active = settings or TextObjectSettings()
    registry = build_default_registry(active.key_overrides)
    binding = registry.get(key)
    document = DocumentSnapshot(text, strip_comments=active.strip_comments)
    request = SelectionRequest(cursor=offset, bounds=bounds, count=count)
    resolver = binding.inner if inner else binding.outer
    return binding.kind.value, resolver(document, request)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point invoked by the `texobjects` console script."""

    args = _parse_cli_args(argv)

    settings_path = args.settings_path or os.environ.get("TEXOBJECTS_SETTINGS_PATH")
    resolved_path = Path(settings_path).expanduser() if settings_path else None
    settings_store = SettingsStore(resolved_path)
    try:
        cli_overrides = _coerce_cli_overrides(args.overrides or [])
    except ValueError as exc:
        print(f"Invalid --set override: {exc}", file=sys.stderr)
        return 2

    settings = load_settings(resolved_path, store=settings_store, overrides=cli_overrides or None)
    configure_logging(settings)

    if args.dump_settings:
        _dump_settings(settings, settings_store, overrides=cli_overrides)
        return 0

    if args.path is None or args.object is None:
        print("A PATH and --object are required unless --dump-settings is given.", file=sys.stderr)
        return 2

    try:
        text = file_io.read_text(args.path)
    except OSError as exc:
        print(f"Cannot read {args.path}: {exc}", file=sys.stderr)
        return 2

    try:
        offset = _resolve_offset(text, args)
        bounds = Span.from_value(args.bounds) if args.bounds else None
        kind, span = resolve_text_object(
            text,
            args.object,
            offset=offset,
            inner=not args.outer,
            count=args.count or settings.default_count,
            bounds=bounds,
            settings=settings,
        )
    except NotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except (TextObjectError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        return 2

    line, column = DocumentSnapshot(text).position_for(span.start)
    payload = {
        "kind": kind,
        "start": span.start,
        "end": span.end,
        "line": line + 1,
        "column": column + 1,
        "text": span.slice(text),
    }
    json.dump(payload, sys.stdout)
    sys.stdout.write("\n")
    return 0


def _resolve_offset(text: str, args: argparse.Namespace) -> int:
    if args.offset is not None:
        return args.offset
    if args.line is None:
        return 0
    document = DocumentSnapshot(text)
    return document.offset_for(args.line - 1, max(0, (args.column or 1) - 1))


def _parse_cli_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="texobjects",
        add_help=True,
        description="Print the span of a LaTeX text object (quote, math, macro, environment) around a position.",
    )
    parser.add_argument("path", nargs="?", type=Path, help="Document to inspect.")
    parser.add_argument(
        "--object",
        "-o",
        metavar="KEY",
        help='Text object key: \'"\' quote, \'$\' inline math, \'\\\' display math, \'m\' macro, \'e\' environment.',
    )
    variant = parser.add_mutually_exclusive_group()
    variant.add_argument("--inner", action="store_true", help="Select contents only (default).")
    variant.add_argument("--outer", action="store_true", help="Include the delimiters.")
    position = parser.add_mutually_exclusive_group()
    position.add_argument("--offset", type=int, metavar="N", help="0-based character offset of the cursor.")
    position.add_argument("--line", type=int, metavar="L", help="1-based cursor line (use with --column).")
    parser.add_argument("--column", type=int, metavar="C", help="1-based cursor column.")
    parser.add_argument("--count", type=int, metavar="N", help="Select the N-th enclosing object.")
    parser.add_argument("--bounds", metavar="START:END", help="Existing selection the result must contain.")
    parser.add_argument(
        "--dump-settings",
        action="store_true",
        help="Print the effective settings payload and exit.",
    )
    parser.add_argument(
        "--settings-path",
        metavar="PATH",
        help="Override the default ~/.texobjects/settings.json path.",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="Override persisted settings for this run (repeatable).",
    )
    return parser.parse_args(argv)


def _coerce_cli_overrides(items: Sequence[str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for entry in items:
        key, sep, raw_value = entry.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Override '{entry}' must use KEY=VALUE syntax.")
        parser = _OVERRIDE_PARSERS.get(key)
        if parser is None:
            raise ValueError(f"Unknown setting '{key}'.")
        overrides[key] = parser(raw_value.strip())
    return overrides


def _parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Cannot coerce '{value}' to a boolean.")


def _parse_count(value: str) -> int:
    count = int(value, 10)
    if count < 1:
        raise ValueError("default_count must be at least 1.")
    return count


def _parse_key_overrides(value: str) -> dict[str, str]:
    try:
        payload = json.loads(value or "{}")
    except json.JSONDecodeError as exc:
        raise ValueError("key_overrides must be a JSON object such as {\"macro\": \"c\"}") from exc
    if not isinstance(payload, dict) or not all(isinstance(item, str) for item in payload.values()):
        raise ValueError("key_overrides must map object kinds to key strings.")
    return payload


def _parse_log_dir(value: str) -> str | None:
    return value or None


_OVERRIDE_PARSERS: Mapping[str, Callable[[str], Any]] = {
    "key_overrides": _parse_key_overrides,
    "strip_comments": _parse_bool,
    "default_count": _parse_count,
    "debug_logging": _parse_bool,
    "log_dir": _parse_log_dir,
}


def _dump_settings(
    settings: TextObjectSettings,
    store: SettingsStore,
    *,
    overrides: Mapping[str, Any],
) -> None:
    metadata = {
        "path": str(store.path),
        "cli_overrides": sorted(overrides.keys()),
        "environment_variables": _active_env_overrides(),
    }
    json.dump({"settings": asdict(settings), "meta": metadata}, sys.stdout, indent=2)
    sys.stdout.write("\n")


def _active_env_overrides() -> list[str]:
    return sorted(name for name in os.environ if name.startswith("TEXOBJECTS_"))


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
