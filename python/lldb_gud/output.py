"""Output helpers for lldb-gud-filter."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.styles import Style

from .location import Location

LOCATION_STYLE = Style.from_dict(
    {
        "arrow": "ansigreen bold",
        "file": "ansicyan",
        "line": "ansiyellow",
    }
)


@dataclass
class OutputContext:
    """Display options shared by the CLI helpers."""

    json_output: bool = False
    show_locations: bool = False


def _json_line(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, sort_keys=True)


def emit_text(ctx: OutputContext, text: str) -> None:
    """Write filtered debugger output as-is (no added newline)."""
    if not text:
        return
    if ctx.json_output:
        print(_json_line({"type": "output", "text": text}), flush=True)
        return
    sys.stdout.write(text)
    sys.stdout.flush()


def emit_location(ctx: OutputContext, location: Location) -> None:
    """Report a location update on stderr, or as a JSON record on stdout."""
    if ctx.json_output:
        print(_json_line({"type": "location", "file": location.file, "line": location.line}), flush=True)
        return
    fragments = FormattedText(
        [
            ("class:arrow", "=> "),
            ("class:file", location.file),
            ("", ":"),
            ("class:line", str(location.line)),
        ]
    )
    print_formatted_text(fragments, style=LOCATION_STYLE, file=sys.stderr)


def emit_error(ctx: OutputContext, *, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
    """Emit an error message respecting JSON mode."""
    payload: Dict[str, Any] = {"type": "error", "error": message}
    if data:
        payload["details"] = dict(data)
    if ctx.json_output:
        print(_json_line(payload))
    else:
        print(f"error: {message}", file=sys.stderr)


__all__ = ["LOCATION_STYLE", "OutputContext", "emit_error", "emit_location", "emit_text"]
