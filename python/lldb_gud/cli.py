"""lldb-gud-filter CLI entry point."""

from __future__ import annotations

import argparse
import codecs
import logging
import os
import sys
from typing import BinaryIO, List

from .commands import startup_settings
from .config import FilterConfig, FilterConfigError
from .filter import StreamFilter
from .output import OutputContext, emit_error, emit_location, emit_text

LOG = logging.getLogger("lldb_gud.cli")

DEFAULT_CHUNK_SIZE = 4096


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Filter LLDB console output for display")
    parser.add_argument("input", nargs="?", help="Captured debugger output (default: stdin)")
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Bytes read per chunk (default {DEFAULT_CHUNK_SIZE})",
    )
    parser.add_argument("--prompt", help="Debugger prompt text (default '(lldb) ')")
    parser.add_argument("--step-prefix", help="Stop reasons with this prefix are suppressed (default 'step')")
    parser.add_argument(
        "--no-synthesize-prompt",
        action="store_true",
        help="Do not add a prompt after asynchronous stop notifications",
    )
    parser.add_argument("--locations", action="store_true", help="Report source location updates")
    parser.add_argument("--json", action="store_true", help="Emit JSON records instead of raw text")
    parser.add_argument(
        "--print-settings",
        action="store_true",
        help="Print the LLDB settings the filter relies on and exit",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LLDB_GUD_LOG", "WARNING"),
        help="Logging level (default WARNING)",
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    ctx = OutputContext(json_output=args.json, show_locations=args.locations)
    try:
        config = FilterConfig.from_env().merged(
            prompt=args.prompt,
            step_prefix=args.step_prefix,
            synthesize_prompt=False if args.no_synthesize_prompt else None,
        )
        config.validate()
    except FilterConfigError as exc:
        emit_error(ctx, message=str(exc))
        return 2
    if args.print_settings:
        for line in startup_settings(config.prompt):
            print(line)
        return 0
    if args.chunk_size < 1:
        emit_error(ctx, message="--chunk-size must be positive")
        return 2

    stream_filter = StreamFilter(config)
    if ctx.show_locations:
        stream_filter.tracker.subscribe(lambda location: emit_location(ctx, location))

    if args.input and args.input != "-":
        try:
            source: BinaryIO = open(args.input, "rb")
        except OSError as exc:
            emit_error(ctx, message=f"cannot read {args.input}: {exc.strerror or exc}")
            return 1
    else:
        source = sys.stdin.buffer
    try:
        return _pump(stream_filter, source, ctx, args.chunk_size)
    except KeyboardInterrupt:
        return 130
    except Exception as exc:  # pragma: no cover - defensive
        LOG.exception("filter failed")
        emit_error(ctx, message=f"filter failed: {exc}")
        return 1
    finally:
        if source is not sys.stdin.buffer:
            source.close()


def _pump(stream_filter: StreamFilter, source: BinaryIO, ctx: OutputContext, chunk_size: int) -> int:
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    read = getattr(source, "read1", source.read)
    chunks = 0
    while True:
        data = read(chunk_size)
        if not data:
            break
        chunks += 1
        emit_text(ctx, stream_filter.feed(decoder.decode(data)))
    emit_text(ctx, stream_filter.feed(decoder.decode(b"", final=True)))
    emit_text(ctx, stream_filter.finish())
    LOG.debug("processed %d chunk(s); last location %s", chunks, stream_filter.location)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
