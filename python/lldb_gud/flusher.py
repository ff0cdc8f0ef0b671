"""Classify a finished output block and render its display text."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .location import Location
from .patterns import PatternSet

LOGGER = logging.getLogger("lldb_gud.flusher")

DEFAULT_STEP_PREFIX = "step"


class BlockKind(str, Enum):
    STOP = "stop"
    STEP = "step"
    UNTERMINATED_STOP = "unterminated_stop"
    FRAME = "frame"
    PLAIN = "plain"


@dataclass(frozen=True)
class FlushResult:
    text: str
    kind: BlockKind
    location: Optional[Location] = None
    reason: Optional[str] = None

    @property
    def suppressed(self) -> bool:
        return self.kind is BlockKind.STEP


def render_block(block: str, patterns: PatternSet, *, step_prefix: str = DEFAULT_STEP_PREFIX) -> FlushResult:
    """Render *block*, which must not contain the prompt.

    Thread-stop markers win over frame markers.  A stop only counts once its
    ``Target N: (name) stopped.`` line has arrived; stops whose reason starts
    with *step_prefix* are suppressed, every other stop gets the reason
    appended to that line.  Anything unrecognised is returned unchanged.
    """
    stop = patterns.match_stop(block)
    if stop is not None:
        terminator = patterns.match_stop_end(block, stop.span.end)
        if terminator is None:
            LOGGER.debug("stop marker without terminator at %s:%d, forwarding", stop.file, stop.line)
            return FlushResult(block, BlockKind.UNTERMINATED_STOP, reason=stop.reason)
        location = Location(stop.file, stop.line)
        if stop.reason.startswith(step_prefix):
            return FlushResult("", BlockKind.STEP, location, stop.reason)
        end = terminator.span.end
        text = f"{block[:end]} - {stop.reason}.{block[end:]}"
        return FlushResult(text, BlockKind.STOP, location, stop.reason)

    frame = patterns.match_frame(block)
    if frame is not None:
        return FlushResult(block, BlockKind.FRAME, Location(frame.file, frame.line))

    LOGGER.debug("no marker matched in %d-character block", len(block))
    return FlushResult(block, BlockKind.PLAIN)


__all__ = ["BlockKind", "DEFAULT_STEP_PREFIX", "FlushResult", "render_block"]
