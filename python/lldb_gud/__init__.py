"""
lldb-gud-filter package.

Streams LLDB console output to a display: single-step noise is dropped,
other stops are annotated with their reason, the prompt framing is kept and
the current source location is published on the side.  Use
``python -m lldb_gud`` or the ``lldb-gud-filter`` script to filter a
captured transcript.
"""

from __future__ import annotations

from .assembler import LineAssembler
from .cli import main
from .config import FilterConfig, FilterConfigError
from .filter import BlockState, StreamFilter
from .flusher import BlockKind, FlushResult, render_block
from .location import Location, LocationTracker
from .patterns import PATTERN_VERSION, PatternKind, PatternSet

__all__ = [
    "BlockKind",
    "BlockState",
    "FilterConfig",
    "FilterConfigError",
    "FlushResult",
    "LineAssembler",
    "Location",
    "LocationTracker",
    "PATTERN_VERSION",
    "PatternKind",
    "PatternSet",
    "StreamFilter",
    "main",
    "render_block",
]
__version__ = "0.1.0"
