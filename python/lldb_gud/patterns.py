"""Named output patterns recognised in LLDB console text.

The patterns match the frame/thread formats installed by
:func:`lldb_gud.commands.startup_settings`.  Keep the two in step: if the
formats change, bump :data:`PATTERN_VERSION`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Mapping, Optional

PATTERN_VERSION = 2
DEFAULT_PROMPT = "(lldb) "


class PatternKind(str, Enum):
    THREAD_STOP_START = "thread_stop_start"
    THREAD_STOP = "thread_stop"
    THREAD_STOP_END = "thread_stop_end"
    FRAME_START = "frame_start"
    FRAME = "frame"
    PROMPT = "prompt"
    CONFIRM = "confirm"


# Capture groups: THREAD_STOP needs file/line/reason, FRAME needs file/line
# (index optional), THREAD_STOP_END may name target/name.  Overrides must
# keep the required groups.

# " at <file>:<line>[:<column>]".  The file comes from ${line.file.fullpath},
# so it is absolute and may itself contain spaces, colons or " at "; the first
# " at " followed by an absolute path opens the location.
_ABSOLUTE_PATH = r"(?:/|[A-Za-z]:[\\/]|\\\\)[^\n]*?"
_LOCATION = r" at (?P<file>" + _ABSOLUTE_PATH + r"):(?P<line>\d+)(?::\d+)?"

DEFAULT_SOURCES: Dict[PatternKind, str] = {
    PatternKind.THREAD_STOP_START: r"\* thread #\d+",
    # The location is followed directly by the next ", key = value" field.
    PatternKind.THREAD_STOP: (
        r"\* thread #\d+[^\n]*?" + _LOCATION + r"(?:, [^\n]*?)?, stop reason = (?P<reason>[^\n]*)"
    ),
    PatternKind.THREAD_STOP_END: r"^Target (?P<target>\d+): \((?P<name>[^)\n]*)\) stopped\.",
    PatternKind.FRAME_START: r"frame #\d+: ",
    PatternKind.FRAME: r"frame #(?P<index>\d+): [^\n]*?" + _LOCATION + r"\s*\Z",
    # Yes/no queries only; bracketed program output such as "[1/2]" is not one.
    PatternKind.CONFIRM: r"\[(?:[Yy]/[Nn]|[Nn]/[Yy])\]:?[ \t]*\Z",
}

_FLAGS: Dict[PatternKind, int] = {
    PatternKind.THREAD_STOP_END: re.MULTILINE,
}


@dataclass(frozen=True)
class Span:
    start: int
    end: int


@dataclass(frozen=True)
class StopMarker:
    """Location and reason carried by a thread-stop line."""

    file: str
    line: int
    reason: str
    span: Span


@dataclass(frozen=True)
class StopTerminator:
    """The ``Target N: (name) stopped.`` text closing a stop event."""

    target: int
    name: str
    span: Span


@dataclass(frozen=True)
class FrameMarker:
    index: int
    file: str
    line: int
    span: Span


@dataclass(frozen=True)
class PatternSet:
    """Compiled pattern table plus the literal prompt string."""

    prompt: str
    patterns: Mapping[PatternKind, re.Pattern[str]] = field(repr=False)
    version: int = PATTERN_VERSION

    @classmethod
    def default(
        cls,
        prompt: str = DEFAULT_PROMPT,
        *,
        overrides: Optional[Mapping[PatternKind, str]] = None,
    ) -> "PatternSet":
        sources = dict(DEFAULT_SOURCES)
        if overrides:
            sources.update(overrides)
        compiled: Dict[PatternKind, re.Pattern[str]] = {
            kind: re.compile(source, _FLAGS.get(kind, 0)) for kind, source in sources.items()
        }
        # The prompt is always a literal so that a prompt wholly inside a
        # partial line is found at the same offset as in the finished line.
        compiled[PatternKind.PROMPT] = re.compile(re.escape(prompt))
        return cls(prompt=prompt, patterns=compiled)

    def find_prompt(self, text: str, pos: int = 0) -> Optional[Span]:
        match = self.patterns[PatternKind.PROMPT].search(text, pos)
        if match is None:
            return None
        return Span(match.start(), match.end())

    def iter_prompts(self, text: str) -> Iterator[Span]:
        for match in self.patterns[PatternKind.PROMPT].finditer(text):
            yield Span(match.start(), match.end())

    def find_marker_start(self, text: str) -> Optional[Span]:
        """Return the leftmost thread-stop or frame start inside *text*."""
        best: Optional[Span] = None
        for kind in (PatternKind.THREAD_STOP_START, PatternKind.FRAME_START):
            match = self.patterns[kind].search(text)
            if match is None:
                continue
            if best is None or match.start() < best.start:
                best = Span(match.start(), match.end())
        return best

    def match_stop(self, block: str) -> Optional[StopMarker]:
        match = self.patterns[PatternKind.THREAD_STOP].search(block)
        if match is None:
            return None
        return StopMarker(
            file=match.group("file"),
            line=int(match.group("line")),
            reason=match.group("reason").strip(),
            span=Span(match.start(), match.end()),
        )

    def match_stop_end(self, block: str, pos: int = 0) -> Optional[StopTerminator]:
        match = self.patterns[PatternKind.THREAD_STOP_END].search(block, pos)
        if match is None:
            return None
        groups = match.groupdict()
        return StopTerminator(
            target=int(groups.get("target") or 0),
            name=groups.get("name") or "",
            span=Span(match.start(), match.end()),
        )

    def match_frame(self, block: str) -> Optional[FrameMarker]:
        """Match a frame line that ends *block* (trailing whitespace allowed)."""
        match = self.patterns[PatternKind.FRAME].search(block)
        if match is None:
            return None
        return FrameMarker(
            index=int(match.groupdict().get("index") or 0),
            file=match.group("file"),
            line=int(match.group("line")),
            span=Span(match.start(), match.end()),
        )

    def match_confirm(self, text: str) -> bool:
        return self.patterns[PatternKind.CONFIRM].search(text) is not None


__all__ = [
    "DEFAULT_PROMPT",
    "DEFAULT_SOURCES",
    "PATTERN_VERSION",
    "FrameMarker",
    "PatternKind",
    "PatternSet",
    "Span",
    "StopMarker",
    "StopTerminator",
]
