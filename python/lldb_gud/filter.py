"""Streaming filter between the LLDB console and the display.

One :class:`StreamFilter` owns all state of one debugger session.  Each call
to :meth:`StreamFilter.feed` takes the next raw chunk and returns the text
to display for it; resolved source locations are pushed to the filter's
:class:`~lldb_gud.location.LocationTracker` as a side effect.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from .assembler import LineAssembler
from .config import FilterConfig
from .flusher import FlushResult, render_block
from .location import Location, LocationTracker
from .patterns import PatternSet

LOGGER = logging.getLogger("lldb_gud.filter")


class BlockState(str, Enum):
    PASSTHROUGH = "passthrough"
    BUFFERING = "buffering"


class StreamFilter:
    """Prompt-delimited block buffering over a line-assembled stream.

    Every prompt in the input reaches the output, with one exception.  When a
    chunk ends right after a complete asynchronous stop (its ``Target N:
    (name) stopped.`` line), the block is flushed and a prompt is synthesized
    in place of the one the debugger has not printed yet.  If the next thing
    the stream delivers is that real prompt, it is absorbed rather than shown
    twice.  So the output carries the input's prompts, plus synthesized
    prompts, minus absorbed ones; disable synthesis in :class:`FilterConfig`
    to get a one-for-one prompt count.
    """

    def __init__(
        self,
        config: Optional[FilterConfig] = None,
        *,
        patterns: Optional[PatternSet] = None,
        tracker: Optional[LocationTracker] = None,
    ) -> None:
        self.config = config or FilterConfig()
        self.config.validate()
        self.patterns = patterns or PatternSet.default(self.config.prompt)
        self.tracker = tracker or LocationTracker()
        self._assembler = LineAssembler()
        self._block: List[str] = []
        self._block_terminated = False
        self._block_empty = True
        self._state = BlockState.PASSTHROUGH
        self._prompt_owed = False
        self._out: List[str] = []
        self.last_flush: Optional[FlushResult] = None

    @property
    def state(self) -> BlockState:
        return self._state

    @property
    def location(self) -> Optional[Location]:
        return self.tracker.current

    @property
    def pending_block(self) -> str:
        return "".join(self._block)

    @property
    def pending_partial(self) -> str:
        return self._assembler.partial

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------
    def feed(self, chunk: str) -> str:
        for line in self._assembler.feed(chunk):
            self._process(line)
        residue = self._assembler.partial
        if not residue:
            if self._state is BlockState.BUFFERING and self._block_terminated:
                self._idle_flush()
        else:
            self._process_residue(residue)
        return self._take_output()

    def finish(self) -> str:
        """End of stream: release the unterminated tail and any open block."""
        residue = self._assembler.drain()
        if residue:
            self._route(residue)
        self._flush_block()
        return self._take_output()

    def reset(self) -> None:
        """Drop every piece of session state, including the last location."""
        self._assembler = LineAssembler()
        self._block.clear()
        self._block_terminated = False
        self._block_empty = True
        self._state = BlockState.PASSTHROUGH
        self._prompt_owed = False
        self._out.clear()
        self.last_flush = None
        self.tracker.clear()

    # ------------------------------------------------------------------
    # Line handling
    # ------------------------------------------------------------------
    def _process(self, text: str) -> None:
        while text:
            span = self.patterns.find_prompt(text)
            if span is None:
                self._route(text)
                return
            self._route(text[: span.start])
            self._flush_block()
            self._emit_prompt(text[span.start : span.end])
            text = text[span.end :]

    def _route(self, fragment: str) -> None:
        if not fragment:
            return
        self._prompt_owed = False
        if self._state is BlockState.BUFFERING:
            self._append_block(fragment)
            return
        span = self.patterns.find_marker_start(fragment)
        if span is None:
            self._forward(fragment)
            return
        self._forward(fragment[: span.start])
        self._state = BlockState.BUFFERING
        self._append_block(fragment[span.start :])

    def _append_block(self, fragment: str) -> None:
        self._block.append(fragment)
        if not self._block_terminated and self.patterns.match_stop_end(fragment) is not None:
            self._block_terminated = True

    def _forward(self, text: str) -> None:
        if not text:
            return
        self._out.append(text)
        self._block_empty = False
        self._prompt_owed = False

    def _emit_prompt(self, prompt: str) -> None:
        if self._prompt_owed:
            # A synthesized prompt already stands in for this one.
            self._prompt_owed = False
            LOGGER.debug("absorbed prompt following a synthesized one")
            return
        self._out.append(prompt)

    # ------------------------------------------------------------------
    # Flushing
    # ------------------------------------------------------------------
    def _flush_block(self) -> Optional[FlushResult]:
        if self._state is BlockState.PASSTHROUGH:
            self._block_empty = True
            return None
        result = render_block(
            "".join(self._block),
            self.patterns,
            step_prefix=self.config.step_prefix,
        )
        LOGGER.debug("flushed %s block (reason=%s, location=%s)", result.kind.value, result.reason, result.location)
        if result.location is not None:
            self.tracker.update(result.location)
        text = result.text
        if text and not self._block_empty and not text.endswith("\n"):
            text += "\n"
        if text:
            self._out.append(text)
        self._block.clear()
        self._block_terminated = False
        self._block_empty = True
        self._state = BlockState.PASSTHROUGH
        self.last_flush = result
        return result

    def _idle_flush(self) -> None:
        # A complete stop block with no prompt behind it: an asynchronous
        # notification.  Give the display its prompt back.
        self._flush_block()
        if self.config.synthesize_prompt:
            self._out.append(self.patterns.prompt)
            self._prompt_owed = True

    def _process_residue(self, residue: str) -> None:
        last = None
        for span in self.patterns.iter_prompts(residue):
            last = span
        if last is not None:
            self._process(self._assembler.take(last.end))
            residue = self._assembler.partial
        if residue and self.patterns.match_confirm(residue):
            self._assembler.take(len(residue))
            self._flush_block()
            self._forward(residue)

    def _take_output(self) -> str:
        text = "".join(self._out)
        self._out.clear()
        return text


__all__ = ["BlockState", "StreamFilter"]
