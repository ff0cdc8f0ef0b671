"""Reassemble logical lines from arbitrarily split output chunks."""

from __future__ import annotations

from typing import List


class LineAssembler:
    """Collects raw chunks and hands back complete ``\\n``-terminated lines.

    Whatever follows the last terminator stays pending until a later chunk
    completes it.  The pending tail is unbounded: a process that never
    prints a newline simply grows it.
    """

    def __init__(self) -> None:
        self._pending: List[str] = []

    def feed(self, chunk: str) -> List[str]:
        if not chunk:
            return []
        if "\n" not in chunk:
            self._pending.append(chunk)
            return []
        self._pending.append(chunk)
        text = "".join(self._pending)
        *complete, rest = text.split("\n")
        self._pending = [rest] if rest else []
        return [line + "\n" for line in complete]

    @property
    def partial(self) -> str:
        if len(self._pending) > 1:
            self._pending = ["".join(self._pending)]
        return self._pending[0] if self._pending else ""

    def take(self, count: int) -> str:
        """Remove and return the first *count* characters of the pending tail."""
        text = self.partial
        head, rest = text[:count], text[count:]
        self._pending = [rest] if rest else []
        return head

    def drain(self) -> str:
        text = self.partial
        self._pending = []
        return text


__all__ = ["LineAssembler"]
