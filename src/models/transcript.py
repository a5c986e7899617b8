"""
The chat transcript: every prompt submitted in this session and its outcome.
"""
import logging
from typing import Sequence

from core.markdown import MarkdownRenderer
from core.render_cache import TranscriptRenderCache
from models.entry import Entry
from models.scrollback import HistoryTraverser
from models.stream import StreamAccumulator

logger = logging.getLogger(__name__)


class TranscriptStateError(RuntimeError):
    """A prompt/response call was made out of order."""


class Transcript:
    """
    Append-only list of entries, plus the stream buffer of the exchange in
    flight, the render cache over both and the prompt scrollback.

    At most one entry is in flight: ``add_prompt`` opens it and
    ``add_response`` closes it.
    """

    def __init__(self, markdown: MarkdownRenderer) -> None:
        self._entries: list[Entry] = []
        self.stream = StreamAccumulator()
        self.cache = TranscriptRenderCache(markdown)
        self.scrollback = HistoryTraverser(self._entries)

    @property
    def entries(self) -> Sequence[Entry]:
        return tuple(self._entries)

    @property
    def entry_count(self) -> int:
        return len(self._entries)

    @property
    def in_flight(self) -> bool:
        return bool(self._entries) and not self._entries[-1].completed

    @property
    def completed_count(self) -> int:
        return self.entry_count - (1 if self.in_flight else 0)

    def __len__(self) -> int:
        return self.entry_count

    def add_prompt(self, raw: str) -> None:
        if self.in_flight:
            raise TranscriptStateError("previous prompt has no response yet")
        self._entries.append(Entry(prompt=raw))

    def add_response(self) -> Entry:
        if not self.in_flight:
            raise TranscriptStateError("no prompt is waiting for a response")
        entry = self._entries[-1]
        entry.complete(*self.stream.drain())
        logger.debug("entry %d completed (response=%d chars, error=%r)",
                     len(self._entries) - 1, len(entry.response), entry.error)
        return entry

    def render(self, width: int) -> str:
        return self.cache.render(self._entries, self.stream, width)

    def clear(self) -> None:
        # cleared in place: the scrollback holds a reference to this list
        del self._entries[:]
        self.stream.drain()
        self.cache.reset()
        self.scrollback.reset()
