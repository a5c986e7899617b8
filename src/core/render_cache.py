"""
Incremental rendering of the chat transcript.
"""
import io
import logging
from typing import Optional, Sequence

from core.markdown import MarkdownRenderer
from models.entry import Entry
from models.stream import StreamAccumulator

logger = logging.getLogger(__name__)


class TranscriptRenderCache:
    """
    Keeps the rendered text of every completed entry for the last width seen.

    ``buffer`` always holds the rendered entries ``[0, rendered_count)`` at
    ``last_width``. A width change is the only case that re-renders the whole
    transcript; otherwise only newly completed entries are rendered. The
    in-flight entry is never written into the buffer.
    """

    def __init__(self, markdown: MarkdownRenderer) -> None:
        self.markdown = markdown
        self._buffer = io.StringIO()
        self.rendered_count = 0
        self.last_width: Optional[int] = None

    @property
    def buffer(self) -> str:
        return self._buffer.getvalue()

    def reset(self) -> None:
        self._buffer = io.StringIO()
        self.rendered_count = 0
        self.last_width = None

    def render(self, entries: Sequence[Entry], stream: StreamAccumulator, width: int) -> str:
        # only the last entry can still be in flight
        completed = len(entries) - (1 if entries and not entries[-1].completed else 0)

        if width != self.last_width:
            logger.debug("width changed %s -> %d, re-rendering %d entries", self.last_width, width, completed)
            self._buffer = io.StringIO()
            self._render_entries(entries, 0, completed, width)
            self.last_width = width
            self.rendered_count = completed
        elif self.rendered_count < completed:
            self._render_entries(entries, self.rendered_count, completed, width)
            self.rendered_count = completed

        tail = self._render_in_flight(entries, stream, width)
        if not tail:
            return self._buffer.getvalue()

        # write the live tail onto the buffer, read it back, then cut it off again
        base = self._buffer.tell()
        self._buffer.write(tail)
        content = self._buffer.getvalue()
        self._buffer.seek(base)
        self._buffer.truncate()
        return content

    def _render_entries(self, entries: Sequence[Entry], start: int, stop: int, width: int) -> None:
        for entry in entries[start:stop]:
            self._buffer.write(self.render_entry(entry, width))

    def render_entry(self, entry: Entry, width: int) -> str:
        md = self.markdown
        styles = md.styles
        parts = [md.render_prompt(entry.prompt, width)]
        if styles.show_reasoning and entry.reasoning:
            parts.append(md.render(entry.reasoning, width, style=styles.reasoning))
        if entry.response:
            parts.append(md.render(entry.response, width))
        if entry.error:
            parts.append(md.render(entry.error, width, style=styles.error))
        return "".join(parts)

    def _render_in_flight(self, entries: Sequence[Entry], stream: StreamAccumulator, width: int) -> str:
        if not entries or entries[-1].completed:
            return ""
        md = self.markdown
        tail = md.render_prompt(entries[-1].prompt, width)
        if len(stream) > 0:
            preview_style = None if stream.response else md.styles.reasoning
            tail += md.render(stream.preview(), width, style=preview_style)
        return tail
