"""
Scratch buffers for the exchange that is currently streaming.
"""
import io
from typing import Literal, NamedTuple

TextKind = Literal['reasoning', 'response']


class Drained(NamedTuple):
    reasoning: str
    response: str
    error: str


class StreamAccumulator:
    """
    Collects streamed reasoning/response text and the error message of one
    in-flight exchange. Drained into the transcript once the stream closes.
    """

    def __init__(self) -> None:
        self._reasoning = io.StringIO()
        self._response = io.StringIO()
        self.error: str = ""

    def append(self, text: str, kind: TextKind) -> None:
        if kind == 'reasoning':
            self._reasoning.write(text)
        elif kind == 'response':
            self._response.write(text)
        else:
            raise ValueError(f"unknown chunk kind: {kind!r}")

    def set_error(self, text: str) -> None:
        """Record an error. Chunks arriving afterwards are still accepted."""
        self.error = text

    def __len__(self) -> int:
        # characters, not bytes, of reasoning + response; errors excluded
        return self._reasoning.tell() + self._response.tell()

    def is_empty(self) -> bool:
        return len(self) == 0 and not self.error

    @property
    def reasoning(self) -> str:
        return self._reasoning.getvalue()

    @property
    def response(self) -> str:
        return self._response.getvalue()

    def preview(self) -> str:
        """
        Text shown while streaming: the response once any has arrived,
        the reasoning before that.
        """
        if self._response.tell() > 0:
            return self.response
        return self.reasoning

    def drain(self) -> Drained:
        drained = Drained(self.reasoning, self.response, self.error)
        self._reasoning = io.StringIO()
        self._response = io.StringIO()
        self.error = ""
        return drained
