"""
Events passed from a running exchange to the UI, and from the UI to the transcript.
"""

from typing import Literal, TypedDict, Union

ChunkKind = Literal['reasoning', 'response', 'error']


class StreamChunk(TypedDict):
    type: Literal['chunk']
    kind: ChunkKind
    text: str


class DoneEvent(TypedDict):
    """Closes the stream. Always the last event of an exchange."""
    type: Literal['done']


DomainEvent = Union[StreamChunk, DoneEvent]


def chunk(kind: ChunkKind, text: str) -> StreamChunk:
    return {'type': 'chunk', 'kind': kind, 'text': text}


def done() -> DoneEvent:
    return {'type': 'done'}


def error_text(message: str) -> str:
    return f"**Error:** {message}"
