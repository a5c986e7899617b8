"""Shared fixtures: a renderer, a transcript and a scripted fake LLM."""

import logging
from typing import Iterable, Optional

import pytest
from rich.text import Text

from core import logging_setup
from core.config import ChatConfig, ChatStyles
from core.domain import StreamChunk, chunk
from core.markdown import MarkdownRenderer
from models.transcript import Transcript


def plain(ansi: str) -> str:
    """Strip styling from rendered output."""
    return Text.from_ansi(ansi).plain


class FakeLLM:
    """Replays a fixed list of chunks for every prompt, optionally failing afterwards."""

    model_id = "fake-1"
    supports_reasoning = True

    def __init__(self, script: Iterable[StreamChunk] = (), fail: Optional[Exception] = None):
        self.script = list(script)
        self.fail = fail
        self.prompts: list[str] = []
        self.cleared = 0

    async def stream_completion(self, prompt: str, enable_reasoning: bool):
        self.prompts.append(prompt)
        for item in self.script:
            yield item
        if self.fail is not None:
            raise self.fail

    def clear_history(self) -> None:
        self.cleared += 1

    def get_history(self):
        return []


@pytest.fixture
def styles():
    return ChatStyles()


@pytest.fixture
def markdown(styles):
    return MarkdownRenderer("monokai", styles)


@pytest.fixture
def transcript(markdown):
    return Transcript(markdown)


@pytest.fixture
def config():
    return ChatConfig(model="4.1")


@pytest.fixture
def fresh_logging(monkeypatch):
    """Let a test configure logging from scratch, and undo it afterwards."""
    monkeypatch.setattr(logging_setup, '_configured_path', None)
    saved = {name: (lg.handlers[:], lg.level, lg.propagate)
             for name in logging_setup.LOGGER_NAMES
             for lg in [logging.getLogger(name)]}
    yield
    for name, (handlers, level, propagate) in saved.items():
        lg = logging.getLogger(name)
        for handler in lg.handlers:
            if handler not in handlers:
                handler.close()
        lg.handlers = handlers
        lg.setLevel(level)
        lg.propagate = propagate
    logging.captureWarnings(False)


@pytest.fixture
def hello_script():
    return [
        chunk('reasoning', "thinking..."),
        chunk('response', "Hi"),
        chunk('response', " there"),
    ]


def complete(transcript: Transcript, prompt: str, response: str = "", reasoning: str = "", error: str = ""):
    """Run a whole exchange against ``transcript`` without a provider."""
    transcript.add_prompt(prompt)
    if reasoning:
        transcript.stream.append(reasoning, 'reasoning')
    if response:
        transcript.stream.append(response, 'response')
    if error:
        transcript.stream.set_error(error)
    return transcript.add_response()
