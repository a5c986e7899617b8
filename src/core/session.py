"""
Ties the transcript to the orchestrator for the lifetime of the UI.
"""
import asyncio
import logging
from typing import Optional

from core.config import ChatConfig
from core.domain import DomainEvent
from core.markdown import MarkdownRenderer
from core.orchestrator import Orchestrator
from core.providers import LLM
from models.transcript import Transcript

logger = logging.getLogger(__name__)


class ChatSession:
    """
    Everything the UI shell calls: prompt submission, stream events, history
    recall, rendering and clearing. Only ever touched from the event loop.
    """

    def __init__(self, config: ChatConfig, llm: LLM, markdown: Optional[MarkdownRenderer] = None):
        self.config = config
        self.llm = llm
        self.markdown = markdown or MarkdownRenderer(config.style, config.styles)
        self.transcript = Transcript(self.markdown)
        self.events_q: asyncio.Queue = asyncio.Queue()
        self.orchestrator = Orchestrator(self.events_q, llm, config.reasoning)

    @property
    def streaming(self) -> bool:
        return self.transcript.in_flight

    @property
    def model_id(self) -> str:
        return self.llm.model_id

    def submit_prompt(self, text: str) -> Optional[str]:
        """
        Record a new prompt and return it, or None if there is nothing to send.
        The caller starts the exchange with ``run_exchange``.
        """
        prompt = text.strip()
        self.transcript.scrollback.reset()
        if not prompt:
            return None
        self.transcript.add_prompt(prompt)
        logger.info("prompt %d submitted (%d chars)", self.transcript.entry_count, len(prompt))
        return prompt

    async def run_exchange(self, prompt: str) -> None:
        await self.orchestrator.run(prompt)

    def apply(self, ev: DomainEvent) -> bool:
        """Apply one stream event. Returns True once the exchange is complete."""
        stream = self.transcript.stream
        if ev.get('type') == 'done':
            if not self.transcript.in_flight:
                logger.warning("stream closed with no exchange in flight")
                return False
            self.transcript.add_response()
            return True

        kind, text = ev.get('kind'), ev.get('text', '')
        if kind == 'error':
            stream.set_error(text)
        else:
            stream.append(text, kind)
        return False

    def request_prev(self, visible_text: str) -> tuple[str, bool]:
        return self.transcript.scrollback.prev(visible_text)

    def request_next(self, visible_text: str) -> tuple[str, bool]:
        return self.transcript.scrollback.next(visible_text)

    def render(self, width: int) -> str:
        return self.transcript.render(width)

    def clear(self) -> bool:
        """Forget the conversation. Returns False when there was nothing to clear."""
        if self.streaming or self.transcript.entry_count == 0:
            return False
        self.transcript.clear()
        self.llm.clear_history()
        logger.info("chat cleared")
        return True
