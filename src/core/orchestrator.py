import asyncio
import logging
import sys
from typing import Optional, TextIO

from core.domain import DomainEvent, chunk, done, error_text
from core.providers import LLM

logger = logging.getLogger(__name__)


class Orchestrator:
    """
    Runs one exchange at a time against the LLM and puts every streamed chunk
    on ``events_q``. The stream is always closed with a done event, also when
    the provider fails; the failure itself is sent as an error chunk first.
    """

    def __init__(self, events_q: asyncio.Queue, llm: LLM, enable_reasoning: bool = True):
        self.events_q = events_q
        self.llm = llm
        self.enable_reasoning = enable_reasoning

    async def _emit(self, ev: DomainEvent):
        await self.events_q.put(ev)

    async def run(self, user_input: str):
        try:
            async for ev in self.llm.stream_completion(user_input, self.enable_reasoning):
                await self._emit(ev)
        except Exception as exc:
            logger.exception("exchange with %s failed", self.llm.model_id)
            await self._emit(chunk('error', error_text(str(exc) or type(exc).__name__)))
        finally:
            self.events_q.put_nowait(done())


async def consume(q: asyncio.Queue, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> bool:
    """
    Print response chunks to ``out`` until the stream closes, for use without
    the TUI. Reasoning is skipped. Returns False if an error was reported.
    """
    if out is None:
        out = sys.stdout
    if err is None:
        err = sys.stderr
    ok = True
    while True:
        ev = await q.get()
        if ev.get('type') == 'done':
            break
        kind = ev.get('kind')
        if kind == 'response':
            out.write(ev.get('text', ''))
            out.flush()
        elif kind == 'error':
            ok = False
            err.write(ev.get('text', '') + "\n")
    out.write("\n")
    return ok


async def complete_once(llm: LLM, prompt: str, enable_reasoning: bool = True,
                        out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> bool:
    events_q: asyncio.Queue = asyncio.Queue()
    orch = Orchestrator(events_q, llm, enable_reasoning)
    consumer = asyncio.create_task(consume(events_q, out, err))
    await orch.run(prompt)
    return await consumer
