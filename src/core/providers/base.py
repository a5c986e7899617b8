"""
The interface every LLM backend implements, and the langgraph plumbing they share.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, AsyncIterator, Optional, Protocol, runtime_checkable

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage
from langgraph.checkpoint.memory import MemorySaver

from core.agents.chat_agent import build_chat_agent
from core.config import ChatConfig
from core.domain import StreamChunk
from core.langgraph_adapter import adapt_events

logger = logging.getLogger(__name__)


class UnknownModelError(ValueError):
    pass


@dataclass(frozen=True)
class ModelConfig:
    # id defined by the provider's API
    id: str
    reasoning: bool = False
    temperature: bool = True
    efforts: tuple[str, ...] = ('low', 'medium', 'high')


@runtime_checkable
class LLM(Protocol):
    @property
    def model_id(self) -> str: ...

    @property
    def supports_reasoning(self) -> bool: ...

    def stream_completion(self, prompt: str, enable_reasoning: bool) -> AsyncIterator[StreamChunk]: ...

    def clear_history(self) -> None: ...

    def get_history(self) -> list[BaseMessage]: ...


class GraphLLM(ABC):
    """
    Base for the provider models. Each one streams through a langgraph chat
    graph whose checkpointer keeps the conversation; clearing the history
    starts a new thread.
    """

    provider = ''

    def __init__(self, config: ChatConfig, model_name: str, model_config: ModelConfig) -> None:
        self.config = config
        self.model_name = model_name
        self.model_config = model_config
        self.prompt_count = 0

        self._checkpointer = MemorySaver()
        self._agents: dict[bool, Any] = {}
        self._thread = 1

    @property
    def model_id(self) -> str:
        return self.model_config.id

    @property
    def supports_reasoning(self) -> bool:
        return self.model_config.reasoning

    @abstractmethod
    def llm_kwargs(self, reasoning: bool) -> dict[str, Any]:
        """Keyword arguments for the provider's chat model."""

    @abstractmethod
    def build_llm(self, reasoning: bool) -> BaseChatModel:
        ...


    def _agent(self, reasoning: bool):
        if reasoning not in self._agents:
            # both graphs share the checkpointer, so toggling reasoning keeps the history
            self._agents[reasoning] = build_chat_agent(
                self.build_llm(reasoning), self.config.system_prompt, self._checkpointer,
                name=f"{self.provider}_chat",
            )
        return self._agents[reasoning]

    def _run_config(self) -> dict[str, Any]:
        return {'configurable': {'thread_id': f'conv-{self._thread}'}}

    async def stream_completion(self, prompt: str, enable_reasoning: bool) -> AsyncIterator[StreamChunk]:
        reasoning = enable_reasoning and self.supports_reasoning
        agent = self._agent(reasoning)
        payload = {"messages": [HumanMessage(content=prompt)]}
        logger.info("streaming from %s (reasoning=%s)", self.model_id, reasoning)

        stream = agent.astream_events(payload, config=self._run_config(), version='v2')
        async for item in adapt_events(stream):
            yield item
        self.prompt_count += 1

    def clear_history(self) -> None:
        self._thread += 1
        self.prompt_count = 0

    def get_history(self) -> list[BaseMessage]:
        agent: Optional[Any] = next(iter(self._agents.values()), None)
        if agent is None:
            return []
        snapshot = agent.get_state(self._run_config())
        return list(snapshot.values.get('messages', []))
