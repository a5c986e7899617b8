"""
LLM backends. The rest of the application only sees the ``LLM`` interface.
"""
from core.config import ChatConfig

from . import anthropic, openai
from .base import LLM, GraphLLM, ModelConfig, UnknownModelError

__all__ = ["LLM", "GraphLLM", "ModelConfig", "UnknownModelError", "init_llm_client", "valid_model_names"]


def valid_model_names() -> list[str]:
    return [*openai.MODEL_CONFIGS, *anthropic.MODEL_CONFIGS]


def init_llm_client(config: ChatConfig) -> LLM:
    """Create the client for ``config.model``, whichever provider serves it."""
    name = config.model
    if not name:
        raise UnknownModelError("model must be specified via argument or STREAMCHAT_MODEL")
    if name in openai.MODEL_CONFIGS:
        return openai.OpenAIModel(config, name)
    if name in anthropic.MODEL_CONFIGS:
        return anthropic.AnthropicModel(config, name)
    raise UnknownModelError(f"invalid model name '{name}'. Valid options: {', '.join(valid_model_names())}")
