from typing import Any

from langchain_anthropic import ChatAnthropic

from core.providers.base import GraphLLM, ModelConfig, UnknownModelError

# smallest thinking budget the API accepts
MIN_THINKING_BUDGET = 1024

MODEL_CONFIGS: dict[str, ModelConfig] = {
    'opus-4.1': ModelConfig('claude-opus-4-1', reasoning=True),
    'opus-4': ModelConfig('claude-opus-4-0', reasoning=True),
    'sonnet-4': ModelConfig('claude-sonnet-4-0', reasoning=True),
    'sonnet-3.7': ModelConfig('claude-3-7-sonnet-latest', reasoning=True),
    'haiku-3.5': ModelConfig('claude-3-5-haiku-latest'),
}


def validate_model_name(name: str) -> None:
    if name not in MODEL_CONFIGS:
        raise UnknownModelError(f"invalid model name '{name}'. Valid options: {', '.join(MODEL_CONFIGS)}")


class AnthropicModel(GraphLLM):
    provider = 'anthropic'

    def __init__(self, config, model_name: str) -> None:
        validate_model_name(model_name)
        super().__init__(config, model_name, MODEL_CONFIGS[model_name])

    def llm_kwargs(self, reasoning: bool) -> dict[str, Any]:
        max_tokens = self.config.max_tokens
        kwargs: dict[str, Any] = {'model': self.model_id, 'streaming': True}
        if reasoning:
            budget = max(MIN_THINKING_BUDGET, max_tokens)
            # the thinking budget counts against max_tokens, leave room for the answer
            max_tokens = 2048 if max_tokens <= 1024 else max_tokens * 2
            kwargs['thinking'] = {'type': 'enabled', 'budget_tokens': budget}
        else:
            kwargs['temperature'] = 0
        kwargs['max_tokens'] = max_tokens
        return kwargs

    def build_llm(self, reasoning: bool) -> ChatAnthropic:
        return ChatAnthropic(**self.llm_kwargs(reasoning))
