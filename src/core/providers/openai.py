from typing import Any

from langchain_openai import ChatOpenAI

from core.providers.base import GraphLLM, ModelConfig, UnknownModelError

MODEL_CONFIGS: dict[str, ModelConfig] = {
    '5': ModelConfig('gpt-5', reasoning=True, temperature=False, efforts=('minimal', 'low', 'medium', 'high')),
    '5-mini': ModelConfig('gpt-5-mini', reasoning=True, temperature=False,
                          efforts=('minimal', 'low', 'medium', 'high')),
    'o3': ModelConfig('o3', reasoning=True, temperature=False),
    'o4-mini': ModelConfig('o4-mini', reasoning=True, temperature=False),
    '4o': ModelConfig('gpt-4o'),
    '4o-mini': ModelConfig('gpt-4o-mini'),
    '4.1': ModelConfig('gpt-4.1'),
    '4.1-mini': ModelConfig('gpt-4.1-mini'),
    '4.1-nano': ModelConfig('gpt-4.1-nano'),
}


def validate_model_name(name: str) -> None:
    if name not in MODEL_CONFIGS:
        raise UnknownModelError(f"invalid model name '{name}'. Valid options: {', '.join(MODEL_CONFIGS)}")


class OpenAIModel(GraphLLM):
    provider = 'openai'

    def __init__(self, config, model_name: str) -> None:
        validate_model_name(model_name)
        super().__init__(config, model_name, MODEL_CONFIGS[model_name])

    def effort(self) -> str:
        wanted = self.config.effort_name
        efforts = self.model_config.efforts
        return wanted if wanted in efforts else efforts[0]

    def llm_kwargs(self, reasoning: bool) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            'model': self.model_id,
            'max_tokens': self.config.max_tokens,
            'streaming': True,
        }
        if self.model_config.temperature:
            kwargs['temperature'] = 0
        if reasoning:
            # reasoning summaries are only streamed by the responses API
            kwargs['use_responses_api'] = True
            kwargs['reasoning'] = {'effort': self.effort(), 'summary': 'auto'}
        return kwargs

    def build_llm(self, reasoning: bool) -> ChatOpenAI:
        return ChatOpenAI(**self.llm_kwargs(reasoning))
