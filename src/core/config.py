"""
Application configuration.

Values come from the environment (optionally populated from a ``.env`` file)
and can be overridden by command line flags.
"""
import argparse
import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

from dotenv import load_dotenv

ENV_PREFIX = 'STREAMCHAT_'

DEFAULT_SYSTEM_PROMPT = "You are a concise assistant to a software engineer"
DEFAULT_MAX_TOKENS = 2048
DEFAULT_STYLE = 'monokai'

REASONING_EFFORTS = {1: 'minimal', 2: 'low', 3: 'medium', 4: 'high'}


@dataclass(frozen=True)
class ChatStyles:
    """Colours and layout of the chat transcript."""
    prompt: str = '#32cd32'
    reasoning: str = 'dim #a9a9a9'
    error: str = 'bold #ff0000'
    h_padding: int = 1
    prompt_v_padding: int = 1
    # widths relative to the viewport width
    prompt_width_proportion: float = 6 / 7
    response_width_proportion: float = 6 / 7
    show_reasoning: bool = False

    def prompt_width(self, width: int) -> int:
        return max(1, int(width * self.prompt_width_proportion))

    def response_width(self, width: int) -> int:
        return max(1, int(width * self.response_width_proportion))


@dataclass(frozen=True)
class ChatConfig:
    model: str = ''
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    max_tokens: int = DEFAULT_MAX_TOKENS
    reasoning: bool = True
    reasoning_effort: int = 4
    style: str = DEFAULT_STYLE
    force_interactive: bool = False
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    log_file: Optional[str] = None
    log_level: str = 'INFO'
    styles: ChatStyles = field(default_factory=ChatStyles)

    @property
    def effort_name(self) -> str:
        return REASONING_EFFORTS[self.reasoning_effort]

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ChatConfig":
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            value = env.get(ENV_PREFIX + name)
            return value if value not in (None, '') else None

        kwargs = {}
        for name, attr in (('MODEL', 'model'), ('SYSTEM_PROMPT', 'system_prompt'),
                           ('STYLE', 'style'), ('LOG_FILE', 'log_file'),
                           ('LOG_LEVEL', 'log_level')):
            if (value := get(name)) is not None:
                kwargs[attr] = value
        for name, attr in (('MAX_TOKENS', 'max_tokens'), ('REASONING_EFFORT', 'reasoning_effort')):
            if (value := get(name)) is not None:
                kwargs[attr] = int(value)
        if (value := get('REASONING')) is not None:
            kwargs['reasoning'] = _parse_bool(value)

        styles = ChatStyles()
        if (value := get('SHOW_REASONING')) is not None:
            styles = replace(styles, show_reasoning=_parse_bool(value))

        config = cls(styles=styles, **kwargs)
        config.validate()
        return config

    def with_args(self, args: argparse.Namespace) -> "ChatConfig":
        """Return a copy with every flag that was given on the command line applied."""
        overrides = {}
        for attr in ('model', 'system_prompt', 'max_tokens', 'reasoning', 'reasoning_effort',
                     'style', 'openai_api_key', 'anthropic_api_key'):
            value = getattr(args, attr, None)
            if value is not None:
                overrides[attr] = value
        if getattr(args, 'force_interactive', False):
            overrides['force_interactive'] = True

        styles = self.styles
        if getattr(args, 'show_reasoning', False):
            styles = replace(styles, show_reasoning=True)

        config = replace(self, styles=styles, **overrides)
        config.validate()
        return config

    def validate(self) -> None:
        if self.reasoning_effort not in REASONING_EFFORTS:
            raise ValueError(f"reasoning effort must be between 1 and 4, got {self.reasoning_effort}")
        if self.max_tokens <= 0:
            raise ValueError(f"max tokens must be positive, got {self.max_tokens}")

    def export_api_keys(self) -> None:
        """Keys given on the command line are used only where the real variables are unset."""
        if self.openai_api_key and not os.environ.get('OPENAI_API_KEY'):
            os.environ['OPENAI_API_KEY'] = self.openai_api_key
        if self.anthropic_api_key and not os.environ.get('ANTHROPIC_API_KEY'):
            os.environ['ANTHROPIC_API_KEY'] = self.anthropic_api_key


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ('1', 'true', 'yes', 'on'):
        return True
    if lowered in ('0', 'false', 'no', 'off'):
        return False
    raise ValueError(f"not a boolean: {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='streamchat',
        description="A minimal terminal chat interface to LLM provider APIs (OpenAI, Anthropic).",
        epilog="Keys: enter submit, up/down prompt history, ctrl+c clear chat/quit, "
               "ctrl+d quit, esc jump to bottom",
    )
    parser.add_argument('model', nargs='?', default=None, help="model to chat with, e.g. 4.1 or sonnet-4")
    parser.add_argument('-P', '--system-prompt', default=None,
                        help="system prompt that will influence model responses")
    parser.add_argument('-r', '--reasoning', dest='reasoning', action='store_true', default=None,
                        help="enable reasoning/thinking for supported models (default)")
    parser.add_argument('--no-reasoning', dest='reasoning', action='store_false',
                        help="disable reasoning/thinking")
    parser.add_argument('-e', '--reasoning-effort', type=int, choices=sorted(REASONING_EFFORTS), default=None,
                        help="reasoning effort for OpenAI reasoning models (1-4)")
    parser.add_argument('-t', '--max-tokens', type=int, default=None,
                        help=f"output token budget for each response (default {DEFAULT_MAX_TOKENS})")
    parser.add_argument('-s', '--style', default=None,
                        help=f"pygments style used for code blocks (default {DEFAULT_STYLE})")
    parser.add_argument('--show-reasoning', action='store_true',
                        help="keep reasoning text in the transcript after a response completes")
    parser.add_argument('--force-interactive', action='store_true',
                        help="when stdin is a pipe, open the TUI with the piped text as the first prompt")
    parser.add_argument('--openai-api-key', default=None, help="allows access to OpenAI models")
    parser.add_argument('--anthropic-api-key', default=None, help="allows access to Anthropic models")
    return parser


def load_config(argv: Optional[list[str]] = None) -> ChatConfig:
    load_dotenv()
    args = build_parser().parse_args(argv)
    return ChatConfig.from_env().with_args(args)
