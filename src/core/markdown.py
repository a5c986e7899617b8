"""
Markdown rendering of transcript text into ANSI-styled strings.
"""
import io
import logging
from typing import Optional

from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound
from rich.console import Console, RenderableType
from rich.errors import StyleSyntaxError
from rich.markdown import Markdown
from rich.padding import Padding
from rich.style import Style
from rich.text import Text

from core.config import ChatStyles

logger = logging.getLogger(__name__)


class RendererConstructionError(Exception):
    """The renderer cannot be built from the given style configuration."""


class MarkdownRenderer:
    """
    Wraps a rich ``Console`` and renders Markdown at a viewport width.

    The console is built for one width at a time. ``get_or_create`` keeps the
    last built console and only rebuilds it when the width changes, since
    consecutive renders at a stable width are the common case.
    """

    def __init__(self, style: str, styles: Optional[ChatStyles] = None) -> None:
        self.style = style
        self.styles = styles or ChatStyles()
        self._validate()

        self.width: Optional[int] = None
        self._console: Optional[Console] = None
        self.builds = 0

    def _validate(self) -> None:
        try:
            get_style_by_name(self.style)
        except ClassNotFound as exc:
            raise RendererConstructionError(f"unknown code style: {self.style!r}") from exc

        for name in ('prompt', 'reasoning', 'error'):
            try:
                Style.parse(getattr(self.styles, name))
            except StyleSyntaxError as exc:
                raise RendererConstructionError(f"invalid {name} style: {exc}") from exc

    def get_or_create(self, width: int) -> Console:
        if self._console is None or width != self.width:
            self._console = Console(
                width=width,
                file=io.StringIO(),
                force_terminal=True,
                force_jupyter=False,
                force_interactive=False,
                color_system='truecolor',
                legacy_windows=False,
                highlight=False,
                emoji=True,
            )
            self.width = width
            self.builds += 1
            logger.debug("built markdown console for width %d", width)
        return self._console

    set_width = get_or_create

    def _print(self, renderable: RenderableType, width: int, wrap_width: int) -> str:
        console = self.get_or_create(width)
        with console.capture() as capture:
            console.print(renderable, width=wrap_width)
        return capture.get()

    def render(self, markdown: str, width: int, style: Optional[str] = None) -> str:
        """
        Render ``markdown`` wrapped to the response column of a viewport
        ``width`` columns wide. Falls back to the raw text if rendering fails.
        """
        if not markdown:
            return ""
        wrap_width = self.styles.response_width(width)
        try:
            return self._print(
                Markdown(markdown, code_theme=self.style, hyperlinks=False, style=style or 'none'),
                width,
                wrap_width,
            )
        except Exception:
            logger.debug("markdown rendering failed, using raw text", exc_info=True)
            return markdown

    def render_prompt(self, prompt: str, width: int) -> str:
        """
        Right-justify the prompt inside the prompt column, leaving a left
        margin, in the manner of a messaging app.
        """
        if not prompt:
            return ""
        styles = self.styles
        margin = max(0, width - styles.prompt_width(width))
        block = Padding(
            Text(prompt, style=styles.prompt, justify='right'),
            (styles.prompt_v_padding, styles.h_padding, styles.prompt_v_padding, margin),
        )
        try:
            return self._print(block, width, width)
        except Exception:
            logger.debug("prompt rendering failed, using raw text", exc_info=True)
            return prompt + "\n"
