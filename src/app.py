"""
streamchat: a terminal chat client for LLM provider APIs
"""

import asyncio
import logging
import os
import sys
from typing import Optional

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding

from core import logging_setup
from core.config import ChatConfig, load_config
from core.markdown import MarkdownRenderer, RendererConstructionError
from core.orchestrator import complete_once
from core.providers import LLM, UnknownModelError, init_llm_client
from core.session import ChatSession
from widgets import ChatHeader, ChatLog, InputArea

logger = logging.getLogger(__name__)


class ChatApp(App):
    CSS = """
#chat_log {
    height: 1fr;
    padding: 0 1;
}
#input_text {
    dock: bottom;
}
    """
    BINDINGS = [
        Binding("ctrl+d", "quit", "quit", priority=True),
        Binding("ctrl+c", "clear_or_quit", "clear chat / quit", priority=True),
        Binding("escape", "scroll_bottom", "jump to bottom"),
    ]

    def __init__(self, config: ChatConfig, llm: LLM, initial_prompt: str = "",
                 markdown: Optional[MarkdownRenderer] = None):
        """Initialize the chat application with default state."""
        super().__init__()
        self.config = config
        self.session = ChatSession(config, llm, markdown)
        self.initial_prompt = initial_prompt

    def compose(self) -> ComposeResult:
        yield ChatHeader(self.session.model_id, id="header")
        yield ChatLog(id="chat_log")
        yield InputArea(id="input_text", placeholder="Send a prompt...")

    async def on_mount(self) -> None:
        self.title = "streamchat"
        self.query_one("#input_text", InputArea).focus()
        self._pump()
        if self.initial_prompt:
            # wait for the first layout so the chat log has a width
            self.call_after_refresh(self._submit, self.initial_prompt)

    def refresh_chat(self) -> None:
        chat_log = self.query_one("#chat_log", ChatLog)
        chat_log.set_content(self.session.render(chat_log.content_width))

    def _submit(self, text: str) -> None:
        prompt = self.session.submit_prompt(text)
        if prompt is None:
            return
        self.query_one("#header", ChatHeader).streaming = True
        self.refresh_chat()
        self.query_one("#chat_log", ChatLog).scroll_end(animate=False)
        self.run_infer(prompt)

    async def on_input_area_submit(self, message: InputArea.Submit) -> None:
        if self.session.streaming:
            return
        self.query_one("#input_text", InputArea).value = ""
        self._submit(message.value)

    async def on_input_area_recall(self, message: InputArea.Recall) -> None:
        visible = message.value.strip()
        if message.direction == 'prev':
            text, moved = self.session.request_prev(visible)
        else:
            text, moved = self.session.request_next(visible)
        if moved:
            self.query_one("#input_text", InputArea).show(text)

    def on_chat_log_resized(self, message: ChatLog.Resized) -> None:
        self.refresh_chat()

    def action_clear_or_quit(self) -> None:
        if self.screen.get_selected_text():
            self.screen.action_copy_text()
            return
        if self.session.streaming:
            return
        if not self.session.clear():
            self.exit()
            return
        self.refresh_chat()
        self.query_one("#input_text", InputArea).focus()

    def action_scroll_bottom(self) -> None:
        self.query_one("#chat_log", ChatLog).scroll_end(animate=False)

    @work(exclusive=True, group='infer')
    async def run_infer(self, user_input: str):
        """
        Stream the model's answer to ``user_input`` into the event queue.
        """
        await self.session.run_exchange(user_input)

    @work(exclusive=True, group='pump')
    async def _pump(self):
        """
        Event processing loop.

        Chunks are applied to the transcript as they arrive; the stream is
        only finished by the done event, never by an error chunk.
        """
        while True:
            ev = await self.session.events_q.get()
            finished = self.session.apply(ev)
            self.refresh_chat()
            if finished:
                self.query_one("#header", ChatHeader).streaming = False
                self.query_one("#input_text", InputArea).focus()


def main(argv: Optional[list[str]] = None) -> int:
    try:
        config = load_config(argv)
    except ValueError as exc:
        print(f"streamchat: {exc}", file=sys.stderr)
        return 2
    config.export_api_keys()
    logging_setup.configure(config)

    try:
        llm = init_llm_client(config)
        markdown = MarkdownRenderer(config.style, config.styles)
    except (UnknownModelError, RendererConstructionError) as exc:
        print(f"streamchat: {exc}", file=sys.stderr)
        return 1

    initial_prompt = ""
    if not sys.stdin.isatty():
        piped = sys.stdin.read().strip()
        if not config.force_interactive:
            if not piped:
                return 0
            ok = asyncio.run(complete_once(llm, piped, config.reasoning))
            return 0 if ok else 1
        initial_prompt = piped
        # the TUI reads keys from stdin, which the pipe has used up
        try:
            tty = os.open("/dev/tty", os.O_RDONLY)
        except OSError as exc:
            print(f"streamchat: no terminal for interactive mode: {exc}", file=sys.stderr)
            return 1
        os.dup2(tty, sys.stdin.fileno())
        os.close(tty)

    logger.info("starting TUI with %s", llm.model_id)
    ChatApp(config, llm, initial_prompt, markdown).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
