from rich.text import Text
from textual.containers import VerticalScroll
from textual.message import Message
from textual.widgets import Static


class ChatLog(VerticalScroll):
    """Scrolling view of the rendered transcript."""

    DEFAULT_CSS = """
    ChatLog #chat_text {
        width: 100%;
        height: auto;
    }
    """

    class Resized(Message, bubble=True):
        def __init__(self, width: int) -> None:
            super().__init__()
            self.width = width

    def compose(self):
        yield Static(id="chat_text")

    @property
    def content_width(self) -> int:
        return max(1, self.scrollable_content_region.width)

    @property
    def at_bottom(self) -> bool:
        return self.scroll_y >= self.max_scroll_y

    def set_content(self, ansi: str, follow: bool = True) -> None:
        """
        Replace the shown text. With ``follow`` the view stays pinned to the
        bottom, unless the user has scrolled away from it.
        """
        pinned = follow and self.at_bottom
        self.query_one("#chat_text", Static).update(Text.from_ansi(ansi))
        if pinned:
            self.call_after_refresh(self.scroll_end, animate=False)

    def on_resize(self, event) -> None:
        self.post_message(self.Resized(self.content_width))
