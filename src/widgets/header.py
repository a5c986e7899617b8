from rich.text import Text
from textual.reactive import reactive
from textual.widgets import Static


class ChatHeader(Static):
    """Title bar: application name, streaming indicator and model id."""

    DEFAULT_CSS = """
    ChatHeader {
        height: 3;
        border: round $secondary;
        padding: 0 1;
        text-style: bold;
    }
    """

    streaming: reactive[bool] = reactive(False)

    def __init__(self, model_id: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.model_id = model_id

    def render(self) -> Text:
        left = "streamchat (streaming...)" if self.streaming else "streamchat"
        width = max(0, self.content_region.width)
        spacing = " " * max(5, width - len(left) - len(self.model_id))
        return Text(f"{left}{spacing}{self.model_id}")
