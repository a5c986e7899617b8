"""
Prompt input for the streamchat application.
"""
from typing import Literal

from textual.events import Key
from textual.message import Message
from textual.widgets import Input


class InputArea(Input):
    class Submit(Message, bubble=True):
        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class Recall(Message, bubble=True):
        """Up/down pressed: show an older or newer prompt in place of ``value``."""
        def __init__(self, direction: Literal['prev', 'next'], value: str) -> None:
            super().__init__()
            self.direction = direction
            self.value = value

    async def on_key(self, event: Key) -> None:
        if event.key == "enter":
            event.stop()
            event.prevent_default()
            self.post_message(self.Submit(self.value))
        elif event.key in ("up", "down"):
            event.stop()
            event.prevent_default()
            self.post_message(self.Recall('prev' if event.key == "up" else 'next', self.value))

    def show(self, text: str) -> None:
        self.value = text
        self.cursor_position = len(text)
