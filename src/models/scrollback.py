"""
Shell-like recall of previously submitted prompts.
"""
from typing import Sequence

from models.entry import Entry

AT_TIP = -1


class HistoryTraverser:
    """
    Cycles the prompt input through the prompts of the transcript.

    ``cursor`` is the index of the prompt currently shown, or ``AT_TIP`` while
    the user is composing a new prompt. Text the user edits while viewing an
    old prompt is remembered in ``edits`` until the next ``reset()``, so
    moving away and back never loses it. The transcript itself is only read.
    """

    def __init__(self, entries: Sequence[Entry]) -> None:
        self._entries = entries
        self.cursor = AT_TIP
        self.tip_text = ""
        self.edits: dict[int, str] = {}

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def at_tip(self) -> bool:
        return self.cursor == AT_TIP

    def prompt_at(self, idx: int) -> str:
        """Prompt at ``idx``, as edited during this traversal if it was."""
        if idx in self.edits:
            return self.edits[idx]
        return self._entries[idx].prompt

    def _remember(self, visible_text: str) -> None:
        if visible_text != self._entries[self.cursor].prompt:
            self.edits[self.cursor] = visible_text
        else:
            self.edits.pop(self.cursor, None)

    def prev(self, visible_text: str) -> tuple[str, bool]:
        """
        Step back to an older prompt.

        Returns the text to show and whether the cursor moved. Nothing
        moves when already at the oldest prompt or when there is no history.
        """
        if not self._entries:
            return visible_text, False

        if self.cursor == AT_TIP:
            self.tip_text = visible_text
            self.cursor = len(self._entries) - 1
            return self.prompt_at(self.cursor), True

        if self.cursor == 0:
            return visible_text, False

        self._remember(visible_text)
        self.cursor -= 1
        return self.prompt_at(self.cursor), True

    def next(self, visible_text: str) -> tuple[str, bool]:
        """Step forward to a newer prompt, and finally back to the tip."""
        if not self._entries or self.cursor == AT_TIP:
            return visible_text, False

        self._remember(visible_text)
        if self.cursor == len(self._entries) - 1:
            self.cursor = AT_TIP
            return self.tip_text, True

        self.cursor += 1
        return self.prompt_at(self.cursor), True

    def reset(self) -> None:
        self.cursor = AT_TIP
        self.tip_text = ""
        self.edits.clear()
