"""
One exchange of the chat transcript.
"""
from dataclasses import dataclass


@dataclass
class Entry:
    """
    One prompt/response pair of the transcript.

    Created with only ``prompt`` set. Filled exactly once by
    ``complete()`` when its exchange ends.
    """
    prompt: str
    reasoning: str = ""
    response: str = ""
    error: str = ""
    completed: bool = False

    def complete(self, reasoning: str, response: str, error: str) -> None:
        if self.completed:
            raise ValueError("entry already completed")
        self.reasoning = reasoning
        self.response = response
        self.error = error
        self.completed = True
