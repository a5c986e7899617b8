"""
Data models for the streamchat application.
"""
from .entry import Entry
from .stream import StreamAccumulator
from .scrollback import HistoryTraverser

__all__ = ["Entry", "StreamAccumulator", "HistoryTraverser"]
