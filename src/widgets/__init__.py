"""
Custom UI widgets for the streamchat application.
"""
from .input_area import InputArea
from .chat_log import ChatLog
from .header import ChatHeader

__all__ = ["InputArea", "ChatLog", "ChatHeader"]
