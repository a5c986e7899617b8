from typing import Annotated, Any, TypedDict

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, SystemMessage
from langgraph.checkpoint.base import BaseCheckpointSaver
from langgraph.graph import END, START, StateGraph
from langgraph.graph.message import add_messages


class ChatState(TypedDict):
    messages: Annotated[list[BaseMessage], add_messages]


def message_text(content: Any) -> str:
    """Plain response text of a message's content, without reasoning blocks."""
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get('type') == 'text':
            parts.append(block.get('text') or '')
    return ''.join(parts)


def chatbot_factory(llm: BaseChatModel, system_prompt: str):
    async def chatbot(state: ChatState):
        msgs = [*state["messages"]]
        if system_prompt:
            msgs.insert(0, SystemMessage(system_prompt))
        ai_msg = await llm.ainvoke(msgs)
        # only the answer goes into the history, reasoning is not replayed
        return {'messages': [AIMessage(content=message_text(ai_msg.content))]}
    return chatbot


def build_chat_agent(llm: BaseChatModel, system_prompt: str, checkpointer: BaseCheckpointSaver,
                     name: str = "chat_agent"):
    """
    Single-node chat graph. Conversation history lives in the checkpointer,
    keyed by the ``thread_id`` of the run config.
    """
    graph_builder = StateGraph(ChatState)
    graph_builder.add_node('chatbot', chatbot_factory(llm, system_prompt))

    graph_builder.add_edge(START, 'chatbot')
    graph_builder.add_edge('chatbot', END)

    return graph_builder.compile(name=name, checkpointer=checkpointer)
