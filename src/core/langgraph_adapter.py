from typing import Any, AsyncIterator, Dict, Iterator, Mapping

from core.domain import StreamChunk, chunk


def _block_chunks(block: Any) -> Iterator[StreamChunk]:
    if isinstance(block, str):
        if block:
            yield chunk('response', block)
        return
    if not isinstance(block, Mapping):
        return

    btype = block.get('type')
    if btype == 'text':
        if text := block.get('text'):
            yield chunk('response', text)
    elif btype == 'thinking':
        # anthropic extended thinking; signature-only deltas carry no text
        if text := block.get('thinking'):
            yield chunk('reasoning', text)
    elif btype == 'reasoning':
        if text := block.get('reasoning'):
            yield chunk('reasoning', text)
        for part in block.get('summary') or []:
            if isinstance(part, Mapping) and (text := part.get('text')):
                yield chunk('reasoning', text)


def _extract_chunks(data: Mapping[str, Any]) -> Iterator[StreamChunk]:
    ch = data.get('chunk')
    if isinstance(ch, str):
        yield from _block_chunks(ch)
        return

    extra = getattr(ch, 'additional_kwargs', None) or {}
    if text := extra.get('reasoning_content'):
        yield chunk('reasoning', text)
    reasoning = extra.get('reasoning')
    if isinstance(reasoning, Mapping):
        yield from _block_chunks({'type': 'reasoning', **reasoning})

    content = getattr(ch, 'content', None)
    if isinstance(content, list):
        for block in content:
            yield from _block_chunks(block)
    else:
        yield from _block_chunks(content)


async def adapt_events(stream: AsyncIterator[Dict[str, Any]]) -> AsyncIterator[StreamChunk]:
    """
    Turn langchain ``astream_events`` (v2) into the reasoning/response
    chunks the transcript consumes. Everything but chat model tokens is dropped.
    """
    async for ev in stream:
        if ev.get('event') != 'on_chat_model_stream':
            continue
        for item in _extract_chunks(ev.get('data') or {}):
            yield item
