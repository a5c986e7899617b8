"""Unit tests for core.render_cache.TranscriptRenderCache."""

from dataclasses import replace

import pytest

from conftest import complete, plain
from core.markdown import MarkdownRenderer
from models.transcript import Transcript


def fresh_render(entries, width, styles):
    """Render ``entries`` through a transcript that has never rendered before."""
    other = Transcript(MarkdownRenderer("monokai", styles))
    for entry in entries:
        complete(other, entry.prompt, entry.response, entry.reasoning, entry.error)
    return other.render(width)


def test_empty_transcript_renders_nothing(transcript):
    assert transcript.render(80) == ""


def test_render_is_idempotent(transcript):
    complete(transcript, "what is 2+2?", "**4**")
    first = transcript.render(80)
    assert transcript.render(80) == first
    assert transcript.render(80) == first


def test_incremental_equals_full(transcript, styles):
    complete(transcript, "first", "one")
    before = transcript.render(72)

    entry = complete(transcript, "second", "two\n\n- a\n- b")
    after = transcript.render(72)

    assert after == before + transcript.cache.render_entry(entry, 72)
    assert after == fresh_render(transcript.entries, 72, styles)


def test_only_new_entries_are_rendered(transcript, monkeypatch):
    for i in range(3):
        complete(transcript, f"p{i}", f"r{i}")
    transcript.render(80)

    rendered = []
    original = transcript.cache.render_entry

    def spy(entry, width):
        rendered.append(entry.prompt)
        return original(entry, width)

    monkeypatch.setattr(transcript.cache, "render_entry", spy)
    complete(transcript, "p3", "r3")
    transcript.render(80)
    transcript.render(80)

    assert rendered == ["p3"]
    assert transcript.cache.rendered_count == 4


def test_resize_round_trip(transcript, styles):
    complete(transcript, "explain", "A fairly long answer " * 10)
    complete(transcript, "and?", "```python\nprint('x')\n```")

    at_80 = transcript.render(80)
    at_50 = transcript.render(50)
    assert at_50 != at_80
    assert transcript.render(80) == at_80
    assert at_80 == fresh_render(transcript.entries, 80, styles)


def test_in_flight_content_never_enters_the_cache(transcript):
    complete(transcript, "done", "finished answer")
    base = transcript.render(80)

    transcript.add_prompt("streaming now")
    transcript.stream.append("partial", 'response')
    live = transcript.render(80)

    assert live.startswith(base)
    assert "partial" in plain(live)
    assert transcript.cache.buffer == base
    assert transcript.cache.rendered_count == 1

    # rendering again while streaming gives the same thing
    assert transcript.render(80) == live


def test_in_flight_prompt_shows_before_any_chunk(transcript, markdown):
    transcript.add_prompt("hello")
    assert transcript.render(80) == markdown.render_prompt("hello", 80)
    assert transcript.cache.buffer == ""


def test_preview_switches_from_reasoning_to_response(transcript):
    transcript.add_prompt("hello")
    transcript.stream.append("thinking...", 'reasoning')
    assert "thinking..." in plain(transcript.render(80))

    transcript.stream.append("Hi", 'response')
    shown = plain(transcript.render(80))
    assert "Hi" in shown
    assert "thinking..." not in shown


def test_completion_folds_entry_into_cache(transcript):
    transcript.add_prompt("hello")
    transcript.stream.append("Hi there", 'response')
    live = transcript.render(80)

    entry = transcript.add_response()
    final = transcript.render(80)

    assert transcript.cache.rendered_count == 1
    assert final == transcript.cache.render_entry(entry, 80)
    assert plain(final) == plain(live)


def test_resize_while_streaming(transcript, styles):
    complete(transcript, "first", "one")
    transcript.render(80)
    transcript.add_prompt("second")
    transcript.stream.append("partial", 'response')

    narrow = transcript.render(40)
    assert narrow.startswith(fresh_render(transcript.entries[:1], 40, styles))
    assert transcript.cache.last_width == 40

    transcript.add_response()
    assert transcript.render(40) == fresh_render(transcript.entries, 40, styles)


def test_error_renders_after_response(transcript, markdown):
    entry = complete(transcript, "q", "partial answer", error="**Error:** connection reset")
    rendered = transcript.render(80)

    shown = plain(rendered)
    assert shown.index("partial answer") < shown.index("connection reset")
    assert rendered.endswith(markdown.render(entry.error, 80, style=markdown.styles.error))


def test_no_placeholder_for_empty_response(transcript, markdown):
    complete(transcript, "silent", "")
    assert transcript.render(80) == markdown.render_prompt("silent", 80)


@pytest.mark.parametrize("show", [False, True])
def test_completed_reasoning_follows_setting(show, styles):
    transcript = Transcript(MarkdownRenderer("monokai", replace(styles, show_reasoning=show)))
    complete(transcript, "hello", "Hi there", reasoning="thinking...")

    shown = plain(transcript.render(80))
    assert ("thinking..." in shown) is show
    assert "Hi there" in shown
    if show:
        assert shown.index("thinking...") < shown.index("Hi there")
