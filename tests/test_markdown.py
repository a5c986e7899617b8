"""Unit tests for core.markdown.MarkdownRenderer."""

import pytest

from conftest import plain
from core.config import ChatStyles
from core.markdown import MarkdownRenderer, RendererConstructionError


def test_unknown_code_style_is_fatal():
    with pytest.raises(RendererConstructionError):
        MarkdownRenderer("no-such-pygments-style")


def test_invalid_text_style_is_fatal():
    with pytest.raises(RendererConstructionError):
        MarkdownRenderer("monokai", ChatStyles(error="not a ][ style"))


def test_console_is_reused_at_a_stable_width(markdown):
    first = markdown.get_or_create(80)
    assert markdown.get_or_create(80) is first
    markdown.render("some *text*", 80)
    markdown.render_prompt("a prompt", 80)
    assert markdown.builds == 1


def test_console_rebuilt_on_width_change(markdown):
    first = markdown.get_or_create(80)
    second = markdown.set_width(60)
    assert second is not first
    assert markdown.width == 60
    assert markdown.get_or_create(60) is second
    assert markdown.builds == 2


def test_empty_input_renders_nothing(markdown):
    assert markdown.render("", 80) == ""
    assert markdown.render_prompt("", 80) == ""


def test_render_formats_markdown(markdown):
    out = markdown.render("# Title\n\nsome **bold** text", 80)
    assert "\x1b[" in out
    text = plain(out)
    assert "Title" in text
    assert "bold" in text
    assert "**" not in text


def test_render_wraps_to_response_column(markdown, styles):
    long_text = " ".join(["word"] * 100)
    lines = plain(markdown.render(long_text, 70)).splitlines()
    assert len(lines) > 1
    assert all(len(line) <= styles.response_width(70) for line in lines)


def test_render_failure_returns_raw_text(markdown, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("formatter exploded")

    monkeypatch.setattr(markdown, "_print", boom)
    assert markdown.render("# raw *markdown*", 80) == "# raw *markdown*"
    assert markdown.render_prompt("raw prompt", 80) == "raw prompt\n"


def test_prompt_is_right_aligned(markdown):
    lines = [line for line in plain(markdown.render_prompt("hi", 40)).splitlines() if line.strip()]
    assert len(lines) == 1
    assert lines[0].rstrip().endswith("hi")
    assert lines[0].startswith(" " * 10)


def test_output_is_deterministic(markdown):
    text = "see [the docs](https://example.com) and `code`"
    assert markdown.render(text, 80) == markdown.render(text, 80)
