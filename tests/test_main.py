"""Startup and the non-interactive mode of ``app.main``."""

import io
import sys

import pytest

import app
from conftest import FakeLLM


@pytest.fixture
def startup(tmp_path, monkeypatch, fresh_logging):
    monkeypatch.setenv('STREAMCHAT_LOG_FILE', str(tmp_path / "streamchat.log"))
    monkeypatch.delenv('STREAMCHAT_MODEL', raising=False)
    monkeypatch.delenv('STREAMCHAT_STYLE', raising=False)


def pipe(monkeypatch, text: str) -> None:
    monkeypatch.setattr(sys, 'stdin', io.StringIO(text))


def use_llm(monkeypatch, llm) -> None:
    monkeypatch.setattr(app, 'init_llm_client', lambda config: llm)


def test_unknown_code_style_is_fatal(startup, capsys):
    assert app.main(['4.1', '-s', 'no-such-style']) == 1
    assert "unknown code style" in capsys.readouterr().err


def test_unknown_model_is_fatal(startup, capsys):
    assert app.main(['gpt-17']) == 1
    err = capsys.readouterr().err
    assert "invalid model name 'gpt-17'" in err
    assert "sonnet-4" in err


def test_invalid_option_value_is_a_usage_error(startup, capsys):
    assert app.main(['4.1', '-t', '0']) == 2
    assert "max tokens" in capsys.readouterr().err


def test_piped_prompt_prints_the_answer(startup, monkeypatch, capsys, hello_script):
    llm = FakeLLM(hello_script)
    use_llm(monkeypatch, llm)
    pipe(monkeypatch, "  what is up?\n")

    assert app.main(['4.1']) == 0
    assert llm.prompts == ["what is up?"]
    assert capsys.readouterr().out == "Hi there\n"


def test_piped_prompt_failure_exits_non_zero(startup, monkeypatch, capsys):
    use_llm(monkeypatch, FakeLLM(fail=RuntimeError("quota exceeded")))
    pipe(monkeypatch, "hello")

    assert app.main(['4.1']) == 1
    assert "quota exceeded" in capsys.readouterr().err


def test_empty_pipe_sends_nothing(startup, monkeypatch, hello_script):
    llm = FakeLLM(hello_script)
    use_llm(monkeypatch, llm)
    pipe(monkeypatch, "\n")

    assert app.main(['4.1']) == 0
    assert llm.prompts == []


def test_force_interactive_without_a_terminal(startup, monkeypatch, capsys, hello_script):
    use_llm(monkeypatch, FakeLLM(hello_script))
    pipe(monkeypatch, "hello")

    def no_tty(path, flags):
        raise OSError(6, "No such device or address", path)

    monkeypatch.setattr(app.os, 'open', no_tty)

    assert app.main(['4.1', '--force-interactive']) == 1
    assert "no terminal" in capsys.readouterr().err
