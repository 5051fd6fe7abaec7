"""Tests for the terminal rendering helpers and console notices."""

from unittest.mock import MagicMock, patch

import pytest

from pdfdrop.client import UploadOutcome
from pdfdrop.notices import ConsoleNotifier, INVALID_PDF
from pdfdrop.state import SelectedFile, SelectionState
from pdfdrop.ui import (
    console,
    format_size,
    render_actions,
    render_alert,
    render_outcomes,
    render_selection,
)
from pdfdrop.ui.theme import ColorPalette


def _file(name="a.pdf", size=10):
    return SelectedFile(name=name, mime_type="application/pdf", data=b"x" * size)


class TestColorPalette:
    def test_frozen(self):
        p = ColorPalette()
        try:
            p.error = "#ffffff"
            assert False, "should be frozen"
        except AttributeError:
            pass


def test_format_size():
    assert format_size(0) == "0 B"
    assert format_size(1023) == "1023 B"
    assert format_size(2048) == "2.0 KB"
    assert format_size(5 * 1024 * 1024) == "5.0 MB"


def test_render_selection_lists_names():
    state = SelectionState.unset().append(_file("a.pdf")).append(_file("b.pdf", 2048))
    with console.capture() as capture:
        render_selection(state)
    out = capture.get()
    assert "a.pdf" in out
    assert "b.pdf" in out
    assert "2.0 KB" in out


def test_render_selection_unset():
    with console.capture() as capture:
        render_selection(SelectionState.unset())
    assert "No file selected" in capture.get()


def test_render_actions():
    with console.capture() as capture:
        render_actions(False, False)
    out = capture.get()
    assert "[cancel]" in out
    assert "[upload]" in out


def test_render_outcomes_verbose():
    outcomes = [
        UploadOutcome(file=_file("a.pdf"), urls=["http://cdn/a.pdf"]),
        UploadOutcome(file=_file("b.pdf"), error="too big"),
    ]
    with console.capture() as capture:
        render_outcomes(outcomes, verbose=True)
    out = capture.get()
    assert "http://cdn/a.pdf" in out
    assert "too big" in out
    assert "1/2 uploaded" in out


def test_render_outcomes_only_reports_failures():
    outcomes = [
        UploadOutcome(file=_file("a.pdf"), urls=["http://cdn/a.pdf"]),
        UploadOutcome(file=_file("b.pdf"), error="too big"),
    ]
    with console.capture() as capture:
        render_outcomes(outcomes)
    out = capture.get()
    assert "too big" in out
    assert "a.pdf" not in out
    assert "uploaded" not in out


def test_render_outcomes_all_ok_prints_nothing():
    with console.capture() as capture:
        render_outcomes([UploadOutcome(file=_file("a.pdf"), urls=["u"])])
    assert capture.get() == ""


def test_render_outcomes_empty():
    with console.capture() as capture:
        render_outcomes([])
    assert capture.get() == ""


def test_render_alert():
    with console.capture() as capture:
        render_alert(INVALID_PDF)
    assert INVALID_PDF in capture.get()


class TestConsoleNotifier:
    def test_waits_for_confirmation(self):
        prompt = MagicMock(return_value="")
        notifier = ConsoleNotifier(confirm=True, prompt_fn=prompt)
        with patch("pdfdrop.notices.render_alert") as mock_render:
            notifier.alert("hello")
        mock_render.assert_called_once_with("hello")
        prompt.assert_called_once()

    def test_no_confirmation(self):
        prompt = MagicMock()
        notifier = ConsoleNotifier(confirm=False, prompt_fn=prompt)
        with patch("pdfdrop.notices.render_alert"):
            notifier.alert("hello")
        prompt.assert_not_called()

    def test_eof_while_waiting(self):
        notifier = ConsoleNotifier(confirm=True, prompt_fn=MagicMock(side_effect=EOFError))
        with patch("pdfdrop.notices.render_alert"):
            notifier.alert("hello")

    def test_interrupt_while_waiting_propagates(self):
        notifier = ConsoleNotifier(confirm=True, prompt_fn=MagicMock(side_effect=KeyboardInterrupt))
        with patch("pdfdrop.notices.render_alert"):
            with pytest.raises(KeyboardInterrupt):
                notifier.alert("hello")
