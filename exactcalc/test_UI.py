# test_UI.py
# Module-level tables only; building widgets needs a display.

import pytest

UI = pytest.importorskip("exactcalc.UI")


def button_texts():
    return [text for text, row, col in UI.BUTTON_LAYOUT]


def test_clipboard_button_starts_as_paste():
    # Without Shift the button pastes, so that is its first label
    assert (UI.PASTE, 0, 1) in UI.BUTTON_LAYOUT
    assert UI.COPY not in button_texts()


def test_button_grid_is_complete():
    positions = [(row, col) for text, row, col in UI.BUTTON_LAYOUT]
    assert len(set(positions)) == 35
    assert len(set(button_texts())) == 35


def test_setting_choices_match_engine_options():
    from exactcalc import Formatter, Scanner

    assert tuple(UI.SETTING_CHOICES["output_format"]) == Formatter.OUTPUT_FORMATS
    assert tuple(UI.SETTING_CHOICES["decimal_separator"]) == Scanner.DECIMAL_SEPARATORS
