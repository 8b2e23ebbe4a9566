from __future__ import annotations

import asyncio

import pytest

from qrgen.app import QRGenApp, translate_key
from qrgen.config import AppConfig
from qrgen.state import Step
from qrgen.wizard import Wizard


@pytest.mark.parametrize(
    "key, character, printable, expected",
    [
        ("escape", None, False, "esc"),
        ("space", " ", True, " "),
        ("a", "a", True, "a"),
        ("tilde", "~", True, "~"),
        ("shift+tab", None, False, "shift+tab"),
        ("ctrl+h", None, False, "backspace"),
        ("enter", "\r", False, "enter"),
        ("ctrl+c", None, False, "ctrl+c"),
    ],
)
def test_translate_key(key, character, printable, expected):
    assert translate_key(key, character, printable) == expected


def test_app_forwards_keys_to_wizard(tmp_path):
    wizard = Wizard(AppConfig(), picker_dir=str(tmp_path), cwd=str(tmp_path))
    app = QRGenApp(wizard)

    async def scenario():
        async with app.run_test() as pilot:
            await pilot.press("enter")
            await pilot.press("h", "i")
            await pilot.pause()
            assert wizard.step is Step.URL
            assert wizard.state.url_input.value == "hi"
            await pilot.press("ctrl+c")
            await pilot.pause()

    asyncio.run(scenario())

    assert wizard.quitting
    assert app.return_value == 0
