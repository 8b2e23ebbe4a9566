from __future__ import annotations

from qrgen.textfield import TextField


def focused(value: str = "", **kwargs) -> TextField:
    field = TextField(**kwargs)
    field.focus()
    field.set_value(value)
    return field


def test_unfocused_field_ignores_keys():
    field = TextField()

    assert field.handle_key("a") is False
    assert field.value == ""


def test_typing_inserts_at_cursor():
    field = focused("helo")
    field.handle_key("left")
    field.handle_key("l")

    assert field.value == "hello"
    assert field.cursor == 4


def test_char_limit_is_enforced():
    field = focused("", char_limit=3)
    for char in "abcd":
        field.handle_key(char)

    assert field.value == "abc"


def test_editing_keys():
    field = focused("hello world")

    field.handle_key("backspace")
    assert field.value == "hello worl"

    field.handle_key("home")
    field.handle_key("delete")
    assert field.value == "ello worl"

    field.handle_key("end")
    assert field.cursor == len(field.value)

    field.handle_key("ctrl+a")
    field.handle_key("ctrl+k")
    assert field.value == ""


def test_ctrl_u_deletes_to_line_start():
    field = focused("abcdef")
    field.cursor = 2

    field.handle_key("ctrl+u")

    assert field.value == "cdef"
    assert field.cursor == 0


def test_unknown_keys_are_not_consumed():
    field = focused("x")

    assert field.handle_key("enter") is False
    assert field.handle_key("tab") is False


def test_tick_blinks_only_while_focused():
    field = focused()
    field.tick()
    assert field.cursor_visible is False

    field.blur()
    field.tick()
    assert field.cursor_visible is False

    field.focus()
    assert field.cursor_visible is True
