import pytest

from hazelengine.keycodes import Key, Mouse


def test_pinned_key_values():
    assert Key(32) is Key.SPACE
    assert Key(65) is Key.A
    assert Key(256) is Key.ESCAPE
    assert Key(348) is Key.MENU


def test_letters_are_contiguous():
    for code in range(ord("A"), ord("Z") + 1):
        assert Key(code).name == chr(code)


def test_digits_match_ascii():
    for digit in range(10):
        assert Key(ord(str(digit))).name == f"D{digit}"


def test_key_lookup_by_value():
    assert Key(342) is Key.LEFT_ALT


def test_unknown_key_value_raises():
    with pytest.raises(ValueError):
        Key(1)


def test_mouse_aliases():
    assert Mouse(0) is Mouse.BUTTON_LEFT
    assert Mouse(1) is Mouse.BUTTON_RIGHT
    assert Mouse(2) is Mouse.BUTTON_MIDDLE
    assert Mouse(7) is Mouse.BUTTON_LAST


def test_mouse_distinct_buttons():
    buttons = {Mouse(value) for value in range(8)}
    assert len(buttons) == 8
    with pytest.raises(ValueError):
        Mouse(8)