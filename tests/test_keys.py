import pytest

from windengine.input.keys import (
    Key,
    KeyAction,
    Keycode,
    map_sdl_button_to_keycode,
    map_sdl_key_to_keycode,
)

KEYBOARD_CODES = [
    code
    for code in Keycode
    if code.name.startswith("K_") and code < Keycode.M_BUTTON_LEFT
]

SYNTHETIC_CODES = [
    Keycode.M_BUTTON_LEFT,
    Keycode.M_BUTTON_RIGHT,
    Keycode.M_BUTTON_MIDDLE,
    Keycode.M_MOVE,
    Keycode.M_SCROLL_DOWN,
    Keycode.M_SCROLL_UP,
    Keycode.M_SCROLL,
    Keycode.K_ALL_KEYS,
    Keycode.K_ALL_CHARS,
    Keycode.M_ALL_KEYS,
    Keycode.M_ALL_EVENTS,
    Keycode.ALL_EVENTS,
]


def test_pinned_keycode_values():
    assert map_sdl_key_to_keycode(97) is Keycode.K_A
    assert map_sdl_key_to_keycode(13) is Keycode.K_RETURN
    assert map_sdl_key_to_keycode(127) is Keycode.K_DELETE
    assert map_sdl_key_to_keycode(1073742106) is Keycode.K_SLEEP


def test_mouse_codes_follow_last_keyboard_code():
    assert int(map_sdl_button_to_keycode(1)) == int(Keycode.K_SLEEP) + 1
    assert [int(code) for code in SYNTHETIC_CODES] == list(
        range(Keycode.K_SLEEP + 1, Keycode.K_SLEEP + 1 + len(SYNTHETIC_CODES))
    )


def test_keyboard_codes_map_to_distinct_keycodes():
    mapped = [map_sdl_key_to_keycode(int(code)) for code in KEYBOARD_CODES]
    assert len(set(mapped)) == len(KEYBOARD_CODES)


def test_key_defaults_are_unknown():
    key = Key()
    assert key.keycode is Keycode.UNKNOWN
    assert key.action is KeyAction.UNKNOWN


def test_key_equality_and_hash():
    first = Key(Keycode.K_A, KeyAction.PRESSED)
    second = Key(Keycode.K_A, KeyAction.PRESSED)
    assert first == second
    assert len({first, second}) == 1
    assert Key(Keycode.K_A, KeyAction.HELD) != first
    assert Key(Keycode.K_B, KeyAction.PRESSED) != first


def test_key_is_immutable():
    key = Key(Keycode.K_A, KeyAction.PRESSED)
    with pytest.raises(AttributeError):
        key.keycode = Keycode.K_B  # type: ignore[misc]
    assert key.keycode is Keycode.K_A
    assert key == Key(Keycode.K_A, KeyAction.PRESSED)


@pytest.mark.parametrize("code", KEYBOARD_CODES)
def test_sdl_key_round_trip(code):
    assert map_sdl_key_to_keycode(int(code)) is code


def test_sdl_unknown_key_maps_to_unknown():
    assert map_sdl_key_to_keycode(0) is Keycode.UNKNOWN
    assert map_sdl_key_to_keycode(-5) is Keycode.UNKNOWN
    assert map_sdl_key_to_keycode(65) is Keycode.UNKNOWN


@pytest.mark.parametrize("code", SYNTHETIC_CODES)
def test_sdl_key_does_not_map_synthetic_codes(code):
    assert map_sdl_key_to_keycode(int(code)) is Keycode.UNKNOWN


@pytest.mark.parametrize(
    "button, expected",
    [
        (1, Keycode.M_BUTTON_LEFT),
        (2, Keycode.M_BUTTON_MIDDLE),
        (3, Keycode.M_BUTTON_RIGHT),
    ],
)
def test_sdl_buttons(button, expected):
    assert map_sdl_button_to_keycode(button) is expected


@pytest.mark.parametrize("button", [0, 4, 5, 255])
def test_sdl_unknown_buttons(button):
    assert map_sdl_button_to_keycode(button) is Keycode.UNKNOWN