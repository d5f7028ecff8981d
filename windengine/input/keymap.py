"""Conversions between key codes, key actions, their names and SDL codes."""

from __future__ import annotations

from windengine.input.keys import (
    Key,
    KeyAction,
    Keycode,
    map_sdl_button_to_keycode,
    map_sdl_key_to_keycode,
)

# SDL event types for keyboard input.
SDL_KEYDOWN = 0x300
SDL_KEYUP = 0x301

# Names whose spelling does not follow from the enum member name.
_SPECIAL_NAMES: dict[Keycode, str] = {
    **{Keycode[f"K_{digit}"]: f"Num{digit}" for digit in range(10)},
    Keycode.K_KBDILLUM_UP: "KbdillumuUp",
}


def _key_name(code: Keycode) -> str:
    special = _SPECIAL_NAMES.get(code)
    if special is not None:
        return special
    return "".join(part.capitalize() for part in code.name[2:].split("_"))


_KEYCODE_NAMES: dict[str, Keycode] = {"Unknown": Keycode.UNKNOWN}
_KEYCODE_NAMES.update(
    (_key_name(code), code)
    for code in Keycode
    if code.name.startswith("K_") and code < Keycode.M_BUTTON_LEFT
)
_NAMES_BY_KEYCODE: dict[Keycode, str] = {code: name for name, code in _KEYCODE_NAMES.items()}

_ACTION_NAMES: dict[str, KeyAction] = {
    "Released": KeyAction.RELEASED,
    "Pressed": KeyAction.PRESSED,
    "Held": KeyAction.HELD,
}
_NAMES_BY_ACTION: dict[KeyAction, str] = {action: name for name, action in _ACTION_NAMES.items()}

_SDL_ACTIONS: dict[int, KeyAction] = {
    SDL_KEYUP: KeyAction.RELEASED,
    SDL_KEYDOWN: KeyAction.PRESSED,
}

_SDLK_UNKNOWN = 0


def map_string_to_key_action(action: str) -> KeyAction:
    """Return the action named ``action``; unknown names give UNKNOWN."""
    return _ACTION_NAMES.get(action, KeyAction.UNKNOWN)


def map_string_to_keycode(name: str) -> Keycode:
    """Return the key code named ``name``; unknown names give UNKNOWN."""
    return _KEYCODE_NAMES.get(name, Keycode.UNKNOWN)


def map_key_action_to_string(action: KeyAction) -> str:
    """Return the configuration name of ``action``."""
    return _NAMES_BY_ACTION.get(action, "Unknown")


def map_keycode_to_string(keycode: Keycode) -> str:
    """Return the configuration name of ``keycode``; codes without one give "Unknown"."""
    return _NAMES_BY_KEYCODE.get(keycode, "Unknown")


def map_sdl_action_to_key_action(action: int) -> KeyAction:
    """Map an SDL keyboard event type to a key action."""
    return _SDL_ACTIONS.get(action, KeyAction.UNKNOWN)


def map_sdl_mouse_code_to_key(button: int, action: int) -> Key:
    """Map an SDL mouse button and event type to a key; unknown buttons give an empty key."""
    keycode = map_sdl_button_to_keycode(button)
    if keycode is Keycode.UNKNOWN:
        return Key()
    return Key(keycode, map_sdl_action_to_key_action(action))


def map_sdl_keyboard_code_to_key(key: int, action: int) -> Key:
    """Map an SDL key code and event type to a key; unknown keys give an empty key."""
    keycode = map_sdl_key_to_keycode(key)
    if keycode is Keycode.UNKNOWN and key != _SDLK_UNKNOWN:
        return Key()
    return Key(keycode, map_sdl_action_to_key_action(action))