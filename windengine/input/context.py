"""Current keyboard and mouse state seen by trigger callbacks."""

from __future__ import annotations

from dataclasses import dataclass, field

from windengine.input.keys import Keycode


@dataclass
class KeyboardContext:
    """Keys by state, and the last character typed."""

    pressed_keys: set[Keycode] = field(default_factory=set)
    held_keys: set[Keycode] = field(default_factory=set)
    released_keys: set[Keycode] = field(default_factory=set)
    codepoint: int = 0

    def set_codepoint(self, codepoint: int) -> None:
        self.codepoint = codepoint

    def add_pressed_key(self, keycode: Keycode) -> None:
        self.pressed_keys.add(keycode)

    def add_held_key(self, keycode: Keycode) -> None:
        self.held_keys.add(keycode)

    def add_released_key(self, keycode: Keycode) -> None:
        self.released_keys.add(keycode)

    def remove_codepoint(self) -> None:
        self.codepoint = 0

    def remove_pressed_key(self, keycode: Keycode) -> None:
        self.pressed_keys.discard(keycode)

    def remove_held_key(self, keycode: Keycode) -> None:
        self.held_keys.discard(keycode)

    def remove_released_key(self, keycode: Keycode) -> None:
        self.released_keys.discard(keycode)


@dataclass
class MouseContext:
    """Cursor and scroll positions and buttons by state."""

    cursor_x: float = 0.0
    cursor_y: float = 0.0
    scroll_x: float = 0.0
    scroll_y: float = 0.0
    pressed_buttons: set[Keycode] = field(default_factory=set)
    held_buttons: set[Keycode] = field(default_factory=set)
    released_buttons: set[Keycode] = field(default_factory=set)

    def add_pressed_button(self, keycode: Keycode) -> None:
        self.pressed_buttons.add(keycode)

    def add_held_button(self, keycode: Keycode) -> None:
        self.held_buttons.add(keycode)

    def add_released_button(self, keycode: Keycode) -> None:
        self.released_buttons.add(keycode)

    def remove_pressed_button(self, keycode: Keycode) -> None:
        self.pressed_buttons.discard(keycode)

    def remove_held_button(self, keycode: Keycode) -> None:
        self.held_buttons.discard(keycode)

    def remove_released_button(self, keycode: Keycode) -> None:
        self.released_buttons.discard(keycode)

    def move_cursor(self, x: float, y: float) -> None:
        self.cursor_x = x
        self.cursor_y = y

    def move_scroll(self, x: float, y: float) -> None:
        self.scroll_x = x
        self.scroll_y = y


@dataclass
class InputSystemContext:
    """Keyboard and mouse state handed to trigger callbacks."""

    keyboard: KeyboardContext = field(default_factory=KeyboardContext)
    mouse: MouseContext = field(default_factory=MouseContext)