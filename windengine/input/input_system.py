"""Named input triggers: groups of key bindings and the callbacks they fire."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

import yaml

from windengine.input.context import InputSystemContext
from windengine.input.keymap import map_string_to_key_action, map_string_to_keycode
from windengine.input.keys import Key

logger = logging.getLogger(__name__)

Callback = Callable[[InputSystemContext], Any]
Bindings = Union[Key, Iterable[Key], None]
Callbacks = Union[Callback, Iterable[Callback], None]


class InputSystemError(Exception):
    """Raised when a trigger is given an empty binding or a missing callback."""


@dataclass
class Trigger:
    """A named group of key bindings and the callbacks they fire."""

    name: str
    bindings: set[Key] = field(default_factory=set)
    callbacks: set[Callback] = field(default_factory=set)


def _as_keys(bindings: Bindings) -> set[Key]:
    if bindings is None:
        return set()
    if isinstance(bindings, Key):
        return {bindings}
    return set(bindings)


def _as_callbacks(callbacks: Callbacks) -> set[Callback]:
    if callbacks is None:
        return set()
    if callable(callbacks):
        return {callbacks}
    return set(callbacks)


def _verify_bindings(bindings: set[Key]) -> None:
    for binding in bindings:
        if not isinstance(binding, Key) or binding == Key():
            raise InputSystemError(f"InputSystemError: binding != Key{{}} ({binding!r})")


def _verify_callbacks(callbacks: set[Any]) -> None:
    for callback in callbacks:
        if callback is None or not callable(callback):
            raise InputSystemError(f"InputSystemError: callback ({callback!r})")


class InputSystem:
    """Keeps triggers by name and the callbacks bound to every key."""

    def __init__(self) -> None:
        self.keycode_triggers: dict[Key, set[Callback]] = {}
        self.grouped_triggers: dict[str, Trigger] = {}
        self.context = InputSystemContext()

    def create_triggers_from_file(self, manager: Any, path: str | Path) -> list[str]:
        """Add the triggers described in a YAML asset; return the names loaded."""
        key = Path(path).as_posix()
        data = manager.get_asset(key)
        if not data:
            logger.error("Failed to open the file %s", key)
            return []
        if isinstance(data, (bytes, bytearray)):
            data = bytes(data).rstrip(b"\0").decode("utf-8")

        config = yaml.safe_load(data)
        triggers = config.get("triggers") if isinstance(config, dict) else None
        if not isinstance(triggers, list):
            logger.error(
                "Can not load actions from file %s. "
                "The 'actions' key is either missing or not a sequence.",
                key,
            )
            return []

        loaded = []
        for node in triggers:
            name = str(node["name"])
            bindings = {
                Key(
                    map_string_to_keycode(str(binding["key"])),
                    map_string_to_key_action(str(binding["action"])),
                )
                for binding in node.get("bindings") or ()
            }
            self.add_trigger(name, bindings)
            logger.debug("Loaded action %s", name)
            loaded.append(name)
        return loaded

    def add_trigger(
        self, group_name: str, bindings: Bindings = None, callbacks: Callbacks = None
    ) -> None:
        """Create or extend the trigger ``group_name`` with bindings and callbacks."""
        keys = _as_keys(bindings)
        funcs = _as_callbacks(callbacks)
        _verify_callbacks(funcs)
        _verify_bindings(keys)

        trigger = self.grouped_triggers.get(group_name)
        if trigger is None:
            self.grouped_triggers[group_name] = Trigger(group_name, set(keys), set(funcs))
        else:
            trigger.bindings |= keys
            trigger.callbacks |= funcs

        for key in keys:
            self.keycode_triggers.setdefault(key, set()).update(funcs)

    def add_trigger_bindings(self, group_name: str, bindings: Bindings) -> None:
        """Bind more keys to an existing trigger; unknown groups are ignored."""
        trigger = self.grouped_triggers.get(group_name)
        if trigger is None:
            return
        keys = _as_keys(bindings)
        trigger.bindings |= keys
        for key in keys:
            self.keycode_triggers.setdefault(key, set()).update(trigger.callbacks)

    def add_trigger_callbacks(self, group_name: str, callbacks: Callbacks) -> None:
        """Add callbacks to an existing trigger; unknown groups are ignored."""
        trigger = self.grouped_triggers.get(group_name)
        if trigger is None:
            return
        funcs = _as_callbacks(callbacks)
        trigger.callbacks |= funcs
        for key in trigger.bindings:
            if key in self.keycode_triggers:
                self.keycode_triggers[key].update(funcs)

    def remove_trigger(self, group_names: str | Iterable[str]) -> None:
        """Remove one trigger or several, unbinding their callbacks from their keys."""
        names = [group_names] if isinstance(group_names, str) else list(group_names)
        for name in names:
            trigger = self.grouped_triggers.pop(name, None)
            if trigger is None:
                continue
            for key in trigger.bindings:
                registered = self.keycode_triggers.get(key)
                if registered is not None:
                    registered -= trigger.callbacks

    def dispatch(self, key: Key) -> int:
        """Call every callback bound to ``key`` with the context; return how many ran."""
        callbacks = list(self.keycode_triggers.get(key, ()))
        for callback in callbacks:
            callback(self.context)
        return len(callbacks)