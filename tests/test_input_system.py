import pytest

from windengine.input.context import InputSystemContext
from windengine.input.input_system import InputSystem, InputSystemError, Trigger
from windengine.input.keys import Key, KeyAction, Keycode

JUMP = Key(Keycode.K_SPACE, KeyAction.PRESSED)
FIRE = Key(Keycode.K_F, KeyAction.PRESSED)


class _Assets:
    def __init__(self, data):
        self.data = data
        self.requested = []

    def get_asset(self, key):
        self.requested.append(key)
        return self.data


def _recorder():
    calls = []

    def callback(context):
        calls.append(context)

    return calls, callback


def test_dispatch_calls_bound_callback_with_context():
    system = InputSystem()
    calls, callback = _recorder()
    system.add_trigger("jump", JUMP, callback)
    assert system.dispatch(JUMP) == 1
    assert calls == [system.context]
    assert isinstance(calls[0], InputSystemContext)


def test_dispatch_unbound_key_calls_nothing():
    system = InputSystem()
    calls, callback = _recorder()
    system.add_trigger("jump", JUMP, callback)
    assert system.dispatch(FIRE) == 0
    assert calls == []


def test_empty_binding_is_rejected():
    system = InputSystem()
    with pytest.raises(InputSystemError):
        system.add_trigger("jump", Key(), lambda ctx: None)
    assert "jump" not in system.grouped_triggers


def test_missing_callback_is_rejected():
    system = InputSystem()
    with pytest.raises(InputSystemError):
        system.add_trigger("jump", JUMP, [None])


def test_group_only_trigger_has_no_bindings():
    system = InputSystem()
    system.add_trigger("menu")
    assert system.grouped_triggers["menu"] == Trigger("menu")
    assert system.keycode_triggers == {}


def test_add_trigger_merges_into_existing_group():
    system = InputSystem()
    _, first = _recorder()
    _, second = _recorder()
    system.add_trigger("act", JUMP, first)
    system.add_trigger("act", {FIRE}, [second])
    trigger = system.grouped_triggers["act"]
    assert trigger.bindings == {JUMP, FIRE}
    assert trigger.callbacks == {first, second}
    assert system.keycode_triggers[FIRE] == {second}
    assert system.keycode_triggers[JUMP] == {first}


def test_add_trigger_bindings_fires_existing_callbacks():
    system = InputSystem()
    calls, callback = _recorder()
    system.add_trigger("act", JUMP, callback)
    system.add_trigger_bindings("act", FIRE)
    assert system.dispatch(FIRE) == 1
    assert system.grouped_triggers["act"].bindings == {JUMP, FIRE}
    assert len(calls) == 1


def test_add_trigger_bindings_unknown_group_is_ignored():
    system = InputSystem()
    system.add_trigger_bindings("missing", FIRE)
    assert system.grouped_triggers == {}
    assert system.keycode_triggers == {}


def test_add_trigger_callbacks_reaches_bound_keys():
    system = InputSystem()
    system.add_trigger("act", [JUMP, FIRE])
    calls, callback = _recorder()
    system.add_trigger_callbacks("act", callback)
    assert system.dispatch(JUMP) == 1
    assert system.dispatch(FIRE) == 1
    assert len(calls) == 2
    assert system.grouped_triggers["act"].callbacks == {callback}


def test_remove_trigger_unbinds_callbacks():
    system = InputSystem()
    calls, callback = _recorder()
    _, other = _recorder()
    system.add_trigger("jump", JUMP, callback)
    system.add_trigger("also", JUMP, other)
    system.remove_trigger("jump")
    assert "jump" not in system.grouped_triggers
    assert system.keycode_triggers[JUMP] == {other}
    system.dispatch(JUMP)
    assert calls == []


def test_remove_several_triggers_and_unknown_names():
    system = InputSystem()
    system.add_trigger("a", JUMP, lambda ctx: None)
    system.add_trigger("b", FIRE, lambda ctx: None)
    system.add_trigger("c")
    system.remove_trigger({"a", "b", "nothing"})
    assert set(system.grouped_triggers) == {"c"}
    assert system.dispatch(JUMP) == 0
    assert system.dispatch(FIRE) == 0


def test_create_triggers_from_file():
    document = (
        "triggers:\n"
        "  - name: jump\n"
        "    bindings:\n"
        "      - key: Space\n"
        "        action: Pressed\n"
        "      - key: W\n"
        "        action: Held\n"
        "  - name: quit\n"
        "    bindings:\n"
        "      - key: Escape\n"
        "        action: Released\n"
    ).encode("utf-8")
    assets = _Assets(document)
    system = InputSystem()
    assert system.create_triggers_from_file(assets, "input/triggers.yaml") == ["jump", "quit"]
    assert assets.requested == ["input/triggers.yaml"]
    assert system.grouped_triggers["jump"].bindings == {
        Key(Keycode.K_SPACE, KeyAction.PRESSED),
        Key(Keycode.K_W, KeyAction.HELD),
    }
    assert Key(Keycode.K_ESCAPE, KeyAction.RELEASED) in system.keycode_triggers


def test_create_triggers_missing_asset():
    system = InputSystem()
    assert system.create_triggers_from_file(_Assets(None), "absent.yaml") == []
    assert system.grouped_triggers == {}


def test_create_triggers_without_sequence():
    system = InputSystem()
    assert system.create_triggers_from_file(_Assets(b"triggers: 3\n"), "bad.yaml") == []
    assert system.grouped_triggers == {}


def test_create_triggers_with_unknown_key_raises():
    document = b"triggers:\n  - name: x\n    bindings:\n      - key: Nope\n        action: Nope\n"
    system = InputSystem()
    with pytest.raises(InputSystemError):
        system.create_triggers_from_file(_Assets(document), "bad.yaml")