"""Tests for State construction, callbacks, guards and naming."""

import warnings

import pytest

from oosm import Machine, State, StateNameWarning, new_state


def noop(state, machine, *args):
    return None


# --- Construction ---

def test_new_state_is_empty():
    state = new_state()
    assert isinstance(state, State)
    assert state.name is None
    assert state.on_entering is None
    assert state.on_exiting is None
    assert dict(state.callbacks) == {}


def test_base_callables_become_callbacks():
    state = State({"show": noop})
    assert state.get_callback("show") is noop
    assert state.has_callback("show")


def test_base_values_become_attributes():
    state = State({"score": 3, "label": "game"})
    assert state.score == 3
    assert state.label == "game"
    assert not state.has_callback("score")


def test_base_guard_keys_set_guards():
    enter = lambda s, m, n, o: True
    leave = lambda s, m, n, o: True
    state = State({"on_entering": enter, "on_exiting": leave})
    assert state.on_entering is enter
    assert state.on_exiting is leave
    assert dict(state.callbacks) == {}


def test_base_must_be_mapping():
    with pytest.raises(TypeError):
        State([("show", noop)])
    with pytest.raises(TypeError):
        new_state("show")


def test_base_keys_must_be_strings():
    with pytest.raises(TypeError):
        State({1: noop})


@pytest.mark.parametrize("key", ["name", "callbacks", "set_callback", "_name", "_private"])
def test_base_reserved_keys_rejected(key):
    with pytest.raises(ValueError):
        State({key: 1})


def test_base_guard_must_be_callable():
    with pytest.raises(TypeError):
        State({"on_entering": True})


def test_user_attributes_can_be_set_later():
    state = State()
    state.entered_at = 1.5
    assert state.entered_at == 1.5


# --- Callbacks ---

def test_set_callback_returns_self():
    state = State()
    assert state.set_callback("show", noop) is state


def test_set_callback_replaces():
    first = lambda s, m: 1
    second = lambda s, m: 2
    state = State().set_callback("show", first).set_callback("show", second)
    assert state.get_callback("show") is second


def test_set_callback_none_removes():
    state = State().set_callback("show", noop)
    state.set_callback("show", None)
    assert not state.has_callback("show")
    assert state.get_callback("show") is None


def test_set_callback_none_on_missing_is_fine():
    state = State()
    state.set_callback("missing", None)
    assert dict(state.callbacks) == {}


def test_set_callback_rejects_non_callable():
    with pytest.raises(TypeError):
        State().set_callback("show", "not a function")


def test_set_callback_rejects_non_string_name():
    with pytest.raises(TypeError):
        State().set_callback(42, noop)


def test_callbacks_view_is_read_only():
    state = State().set_callback("show", noop)
    with pytest.raises(TypeError):
        state.callbacks["other"] = noop


def test_callback_named_like_guard_is_plain_callback():
    state = State().set_callback("on_entering_later", noop)
    assert state.on_entering is None
    assert state.has_callback("on_entering_later")


# --- Guards ---

def test_guard_setters_return_self_and_replace():
    enter = lambda s, m, n, o: True
    state = State()
    assert state.set_on_entering(enter) is state
    assert state.set_on_exiting(enter) is state
    assert state.on_entering is enter
    assert state.on_exiting is enter


def test_guard_setters_none_disables():
    state = State().set_on_entering(lambda s, m, n, o: False)
    state.set_on_entering(None)
    assert state.on_entering is None
    assert state._evaluate_entering_guard(Machine(), None, None) is True


def test_guard_setters_reject_non_callable():
    with pytest.raises(TypeError):
        State().set_on_entering(1)
    with pytest.raises(TypeError):
        State().set_on_exiting("no")


def test_missing_guards_allow():
    machine = Machine()
    state = State()
    other = State()
    assert state._evaluate_entering_guard(machine, None, None) is True
    assert state._evaluate_exiting_guard(machine, "other", other) is True


def test_guard_returning_none_allows():
    state = State().set_on_entering(lambda s, m, n, o: None)
    state.set_on_exiting(lambda s, m, n, o: None)
    assert state._evaluate_entering_guard(Machine(), None, None) is True
    assert state._evaluate_exiting_guard(Machine(), "x", State()) is True


def test_guard_result_is_returned():
    state = State().set_on_entering(lambda s, m, n, o: False)
    state.set_on_exiting(lambda s, m, n, o: False)
    assert state._evaluate_entering_guard(Machine(), None, None) is False
    assert state._evaluate_exiting_guard(Machine(), "x", State()) is False


def test_guard_receives_arguments():
    seen = []
    state = State().set_on_entering(lambda *a: seen.append(a))
    machine = Machine()
    other = State()
    state._evaluate_entering_guard(machine, "other", other)
    assert seen == [(state, machine, "other", other)]


# --- Naming ---

def test_assign_name_sets_name():
    state = State()
    state._assign_name("idle")
    assert state.name == "idle"


def test_assign_same_name_twice_is_silent():
    state = State()
    state._assign_name("idle")
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        state._assign_name("idle")
    assert state.name == "idle"


def test_assign_different_name_warns_and_keeps_first():
    state = State()
    state._assign_name("idle")
    with pytest.warns(StateNameWarning, match="idle"):
        state._assign_name("busy")
    assert state.name == "idle"


def test_repr_mentions_name_and_callbacks():
    state = State().set_callback("show", noop)
    state._assign_name("green")
    assert repr(state) == "State(name='green', callbacks=['show'])"
