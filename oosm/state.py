"""State - a named bag of callbacks with optional entry and exit guards."""
from __future__ import annotations

import warnings
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping

from oosm.types import Callback, Guard, StateNameWarning

if TYPE_CHECKING:
    from oosm.machine import Machine


def _check_callable(value: object, what: str) -> None:
    if value is not None and not callable(value):
        raise TypeError(f"Expected {what} to be callable or None, got {type(value).__name__}")


def _guard_result(result: bool | None) -> bool:
    # Forgetting to return counts as allowing the move.
    if result is None:
        return True
    return bool(result)


class State:
    """A bag of named callbacks, activated and deactivated by a Machine.

    Callbacks are invoked as ``callback(state, machine, *args)`` when the
    owning machine runs them while this state is active. Any other
    attribute set on a state is user data and is left alone by the engine::

        game = State().set_callback("keypressed", on_key)
        game.score = 0

    ``base`` pre-populates the state: ``"on_entering"`` and ``"on_exiting"``
    set the guards, other callables become callbacks and everything else
    becomes an attribute.
    """

    def __init__(self, base: Mapping[str, Any] | None = None) -> None:
        self._name: str | None = None
        self._on_entering: Guard | None = None
        self._on_exiting: Guard | None = None
        self._callbacks: dict[str, Callback] = {}

        if base is None:
            return
        if not isinstance(base, Mapping):
            raise TypeError(f"Expected a mapping, got {type(base).__name__}")
        for key, value in base.items():
            if not isinstance(key, str):
                raise TypeError(f"State keys must be strings, got {type(key).__name__}")
            if key == "on_entering":
                self.set_on_entering(value)
            elif key == "on_exiting":
                self.set_on_exiting(value)
            elif key.startswith("_") or hasattr(State, key):
                raise ValueError(f"'{key}' is reserved and cannot be used as a state field")
            elif callable(value):
                self._callbacks[key] = value
            else:
                setattr(self, key, value)

    def __repr__(self) -> str:
        return f"State(name={self._name!r}, callbacks={sorted(self._callbacks)!r})"

    @property
    def name(self) -> str | None:
        """Name given by the first machine this state was added to."""
        return self._name

    @property
    def on_entering(self) -> Guard | None:
        return self._on_entering

    @property
    def on_exiting(self) -> Guard | None:
        return self._on_exiting

    @property
    def callbacks(self) -> Mapping[str, Callback]:
        """Read-only view of the registered callbacks."""
        return MappingProxyType(self._callbacks)

    def set_callback(self, name: str, callback: Callback | None) -> State:
        """Set the callback run on ``name`` while active. ``None`` removes it."""
        if not isinstance(name, str):
            raise TypeError(f"Expected callback name to be str, got {type(name).__name__}")
        _check_callable(callback, "callback")
        if callback is None:
            self._callbacks.pop(name, None)
        else:
            self._callbacks[name] = callback
        return self

    def set_on_entering(self, callback: Guard | None) -> State:
        """Set the guard run when a machine switches to this state.

        The guard receives ``(state, machine, last_name, last_state)`` and
        should return ``True`` to allow the move. Returning ``None`` also
        allows it; ``last_name`` and ``last_state`` are ``None`` on the
        machine's first transition.
        """
        _check_callable(callback, "on_entering")
        self._on_entering = callback
        return self

    def set_on_exiting(self, callback: Guard | None) -> State:
        """Set the guard run when a machine switches away from this state.

        The guard receives ``(state, machine, next_name, next_state)``.
        """
        _check_callable(callback, "on_exiting")
        self._on_exiting = callback
        return self

    def get_callback(self, name: str) -> Callback | None:
        return self._callbacks.get(name)

    def has_callback(self, name: str) -> bool:
        return name in self._callbacks

    # -- called by Machine ---------------------------------------------------

    def _assign_name(self, name: str, stacklevel: int = 2) -> None:
        if self._name is not None and self._name != name:
            # The same state is probably being reused under different names
            # on different machines.
            warnings.warn(
                f"State is already named '{self._name}', not renaming it to '{name}'; "
                "are you accidentally reusing a state under different names?",
                StateNameWarning,
                stacklevel=stacklevel,
            )
            return
        self._name = name

    def _evaluate_entering_guard(
        self, machine: Machine, from_name: str | None, from_state: State | None,
    ) -> bool:
        guard = self._on_entering
        if guard is None:
            return True
        return _guard_result(guard(self, machine, from_name, from_state))

    def _evaluate_exiting_guard(
        self, machine: Machine, to_name: str, to_state: State,
    ) -> bool:
        guard = self._on_exiting
        if guard is None:
            return True
        return _guard_result(guard(self, machine, to_name, to_state))


def new_state(base: Mapping[str, Any] | None = None) -> State:
    """Create a State, optionally pre-populated from ``base``."""
    return State(base)
