"""Machine - owns named states and mediates every transition between them."""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Mapping

from oosm.state import State
from oosm.types import (
    DuplicateStateError,
    InitialStateError,
    RollbackError,
    UnknownStateError,
)

logger = logging.getLogger(__name__)


class Machine:
    """Finite state machine with exactly one active state at a time.

    States are registered under unique names with ``add_state`` and
    activated with ``swap_state``. ``run`` forwards a named call to the
    active state's callback. A state may be registered in several machines,
    but always under the same name.

    ``current`` activates one of ``states`` immediately, without running its
    entry guard.
    """

    def __init__(
        self,
        states: Mapping[str, State] | None = None,
        current: State | None = None,
    ) -> None:
        self._states: dict[str, State] = {}
        self._current: State | None = None
        self._current_name: str | None = None

        if states is not None:
            if not isinstance(states, Mapping):
                raise TypeError(f"Expected states to be a mapping, got {type(states).__name__}")
            for name, state in states.items():
                self._add(name, state)

        if current is not None:
            for name, state in self._states.items():
                if state is current:
                    self._current = state
                    self._current_name = name
                    break
            else:
                raise ValueError("current must be one of the machine's states")

    def __repr__(self) -> str:
        return f"Machine(states={list(self._states)!r}, current={self._current_name!r})"

    def __contains__(self, name: object) -> bool:
        return name in self._states

    def __len__(self) -> int:
        return len(self._states)

    @property
    def states(self) -> Mapping[str, State]:
        return MappingProxyType(self._states)

    @property
    def current(self) -> State | None:
        """The active state, or ``None`` before the first transition."""
        return self._current

    @property
    def current_name(self) -> str | None:
        return self._current_name

    def add_state(self, name: str, state: State) -> Machine:
        """Register ``state`` under ``name``. Returns self for chaining.

        Raises DuplicateStateError if ``name`` is already registered. Adding
        a state that another machine already named differently only warns;
        the state keeps its first name.
        """
        return self._add(name, state)

    def _add(self, name: str, state: State) -> Machine:
        if not isinstance(name, str):
            raise TypeError(f"Expected name to be str, got {type(name).__name__}")
        if not isinstance(state, State):
            raise TypeError(f"Expected a State, got {type(state).__name__}")
        if name in self._states:
            raise DuplicateStateError(name)
        # Warnings point past _add and its public caller to user code.
        state._assign_name(name, stacklevel=4)
        self._states[name] = state
        logger.debug(f"Added state '{name}'")
        return self

    def remove_state(self, name: str) -> State:
        """Drop the state registered under ``name`` and return it.

        The active state cannot be removed.
        """
        state = self._states.get(name)
        if state is None:
            raise UnknownStateError(name)
        if state is self._current:
            raise ValueError(f"Cannot remove the active state '{name}'")
        del self._states[name]
        logger.debug(f"Removed state '{name}'")
        return state

    def swap_state(self, name: str) -> bool:
        """Switch to the state registered under ``name``.

        The move only happens when the active state's exit guard and the
        target's entry guard both allow it. If the target refuses entry, the
        former state's entry guard runs again (with the target as the "last"
        state) to take it back; if it refuses too, RollbackError is raised.
        Returns ``False`` when the machine stayed where it was. A target that
        a guard removes from the machine mid-swap counts as refusing entry.

        Swapping to the active state does nothing and returns ``True``. On
        the very first swap there is nothing to fall back to, so a refusing
        entry guard raises InitialStateError.
        """
        target = self._states.get(name)
        if target is None:
            raise UnknownStateError(name)
        former = self._current
        former_name = self._current_name

        if former is None:
            if not target._evaluate_entering_guard(self, None, None):
                logger.error(f"Initial state '{name}' refused entry")
                raise InitialStateError(name)
            if not self._registered(name, target):
                logger.error(f"Initial state '{name}' was removed while entering it")
                raise UnknownStateError(name)
            self._set_current(target, name)
            logger.debug(f"Entered initial state '{name}'")
            return True

        if former is target:
            return True

        if not former._evaluate_exiting_guard(self, name, target):
            logger.debug(f"'{former_name}' refused to exit to '{name}'")
            return False

        entered = target._evaluate_entering_guard(self, former.name, former)
        # A guard may have removed or replaced the target meanwhile.
        if entered and self._registered(name, target):
            self._set_current(target, name)
            logger.debug(f"Swapped '{former_name}' -> '{name}'")
            return True

        logger.debug(f"'{name}' could not be entered from '{former_name}', re-entering '{former_name}'")
        if not former._evaluate_entering_guard(self, name, target):
            logger.error(f"'{former_name}' refused re-entry after '{name}' refused entry")
            raise RollbackError(former_name, name)
        return False

    def run(self, callback_name: str, *args: Any, **kwargs: Any) -> tuple[bool, Any]:
        """Run ``callback_name`` on the active state if it has one.

        Returns ``(True, result)`` when the callback ran, ``(False, None)``
        when there is no active state or it lacks the callback. Several
        return values come back as a tuple in ``result``.
        """
        state = self._current
        if state is None:
            return False, None
        callback = state.get_callback(callback_name)
        if callback is None:
            return False, None
        return True, callback(state, self, *args, **kwargs)

    def _registered(self, name: str, state: State) -> bool:
        return self._states.get(name) is state

    def _set_current(self, state: State, name: str) -> None:
        self._current = state
        self._current_name = name


def new_machine(
    states: Mapping[str, State] | None = None,
    current: State | None = None,
) -> Machine:
    """Create a Machine, optionally pre-populated with ``states``."""
    return Machine(states, current)
