"""Shared type aliases, errors and warnings for oosm."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from oosm.machine import Machine
    from oosm.state import State

Callback = Callable[..., Any]
"""Invoked as ``callback(state, machine, *args, **kwargs)``."""

Guard = Callable[["State", "Machine", "str | None", "State | None"], "bool | None"]
"""Invoked as ``guard(state, machine, other_name, other_state)``.

Returning ``None`` counts as allowing the transition.
"""


class OosmError(Exception):
    """Base class for unrecoverable machine errors."""


class UnknownStateError(OosmError, KeyError):
    """Raised when a state name is not registered in the machine."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"State '{name}' does not exist")


class DuplicateStateError(OosmError, KeyError):
    """Raised when registering a name that is already taken."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"State '{name}' already exists; "
            "are you sure your names are unique/you didn't insert twice?"
        )


class TransitionError(OosmError, RuntimeError):
    """Raised when a transition leaves the machine without a usable state."""

    def __init__(self, from_name: str | None, to_name: str, message: str) -> None:
        self.from_name = from_name
        self.to_name = to_name
        super().__init__(message)


class InitialStateError(TransitionError):
    """The first state's entry guard rejected, with nothing to fall back to."""

    def __init__(self, to_name: str) -> None:
        super().__init__(None, to_name, f"Could not set '{to_name}' as the initial state")


class RollbackError(TransitionError):
    """The former state refused re-entry after the target rejected entry."""

    def __init__(self, from_name: str | None, to_name: str) -> None:
        super().__init__(
            from_name,
            to_name,
            f"Reached an invalid state attempting to switch from '{from_name}' to '{to_name}'",
        )


class StateNameWarning(UserWarning):
    """A named state was registered again under a different name."""
