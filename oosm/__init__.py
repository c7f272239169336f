"""oosm - Small embeddable finite state machines built from callback bags."""
from __future__ import annotations

import logging

from oosm.machine import Machine, new_machine
from oosm.state import State, new_state
from oosm.types import (
    Callback,
    DuplicateStateError,
    Guard,
    InitialStateError,
    OosmError,
    RollbackError,
    StateNameWarning,
    TransitionError,
    UnknownStateError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Machine",
    "State",
    "new_machine",
    "new_state",
    "Callback",
    "Guard",
    "OosmError",
    "UnknownStateError",
    "DuplicateStateError",
    "TransitionError",
    "InitialStateError",
    "RollbackError",
    "StateNameWarning",
]
