"""Shared types for fsm-factory."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Hashable

State = Hashable
TransitionName = Hashable
Action = Callable[..., Any]
TransitionTable = dict[TransitionName, dict[State, "TransitionEntry"]]


@dataclass(frozen=True)
class TransitionEntry:
    """Destination reachable from one ``(name, from_state)`` cell.

    Attributes:
        to_state: State the machine moves to when the transition fires.
        action: Called with the arguments given to the transition callable.
    """

    to_state: State
    action: Action
