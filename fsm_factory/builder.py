"""TransitionTableBuilder - collects transitions and compiles machines."""
from __future__ import annotations

import logging
from typing import Callable, Iterable

from fsm_factory.machine import StateMachine
from fsm_factory.types import Action, State, TransitionEntry, TransitionName, TransitionTable

logger = logging.getLogger(__name__)


class TransitionTableBuilder:
    """Accumulates ``(name, from_state) -> (to_state, action)`` cells.

    Registration never validates. A later registration for the same cell
    overwrites the earlier one, and a name registered with no source states
    still gets a callable on every machine built afterwards.
    """

    def __init__(self) -> None:
        self._transitions: TransitionTable = {}

    def register_transition(
        self,
        name: TransitionName,
        from_state: State,
        to_state: State,
        action: Action,
    ) -> None:
        """Register a single transition. Overwrites if the cell exists."""
        self.register_transitions([name], [from_state], to_state, action)

    def register_transitions(
        self,
        names: Iterable[TransitionName],
        from_states: Iterable[State],
        to_state: State,
        action: Action,
    ) -> None:
        """Register every ``(name, from_state)`` pair of the cross product.

        All pairs share *to_state* and *action*.
        """
        states = list(from_states)
        for name in names:
            cells = self._transitions.setdefault(name, {})
            for state in states:
                cells[state] = TransitionEntry(to_state, action)

    def build(
        self,
        initial_state: State,
        on_transition: Callable[[TransitionName, State, State], None] | None = None,
    ) -> StateMachine:
        """Return a new machine in *initial_state* over a frozen copy of the table.

        ``on_transition(name, old_state, new_state)`` fires after the state
        changes and before the action runs.
        """
        logger.debug(
            "building machine in %r with %d transition name(s)",
            initial_state, len(self._transitions),
        )
        return StateMachine(self.table(), initial_state, on_transition)

    def names(self) -> list[TransitionName]:
        """List all registered transition names."""
        return list(self._transitions)

    def has(self, name: TransitionName, from_state: State) -> bool:
        """Check if a transition is registered for *name* from *from_state*."""
        return from_state in self._transitions.get(name, {})

    def entry(self, name: TransitionName, from_state: State) -> TransitionEntry:
        """Look up a cell. Raises KeyError if not registered."""
        if not self.has(name, from_state):
            raise KeyError((name, from_state))
        return self._transitions[name][from_state]

    def table(self) -> TransitionTable:
        """Return a copy of the transition table."""
        return {name: dict(cells) for name, cells in self._transitions.items()}


def create_builder() -> TransitionTableBuilder:
    """Return an empty builder."""
    return TransitionTableBuilder()
