"""StateMachine - runtime compiled from a TransitionTableBuilder."""
from __future__ import annotations

import logging
from typing import Any, Callable

from fsm_factory.types import State, TransitionName, TransitionTable

logger = logging.getLogger(__name__)


class StateMachine:
    """Live machine with one dispatch callable per registered transition name.

    Callables are reachable as attributes (``machine.focus()``), as items
    (``machine["focus"]()``) or through :meth:`send`. Dispatching a name with
    no entry for the current state does nothing.

    The current state changes only through dispatch. It is updated before
    the action runs, so an action that dispatches again on the same machine
    sees the new state.
    """

    def __init__(
        self,
        transitions: TransitionTable,
        initial_state: State,
        on_transition: Callable[[TransitionName, State, State], None] | None = None,
    ) -> None:
        self._transitions = transitions
        self._state = initial_state
        self._on_transition = on_transition
        self._dispatchers: dict[TransitionName, Callable[..., None]] = {
            name: self._make_dispatcher(name) for name in transitions
        }

    @property
    def current_state(self) -> State:
        return self._state

    def _make_dispatcher(self, name: TransitionName) -> Callable[..., None]:
        def dispatch(*args: Any, **kwargs: Any) -> None:
            entry = self._transitions[name].get(self._state)
            if entry is None:
                logger.debug("%r ignored in state %r", name, self._state)
                return
            old = self._state
            self._state = entry.to_state
            logger.debug("%r: %r -> %r", name, old, entry.to_state)
            if self._on_transition is not None:
                self._on_transition(name, old, entry.to_state)
            entry.action(*args, **kwargs)

        dispatch.__name__ = str(name)
        return dispatch

    def send(self, name: TransitionName, *args: Any, **kwargs: Any) -> None:
        """Dispatch *name* with the given arguments.

        Raises KeyError if the name was never registered.
        """
        self[name](*args, **kwargs)

    def can(self, name: TransitionName) -> bool:
        """Check if dispatching *name* now would fire a transition."""
        return self._state in self._transitions.get(name, {})

    def available(self) -> list[TransitionName]:
        """Return the names that would fire from the current state."""
        return [name for name, cells in self._transitions.items() if self._state in cells]

    def names(self) -> list[TransitionName]:
        """List all names that have a dispatch callable."""
        return list(self._dispatchers)

    def __getitem__(self, name: TransitionName) -> Callable[..., None]:
        return self._dispatchers[name]

    def __contains__(self, name: object) -> bool:
        return name in self._dispatchers

    def __getattr__(self, attr: str) -> Callable[..., None]:
        # Only reached when normal lookup fails; methods shadow same-named transitions.
        dispatchers = self.__dict__.get("_dispatchers", {})
        if attr in dispatchers:
            return dispatchers[attr]
        raise AttributeError(
            f"{type(self).__name__!r} object has no transition {attr!r}"
        )

    def __repr__(self) -> str:
        return f"StateMachine(current_state={self._state!r})"
