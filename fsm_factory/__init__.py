"""fsm-factory - Declarative finite state machines with named transitions."""
from __future__ import annotations

from fsm_factory.builder import TransitionTableBuilder, create_builder
from fsm_factory.machine import StateMachine
from fsm_factory.search import RecordingView, SearchBox, SearchConfig, SearchState, SearchView
from fsm_factory.types import TransitionEntry

__all__ = [
    "RecordingView",
    "SearchBox",
    "SearchConfig",
    "SearchState",
    "SearchView",
    "StateMachine",
    "TransitionEntry",
    "TransitionTableBuilder",
    "create_builder",
]
