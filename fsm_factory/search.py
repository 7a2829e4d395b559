"""Search box controller driven by a five-state machine."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Protocol, runtime_checkable

from fsm_factory.builder import TransitionTableBuilder
from fsm_factory.machine import StateMachine

logger = logging.getLogger(__name__)


class SearchState(Enum):
    """Interaction modes of a search box."""

    EMPTY = "empty"
    PRE_SEARCH_WITHOUT_CONTENT = "preSearchWithoutContent"
    PRE_SEARCH_WITH_CONTENT = "preSearchWithContent"
    POST_SEARCH_WITHOUT_CONTEXT = "postSearchWithoutContext"
    POST_SEARCH_WITH_CONTEXT = "postSearchWithContext"


@dataclass(frozen=True)
class SearchConfig:
    """Initial parameters of a search box.

    Attributes:
        context: Label shown next to a submitted query (also the placeholder).
        query: Query the box starts with; submitted on construction.
    """

    context: str = ""
    query: str = ""


@runtime_checkable
class SearchView(Protocol):
    """Rendering surface of a search box.

    Implementations wrap whatever UI toolkit hosts the box. Every method is
    fire-and-forget.
    """

    def set_focused(self, focused: bool) -> None: ...

    def set_placeholder(self, text: str) -> None: ...

    def set_input(self, text: str) -> None: ...

    def mirror_input(self, text: str) -> None: ...

    def set_context_label(self, text: str) -> None: ...

    def show_context(self) -> None: ...

    def hide_context(self) -> None: ...

    def show_search_icon(self) -> None: ...

    def show_clear_icon(self) -> None: ...

    def focus_input(self) -> None: ...

    def blur_input(self) -> None: ...


class RecordingView:
    """SearchView that records every call as ``(method, *args)``.

    Conforms to the SearchView protocol. Useful for tests and headless runs.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def _record(self, method: str, *args: Any) -> None:
        self.calls.append((method, *args))

    def set_focused(self, focused: bool) -> None:
        self._record("set_focused", focused)

    def set_placeholder(self, text: str) -> None:
        self._record("set_placeholder", text)

    def set_input(self, text: str) -> None:
        self._record("set_input", text)

    def mirror_input(self, text: str) -> None:
        self._record("mirror_input", text)

    def set_context_label(self, text: str) -> None:
        self._record("set_context_label", text)

    def show_context(self) -> None:
        self._record("show_context")

    def hide_context(self) -> None:
        self._record("hide_context")

    def show_search_icon(self) -> None:
        self._record("show_search_icon")

    def show_clear_icon(self) -> None:
        self._record("show_clear_icon")

    def focus_input(self) -> None:
        self._record("focus_input")

    def blur_input(self) -> None:
        self._record("blur_input")

    def methods(self) -> list[str]:
        """Return the recorded method names in call order."""
        return [call[0] for call in self.calls]

    def reset(self) -> None:
        self.calls.clear()


def _noop(*args: Any) -> None:
    pass


class SearchBox:
    """Search box behaviour over an abstract :class:`SearchView`.

    UI event handlers call :meth:`focus_in`, :meth:`focus_out`,
    :meth:`key_up`, :meth:`submit`, :meth:`click_search` and
    :meth:`click_clear`. Application code uses :meth:`on_search`,
    :meth:`on_clear`, :meth:`set_context`, :meth:`update` and :meth:`clear`.
    """

    def __init__(self, view: SearchView, config: SearchConfig | None = None) -> None:
        config = config or SearchConfig()
        self._view = view
        self._search_callback: Callable[[str], None] = _noop
        self._clear_callback: Callable[[], None] = _noop
        self._context = ""
        self._input = ""
        self._should_submit = True

        if config.context:
            self.set_context(config.context)
        if config.query:
            self._input = config.query
            view.set_input(config.query)

        self._machine = self._build_machine()
        self.update(self._input)

    def _build_machine(self) -> StateMachine:
        view = self._view
        s = SearchState
        builder = TransitionTableBuilder()

        builder.register_transition(
            "focus", s.EMPTY, s.PRE_SEARCH_WITHOUT_CONTENT,
            lambda: view.set_focused(True),
        )
        builder.register_transition(
            "unfocus", s.PRE_SEARCH_WITHOUT_CONTENT, s.EMPTY,
            lambda: view.set_focused(False),
        )

        builder.register_transition(
            "focus", s.POST_SEARCH_WITH_CONTEXT, s.POST_SEARCH_WITHOUT_CONTEXT,
            self._hide_context,
        )
        builder.register_transition(
            "unfocus", s.POST_SEARCH_WITHOUT_CONTEXT, s.POST_SEARCH_WITH_CONTEXT,
            self._show_context,
        )

        def search_from_empty(query: str) -> None:
            view.set_focused(True)
            self._show_search(query)

        builder.register_transition(
            "search", s.EMPTY, s.POST_SEARCH_WITH_CONTEXT, search_from_empty,
        )
        builder.register_transition(
            "search", s.PRE_SEARCH_WITH_CONTENT, s.POST_SEARCH_WITH_CONTEXT,
            self._show_search,
        )

        builder.register_transitions(
            ["clear"],
            [s.POST_SEARCH_WITHOUT_CONTEXT, s.POST_SEARCH_WITH_CONTEXT],
            s.PRE_SEARCH_WITHOUT_CONTENT,
            view.show_search_icon,
        )
        builder.register_transition(
            "change", s.POST_SEARCH_WITHOUT_CONTEXT, s.PRE_SEARCH_WITH_CONTENT,
            view.show_search_icon,
        )

        builder.register_transition(
            "clear", s.PRE_SEARCH_WITH_CONTENT, s.PRE_SEARCH_WITHOUT_CONTENT, _noop,
        )
        builder.register_transition(
            "change", s.PRE_SEARCH_WITHOUT_CONTENT, s.PRE_SEARCH_WITH_CONTENT, _noop,
        )

        return builder.build(s.EMPTY, on_transition=self._log_transition)

    @staticmethod
    def _log_transition(name: Any, old: Any, new: Any) -> None:
        logger.debug("search box %s: %s -> %s", name, old.value, new.value)

    @property
    def state(self) -> SearchState:
        return self._machine.current_state

    @property
    def query(self) -> str:
        return self._input

    @property
    def context(self) -> str:
        return self._context

    # --- view helpers ---

    def _show_context(self) -> None:
        self._view.show_context()

    def _hide_context(self) -> None:
        self._view.hide_context()

    def _show_search(self, query: str) -> None:
        self._view.set_context_label(f"in {self._context}" if self._context else "")
        self._show_context()
        self._view.show_clear_icon()

    def _set_input(self, text: str) -> None:
        self._input = text
        self._view.set_input(text)
        self._view.mirror_input(text)

    def _clear_query(self) -> None:
        self._set_input("")
        self._hide_context()
        self._machine.clear()

    def _clear_query_with_callback(self) -> None:
        self._clear_callback()
        self._clear_query()

    # --- application API ---

    def on_search(self, callback: Callable[[str], None]) -> None:
        """Set the callback fired with the query whenever a search occurs."""
        self._search_callback = callback

    def on_clear(self, callback: Callable[[], None]) -> None:
        """Set the callback fired whenever the query is cleared."""
        self._clear_callback = callback

    def set_context(self, text: str) -> None:
        """Set the context shown next to submitted queries."""
        self._context = text
        self._view.set_placeholder(text)

    def update(self, query: str) -> None:
        """Replace the current query and submit it. An empty query clears."""
        self._search_callback(query)
        if not query:
            self._clear_query()
        else:
            self._set_input(query)
            self._machine.search(query)
        self._view.blur_input()

    def clear(self) -> None:
        """Clear the current query, firing the clear callback."""
        self._clear_query_with_callback()

    # --- UI events ---

    def focus_in(self) -> None:
        self._machine.focus()

    def focus_out(self, to_search_icon: bool = False) -> None:
        """Input lost focus. *to_search_icon* is True when focus moved to the search icon."""
        self._should_submit = bool(self._input) or to_search_icon
        self._machine.unfocus()

    def key_up(self, text: str) -> None:
        """Input text changed to *text*."""
        self._input = text
        self._view.mirror_input(text)
        if not text:
            self._machine.clear()
        else:
            self._machine.change()

    def submit(self) -> None:
        self.update(self._input)

    def click_search(self, input_focused: bool = False) -> None:
        """Search icon clicked. *input_focused* is True when the input still has focus."""
        if input_focused:
            self._should_submit = True
        if self._should_submit:
            self.update(self._input)
        else:
            self._view.focus_input()

    def click_clear(self) -> None:
        self._view.focus_input()
        self._clear_query_with_callback()
