"""Tests for TransitionTableBuilder."""
import pytest
from fsm_factory import StateMachine, TransitionEntry, TransitionTableBuilder, create_builder


def noop(*args):
    pass


class TestRegistration:
    """Test cases for single and bulk registration."""

    def test_register_transition_creates_entry(self):
        """A single registration is visible through has() and entry()."""
        # Arrange
        builder = TransitionTableBuilder()

        # Act
        builder.register_transition("go", "A", "B", noop)

        # Assert
        assert builder.has("go", "A") is True
        assert builder.entry("go", "A") == TransitionEntry("B", noop)

    def test_has_false_for_missing_cell(self):
        """Has returns False for unknown names and unknown source states."""
        builder = TransitionTableBuilder()
        builder.register_transition("go", "A", "B", noop)

        assert builder.has("go", "B") is False
        assert builder.has("stop", "A") is False

    def test_entry_missing_raises_keyerror(self):
        """Entry with an unregistered cell raises KeyError."""
        builder = TransitionTableBuilder()

        with pytest.raises(KeyError):
            builder.entry("go", "A")

    def test_bulk_registration_matches_individual_calls(self):
        """Cross-product registration equals four single registrations."""
        # Arrange
        bulk = TransitionTableBuilder()
        single = TransitionTableBuilder()

        # Act
        bulk.register_transitions(["n1", "n2"], ["s1", "s2"], "t", noop)
        for name in ["n1", "n2"]:
            for state in ["s1", "s2"]:
                single.register_transition(name, state, "t", noop)

        # Assert
        assert bulk.table() == single.table()
        assert bulk.table() == {
            "n1": {"s1": TransitionEntry("t", noop), "s2": TransitionEntry("t", noop)},
            "n2": {"s1": TransitionEntry("t", noop), "s2": TransitionEntry("t", noop)},
        }

    def test_last_write_wins(self):
        """Re-registering a cell silently replaces the previous entry."""
        # Arrange
        builder = TransitionTableBuilder()

        def first():
            pass

        def second():
            pass

        # Act
        builder.register_transition("go", "A", "B", first)
        builder.register_transition("go", "A", "C", second)

        # Assert
        assert builder.entry("go", "A") == TransitionEntry("C", second)

    def test_overwrite_leaves_other_cells_alone(self):
        """Overwriting one cell keeps other source states of the same name."""
        builder = TransitionTableBuilder()
        builder.register_transitions(["go"], ["A", "B"], "X", noop)
        builder.register_transition("go", "A", "Y", noop)

        assert builder.entry("go", "A").to_state == "Y"
        assert builder.entry("go", "B").to_state == "X"

    def test_name_without_states_is_remembered(self):
        """A name registered with no source states still appears in names()."""
        builder = TransitionTableBuilder()
        builder.register_transitions(["ghost"], [], "A", noop)

        assert builder.names() == ["ghost"]
        assert builder.table() == {"ghost": {}}

    def test_empty_names_registers_nothing(self):
        """An empty names list leaves the table empty."""
        builder = TransitionTableBuilder()
        builder.register_transitions([], ["A"], "B", noop)

        assert builder.names() == []

    def test_names_in_first_registration_order(self):
        """Names are listed in the order they were first registered."""
        builder = TransitionTableBuilder()
        builder.register_transition("b", "S", "T", noop)
        builder.register_transition("a", "S", "T", noop)
        builder.register_transition("b", "T", "S", noop)

        assert builder.names() == ["b", "a"]

    def test_generators_accepted(self):
        """Names and source states may be any iterable."""
        builder = TransitionTableBuilder()
        builder.register_transitions((n for n in ["x", "y"]), (s for s in ["A", "B"]), "C", noop)

        assert builder.has("y", "B") is True

    def test_non_callable_action_accepted(self):
        """Registration does not validate the action."""
        builder = TransitionTableBuilder()
        builder.register_transition("go", "A", "B", None)

        assert builder.entry("go", "A").action is None

    def test_table_returns_copy(self):
        """Mutating the returned table does not touch the builder."""
        builder = TransitionTableBuilder()
        builder.register_transition("go", "A", "B", noop)

        table = builder.table()
        table["go"]["B"] = TransitionEntry("A", noop)
        table["stop"] = {}

        assert builder.has("go", "B") is False
        assert builder.names() == ["go"]


class TestBuild:
    """Test cases for TransitionTableBuilder.build."""

    def test_create_builder_returns_empty_builder(self):
        """create_builder returns a fresh TransitionTableBuilder."""
        builder = create_builder()

        assert isinstance(builder, TransitionTableBuilder)
        assert builder.names() == []

    def test_build_sets_initial_state(self):
        """Built machine starts in the given state."""
        builder = TransitionTableBuilder()
        builder.register_transition("go", "A", "B", noop)

        machine = builder.build("A")

        assert isinstance(machine, StateMachine)
        assert machine.current_state == "A"

    def test_every_name_gets_a_callable(self):
        """Names with no entry for the initial state still get a callable."""
        # Arrange
        builder = TransitionTableBuilder()
        builder.register_transition("go", "A", "B", noop)
        builder.register_transition("back", "B", "A", noop)
        builder.register_transitions(["ghost"], [], "A", noop)

        # Act
        machine = builder.build("A")

        # Assert
        assert sorted(machine.names()) == ["back", "ghost", "go"]
        assert callable(machine.back)
        assert callable(machine.ghost)

    def test_later_registrations_do_not_affect_built_machine(self):
        """A machine keeps the table it was built from."""
        # Arrange
        builder = TransitionTableBuilder()
        builder.register_transition("go", "A", "B", noop)
        machine = builder.build("A")

        # Act
        builder.register_transition("go", "A", "C", noop)
        builder.register_transition("late", "A", "C", noop)

        # Assert
        assert "late" not in machine
        machine.go()
        assert machine.current_state == "B"

    def test_builder_reusable_after_build(self):
        """Builder keeps accepting registrations and builds again."""
        builder = TransitionTableBuilder()
        builder.register_transition("go", "A", "B", noop)
        first = builder.build("A")
        builder.register_transition("go", "B", "C", noop)
        second = builder.build("B")

        first.go()
        first.go()
        second.go()

        assert first.current_state == "B"
        assert second.current_state == "C"

    def test_machines_from_same_builder_are_independent(self):
        """Each machine owns its current state."""
        builder = TransitionTableBuilder()
        builder.register_transition("go", "A", "B", noop)
        m1 = builder.build("A")
        m2 = builder.build("A")

        m1.go()

        assert m1.current_state == "B"
        assert m2.current_state == "A"

    def test_build_with_unregistered_initial_state(self):
        """Initial state need not appear anywhere in the table."""
        builder = TransitionTableBuilder()
        builder.register_transition("go", "A", "B", noop)

        machine = builder.build("Z")
        machine.go()

        assert machine.current_state == "Z"
