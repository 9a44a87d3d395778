"""Unit tests for the configuration dataclasses.

Tests construction, immutability and identity semantics.
"""

import dataclasses
import unittest

from compositestate.core.configuration import (
    StateConfiguration,
    StateMachineConfiguration,
    TransitionConfiguration,
)


class TestStateConfiguration(unittest.TestCase):
    """Test cases for StateConfiguration."""

    def test_transitions_are_stored_as_tuple(self):
        """Lists of transitions are frozen into tuples."""
        transition = TransitionConfiguration("go", "B")
        state = StateConfiguration("A", transitions=[transition])

        self.assertEqual(state.transitions, (transition,))
        self.assertIsInstance(state.transitions, tuple)

    def test_defaults(self):
        """A bare state has no actions, transitions or sub-machine."""
        state = StateConfiguration("A")

        self.assertEqual(state.transitions, ())
        self.assertIsNone(state.on_enter)
        self.assertIsNone(state.on_exit)
        self.assertIsNone(state.sub_state)
        self.assertFalse(state.is_composite)

    def test_none_transitions_become_empty(self):
        """Passing None for transitions yields an empty tuple."""
        self.assertEqual(StateConfiguration("A", transitions=None).transitions, ())

    def test_composite(self):
        """A state with a sub-machine is composite."""
        inner = StateMachineConfiguration([StateConfiguration("A1")], start="A1")
        self.assertTrue(StateConfiguration("A", sub_state=inner).is_composite)

    def test_frozen(self):
        """States cannot be modified after construction."""
        state = StateConfiguration("A")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            state.state = "B"


class TestStateMachineConfiguration(unittest.TestCase):
    """Test cases for StateMachineConfiguration."""

    def setUp(self):
        """Set up test fixtures before each test method."""
        self.a = StateConfiguration("A")
        self.b = StateConfiguration("B")
        self.machine = StateMachineConfiguration([self.a, self.b], start="A")

    def test_states_are_tuple(self):
        self.assertEqual(self.machine.states, (self.a, self.b))
        self.assertEqual(len(self.machine), 2)
        self.assertEqual(list(self.machine), [self.a, self.b])

    def test_get_state(self):
        """States are found by identifier."""
        self.assertIs(self.machine.get_state("B"), self.b)
        self.assertIsNone(self.machine.get_state("missing"))

    def test_identity_equality(self):
        """Structurally identical configurations are still distinct."""
        twin = StateMachineConfiguration([self.a, self.b], start="A")

        self.assertNotEqual(self.machine, twin)
        self.assertEqual(self.machine, self.machine)
        self.assertEqual(len({self.machine, twin}), 2)

    def test_frozen(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            self.machine.start = "B"


class TestConfigurationCompileShortcuts(unittest.TestCase):
    """The configuration exposes the compilers as methods."""

    def setUp(self):
        self.machine = StateMachineConfiguration(
            [
                StateConfiguration("A", transitions=[TransitionConfiguration("go", "B")]),
                StateConfiguration("B"),
            ],
            start="A",
        )

    def test_to_state_transitions(self):
        transitions = self.machine.to_state_transitions()
        self.assertEqual([(t.state, t.input, t.next) for t in transitions], [(("A",), "go", ("B",))])

    def test_to_state_transition_table(self):
        table = self.machine.to_state_transition_table(debug_display=True)
        self.assertEqual(len(table), 2)
        self.assertEqual(table[0].display, "A")

    def test_to_composite_state_machine(self):
        machine = self.machine.to_composite_state_machine()
        self.assertEqual(machine.start, "A")
        self.assertEqual(machine.lookup("A", "go").next, "B")


if __name__ == "__main__":
    unittest.main()
