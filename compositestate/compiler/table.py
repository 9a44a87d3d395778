# compositestate/compiler/table.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Flat, index-addressed state transition tables."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from compositestate.compiler.linear import StateTransition, describe_transition, resolve_transitions
from compositestate.compiler.paths import dotted
from compositestate.compiler.unroll import unroll
from compositestate.core.actions import ActionSequence
from compositestate.core.configuration import StateMachineConfiguration
from compositestate.core.errors import AmbiguousTransitionError, StateNotFoundError
from compositestate.core.validations import Validator
from compositestate.interfaces.types import InputID, StatePath

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransitionTuple:
    """One table entry: on ``input`` run ``output`` and move to row ``next``."""

    input: InputID
    next: int
    output: ActionSequence
    display: Optional[str] = None


@dataclass(frozen=True)
class StateTuple:
    """A table row for one leaf state, addressed by its full path."""

    state: StatePath
    transitions: Tuple[TransitionTuple, ...] = ()
    display: Optional[str] = None
    _by_input: Dict[InputID, TransitionTuple] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "transitions", tuple(self.transitions))
        by_input: Dict[InputID, TransitionTuple] = {}
        for transition in self.transitions:
            if transition.input in by_input:
                raise AmbiguousTransitionError(
                    f"Row {dotted(self.state)} has more than one transition on {transition.input!r}."
                )
            by_input[transition.input] = transition
        object.__setattr__(self, "_by_input", by_input)

    def lookup(self, input: InputID) -> Optional[TransitionTuple]:
        """The transition taken on ``input``, or None if the row ignores it."""
        return self._by_input.get(input)

    @property
    def inputs(self) -> Tuple[InputID, ...]:
        return tuple(self._by_input)


class StateTransitionTable:
    """
    A closed transition table. Rows are leaf states; each transition names
    its target by row index, so dispatch never walks the hierarchy.
    """

    def __init__(self, states: Iterable[StateTuple], start: int = 0) -> None:
        """
        :param states: Rows in index order.
        :param start: Row index of the initial leaf state.
        :raises StateNotFoundError: If ``start`` or a transition target is out of range.
        """
        self._states: Tuple[StateTuple, ...] = tuple(states)
        self._index: Dict[StatePath, int] = {row.state: i for i, row in enumerate(self._states)}
        self._check_row(start)
        for row in self._states:
            for transition in row.transitions:
                self._check_row(transition.next)
        self._start = start

    def _check_row(self, row: int) -> None:
        if not 0 <= row < len(self._states):
            raise StateNotFoundError(f"Row {row} is outside a table of {len(self._states)} rows.", row)

    @property
    def states(self) -> Tuple[StateTuple, ...]:
        """All rows in index order."""
        return self._states

    @property
    def start(self) -> int:
        """Row index of the initial leaf state."""
        return self._start

    def __len__(self) -> int:
        return len(self._states)

    def __getitem__(self, row: int) -> StateTuple:
        return self._states[row]

    def __iter__(self) -> Iterator[StateTuple]:
        return iter(self._states)

    def index_of(self, state: Sequence) -> int:
        """
        Return the row index of a full leaf path.

        :raises StateNotFoundError: If the path has no row.
        """
        path = tuple(state)
        try:
            return self._index[path]
        except KeyError:
            raise StateNotFoundError(f"No row for state {dotted(path)}.", path) from None

    def lookup(self, row: int, input: InputID) -> Optional[TransitionTuple]:
        """
        Return the transition taken from ``row`` on ``input``, or None.

        :raises StateNotFoundError: If ``row`` is out of range.
        """
        self._check_row(row)
        return self._states[row].lookup(input)

    @property
    def transition_count(self) -> int:
        return sum(len(row.transitions) for row in self._states)

    def __repr__(self) -> str:
        return f"StateTransitionTable({len(self._states)} states, {self.transition_count} transitions)"


def build_table(
    transitions: Iterable[StateTransition],
    paths: Iterable[StatePath] = (),
    debug_display: bool = False,
) -> StateTransitionTable:
    """
    Group resolved transitions into rows and replace target paths with row indices.

    Rows are created for ``paths`` first, then for each source state in order
    of first appearance, then for any target that has no row of its own.

    :param transitions: Resolved transitions.
    :param paths: Leaf paths that must have a row even without transitions.
    :param debug_display: Attach ``A.B`` and ``A.B -- X --> C`` labels.
    """
    transitions = tuple(transitions)
    rows: Dict[StatePath, List[StateTransition]] = {tuple(path): [] for path in paths}
    for transition in transitions:
        rows.setdefault(transition.state, []).append(transition)
    for transition in transitions:
        rows.setdefault(transition.next, [])

    index = {path: i for i, path in enumerate(rows)}
    states = [
        StateTuple(
            state=path,
            transitions=tuple(
                TransitionTuple(
                    input=t.input,
                    next=index[t.next],
                    output=t.output,
                    display=(t.display or describe_transition(t.state, t.input, t.next))
                    if debug_display
                    else None,
                )
                for t in group
            ),
            display=dotted(path) if debug_display else None,
        )
        for path, group in rows.items()
    ]

    logger.debug("Built table with %d rows and %d transitions", len(states), len(transitions))
    return StateTransitionTable(states)


def to_state_transition_table(
    source: Union[StateMachineConfiguration, Iterable[StateTransition]],
    debug_display: bool = False,
    validator: Optional[Validator] = None,
) -> StateTransitionTable:
    """
    Compile a configuration, or already resolved transitions, into a table.

    When compiled from a configuration every leaf gets a row and row 0 is
    the leaf reached through the start states.

    :param source: A root configuration or a sequence of StateTransition.
    :param debug_display: Attach human-readable labels to rows and transitions.
    :param validator: Validator run on configurations; defaults to :class:`Validator`.
    :raises ConfigurationError: If the configuration cannot be compiled.
    """
    if isinstance(source, StateMachineConfiguration):
        (validator or Validator()).validate_configuration(source)
        unrolled = unroll(source)
        transitions = resolve_transitions(unrolled, debug_display=debug_display)
        return build_table(transitions, [leaf.state for leaf in unrolled], debug_display=debug_display)
    return build_table(source, debug_display=debug_display)
