# compositestate/compiler/composite.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Nesting-preserving compilation of state machine configurations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from compositestate.core.actions import ActionCompiler
from compositestate.core.configuration import StateMachineConfiguration
from compositestate.core.errors import AmbiguousTransitionError, CyclicConfigurationError, StateNotFoundError
from compositestate.core.validations import Validator
from compositestate.interfaces.types import Action, InputID, StateID

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransitionTuple:
    """A compiled transition of one level: on ``input`` go to sibling ``next``."""

    input: InputID
    next: StateID
    on_transition: Optional[Action] = None

    def fire(self) -> None:
        """Run the transition action, if any."""
        if self.on_transition is not None:
            self.on_transition()


@dataclass(frozen=True)
class StateTuple:
    """
    A compiled state of one level. Composite states reference the compiled
    machine of their nested configuration through ``sub_state``.
    """

    state: StateID
    transitions: Tuple[TransitionTuple, ...] = ()
    on_enter: Optional[Action] = None
    on_exit: Optional[Action] = None
    sub_state: Optional["CompositeStateMachine"] = None
    _by_input: Dict[InputID, TransitionTuple] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "transitions", tuple(self.transitions))
        by_input: Dict[InputID, TransitionTuple] = {}
        for transition in self.transitions:
            if transition.input in by_input:
                raise AmbiguousTransitionError(
                    f"State {self.state!r} has more than one transition on {transition.input!r}."
                )
            by_input[transition.input] = transition
        object.__setattr__(self, "_by_input", by_input)

    @property
    def is_composite(self) -> bool:
        return self.sub_state is not None

    def enter(self) -> None:
        """Run the enter action, if any."""
        if self.on_enter is not None:
            self.on_enter()

    def exit(self) -> None:
        """Run the exit action, if any."""
        if self.on_exit is not None:
            self.on_exit()

    def lookup(self, input: InputID) -> Optional[TransitionTuple]:
        return self._by_input.get(input)


class CompositeStateMachine:
    """
    The compiled form of one configuration level. Nested levels are separate
    CompositeStateMachine instances reached through ``StateTuple.sub_state``;
    a configuration shared by several parents compiles to one shared instance.
    """

    def __init__(self, states: Iterable[StateTuple], start: StateID) -> None:
        """
        :param states: Compiled states of this level.
        :param start: Identifier of the start state.
        :raises StateNotFoundError: If ``start`` or a transition target is not a state of this level.
        """
        self._states: Tuple[StateTuple, ...] = tuple(states)
        self._index: Dict[StateID, StateTuple] = {s.state: s for s in self._states}
        if start not in self._index:
            raise StateNotFoundError(f"Start state {start!r} is not defined.", start)
        for state in self._states:
            for transition in state.transitions:
                if transition.next not in self._index:
                    raise StateNotFoundError(
                        f"Transition {state.state!r} --{transition.input!r}--> {transition.next!r} "
                        "targets an undefined state.",
                        transition.next,
                    )
        self._start = start

    @property
    def start(self) -> StateID:
        return self._start

    @property
    def states(self) -> Tuple[StateTuple, ...]:
        return self._states

    def get_state(self, state: StateID) -> StateTuple:
        """
        Return the compiled state named ``state``.

        :raises StateNotFoundError: If this level has no such state.
        """
        try:
            return self._index[state]
        except KeyError:
            raise StateNotFoundError(f"State {state!r} is not defined.", state) from None

    def lookup(self, state: StateID, input: InputID) -> Optional[TransitionTuple]:
        """Return the transition ``state`` takes on ``input``, or None."""
        return self.get_state(state).lookup(input)

    def __contains__(self, state: object) -> bool:
        return state in self._index

    def __iter__(self) -> Iterator[StateTuple]:
        return iter(self._states)

    def __len__(self) -> int:
        return len(self._states)

    def __repr__(self) -> str:
        return f"CompositeStateMachine(start={self._start!r}, states={len(self._states)})"


def _compile_level(
    configuration: StateMachineConfiguration,
    mapped: Dict[StateMachineConfiguration, CompositeStateMachine],
    actions: ActionCompiler,
) -> CompositeStateMachine:
    tuples = tuple(
        StateTuple(
            state=s.state,
            transitions=tuple(
                TransitionTuple(input=t.input, next=t.next, on_transition=actions.compile(t.on_transition))
                for t in s.transitions
            ),
            on_enter=actions.compile(s.on_enter),
            on_exit=actions.compile(s.on_exit),
            sub_state=mapped[s.sub_state] if s.sub_state is not None else None,
        )
        for s in configuration.states
    )
    return CompositeStateMachine(tuples, configuration.start)


def to_composite_state_machine(
    configuration: StateMachineConfiguration,
    validator: Optional[Validator] = None,
) -> CompositeStateMachine:
    """
    Compile a configuration into a tree of CompositeStateMachine objects.

    A configuration is compiled only after every sub-machine it references.
    Configurations whose dependencies are still outstanding are deferred on a
    worklist while the dependencies are scheduled ahead of them. Each
    distinct configuration is compiled exactly once per call.

    :param configuration: The root configuration.
    :param validator: Validator run before compiling; defaults to :class:`Validator`.
    :raises CyclicConfigurationError: If configurations depend on each other in a cycle.
    :raises ConfigurationError: If the configuration is otherwise invalid.
    """
    (validator or Validator()).validate_configuration(configuration)

    actions = ActionCompiler()
    mapped: Dict[StateMachineConfiguration, CompositeStateMachine] = {}
    deferred: Set[StateMachineConfiguration] = set()
    worklist: List[StateMachineConfiguration] = [configuration]

    while worklist:
        current = worklist[-1]
        if current in mapped:
            worklist.pop()
            continue

        unmapped = []
        for state in current.states:
            if state.sub_state is not None and state.sub_state not in mapped and state.sub_state not in unmapped:
                unmapped.append(state.sub_state)

        if unmapped:
            deferred.add(current)
            for dependency in reversed(unmapped):
                if dependency in deferred:
                    raise CyclicConfigurationError(
                        f"Configuration with start {dependency.start!r} depends on itself."
                    )
                worklist.append(dependency)
            continue

        mapped[current] = _compile_level(current, mapped, actions)
        deferred.discard(current)
        worklist.pop()

    logger.debug("Compiled %d composite state machines", len(mapped))
    return mapped[configuration]
