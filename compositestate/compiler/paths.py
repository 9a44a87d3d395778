# compositestate/compiler/paths.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from enum import Enum
from typing import Iterable, List, Sequence, Set, Tuple

from compositestate.core.configuration import StateConfiguration, StateMachineConfiguration
from compositestate.core.errors import CyclicConfigurationError, StateNotFoundError
from compositestate.interfaces.types import StateID, StatePath


def find_state(states: Iterable[StateConfiguration], state: StateID) -> StateConfiguration:
    """
    Return the configuration named ``state``.

    :raises StateNotFoundError: If no configuration has that identifier.
    """
    for configuration in states:
        if configuration.state == state:
            return configuration
    raise StateNotFoundError(f"State {state!r} is not defined.", state)


def order_states(states: Sequence[StateConfiguration], start: StateID) -> Tuple[StateConfiguration, ...]:
    """
    Return the start state first, followed by the remaining states in their
    original order.

    :raises StateNotFoundError: If ``start`` is not one of ``states``.
    """
    first = find_state(states, start)
    return (first,) + tuple(s for s in states if s is not first)


def resolve_path(states: Sequence[StateConfiguration], target: StateID) -> StatePath:
    """
    Resolve ``target`` to the path of the leaf it denotes.

    Entering a composite state enters its start state, so the path keeps
    descending through nested start states until it reaches a state with no
    sub-machine.

    :param states: The state set of the level ``target`` belongs to.
    :param target: The identifier to resolve.
    :return: Identifiers from ``target`` down to the leaf.
    :raises StateNotFoundError: If an identifier is missing from its level.
    """
    path: List[StateID] = []
    seen: Set[StateMachineConfiguration] = set()
    current = target
    level = states
    while True:
        configuration = find_state(level, current)
        path.append(current)
        sub_state = configuration.sub_state
        if sub_state is None:
            return tuple(path)
        if sub_state in seen:
            raise CyclicConfigurationError(f"Start path through {current!r} re-enters its own configuration.")
        seen.add(sub_state)
        current = sub_state.start
        level = sub_state.states


def display_name(state: StateID) -> str:
    """Human-readable name of an identifier; Enum members render as their name."""
    if isinstance(state, Enum):
        return state.name
    return str(state)


def dotted(path: Iterable[StateID]) -> str:
    """Render a state path as ``A.B.C``."""
    return ".".join(display_name(state) for state in path)
