# compositestate/compiler/unroll.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Linearization of a nested configuration tree into leaf traversal records."""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from compositestate.compiler.paths import order_states, resolve_path
from compositestate.core.actions import ActionSlot
from compositestate.core.configuration import StateConfiguration, StateMachineConfiguration
from compositestate.core.errors import CyclicConfigurationError
from compositestate.interfaces.types import InputID, StatePath

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransitionTraversal:
    """A transition inherited by a leaf, tagged with the depth that declared it."""

    input: InputID
    next: StatePath
    on_transition: ActionSlot
    rank: int


@dataclass(frozen=True)
class StateTraversal:
    """
    Everything a leaf inherits from its ancestors.

    ``on_enter`` runs outermost to innermost, ``on_exit`` innermost to
    outermost. ``lineage`` holds the configurations descended through, root
    first.
    """

    configuration: StateConfiguration
    state: StatePath
    on_enter: Tuple[ActionSlot, ...]
    on_exit: Tuple[ActionSlot, ...]
    transitions: Tuple[TransitionTraversal, ...]
    lineage: Tuple[StateMachineConfiguration, ...]

    @property
    def depth(self) -> int:
        return len(self.state)


def _declared_transitions(
    state: StateConfiguration, level: Sequence[StateConfiguration], prefix: StatePath, rank: int
) -> Tuple[TransitionTraversal, ...]:
    return tuple(
        TransitionTraversal(
            input=t.input,
            next=prefix + resolve_path(level, t.next),
            on_transition=t.on_transition,
            rank=rank,
        )
        for t in state.transitions
    )


def unroll(configuration: StateMachineConfiguration) -> List[StateTraversal]:
    """
    Expand the hierarchy into one traversal record per leaf state.

    Records come out depth first, each level visited start state first and
    then in declaration order. Composite records are replaced by their
    children on a work stack and never appear in the result.

    :param configuration: The root configuration.
    :return: Leaf records in traversal order.
    :raises StateNotFoundError: If a start or transition target is undefined.
    :raises CyclicConfigurationError: If a configuration is nested inside itself.
    """
    visit: List[StateTraversal] = [
        StateTraversal(
            configuration=s,
            state=(s.state,),
            on_enter=(s.on_enter,),
            on_exit=(s.on_exit,),
            transitions=_declared_transitions(s, configuration.states, (), 1),
            lineage=(configuration,),
        )
        for s in reversed(order_states(configuration.states, configuration.start))
    ]

    unrolled: List[StateTraversal] = []
    while visit:
        current = visit.pop()
        sub_state = current.configuration.sub_state
        if sub_state is None:
            unrolled.append(current)
            continue

        if sub_state in current.lineage:
            raise CyclicConfigurationError(f"State {current.state!r} nests a configuration that contains it.")

        for child in reversed(order_states(sub_state.states, sub_state.start)):
            child_state = current.state + (child.state,)
            visit.append(
                StateTraversal(
                    configuration=child,
                    state=child_state,
                    on_enter=current.on_enter + (child.on_enter,),
                    on_exit=(child.on_exit,) + current.on_exit,
                    transitions=current.transitions
                    + _declared_transitions(child, sub_state.states, current.state, len(child_state)),
                    lineage=current.lineage + (sub_state,),
                )
            )

    logger.debug("Unrolled %d leaf states", len(unrolled))
    return unrolled
