# compositestate/compiler/linear.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Transition resolution over unrolled leaves.

Each leaf inherits every transition declared on its ancestors. For a given
input the candidate declared deepest in the hierarchy wins, and its
behaviour is composed as: leaf exit chain, transition action, target enter
chain.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from compositestate.compiler.paths import display_name, dotted
from compositestate.compiler.unroll import StateTraversal, TransitionTraversal, unroll
from compositestate.core.actions import ActionCompiler, ActionSequence, compose
from compositestate.core.configuration import StateMachineConfiguration
from compositestate.core.errors import AmbiguousTransitionError, TargetPathError
from compositestate.core.validations import Validator
from compositestate.interfaces.types import Action, InputID, StatePath

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateTransition:
    """
    A fully resolved transition between two leaf states.

    ``output`` runs the exits, the transition action and the enters in the
    order the transition requires.
    """

    state: StatePath
    input: InputID
    next: StatePath
    output: ActionSequence
    display: Optional[str] = None


def describe_transition(state: StatePath, input: InputID, next: StatePath) -> str:
    """Render a transition as ``A.B -- X --> C``."""
    return f"{dotted(state)} -- {display_name(input)} --> {dotted(next)}"


def select_transitions(traversal: StateTraversal) -> List[TransitionTraversal]:
    """
    Pick the highest ranked candidate for every input the leaf inherits.

    Inputs keep the order of their first appearance among the candidates.

    :raises AmbiguousTransitionError: If the best rank is shared by two candidates.
    """
    selected: Dict[InputID, TransitionTraversal] = {}
    tied = set()
    for candidate in traversal.transitions:
        best = selected.get(candidate.input)
        if best is None or candidate.rank > best.rank:
            selected[candidate.input] = candidate
            tied.discard(candidate.input)
        elif candidate.rank == best.rank:
            tied.add(candidate.input)

    if tied:
        inputs = ", ".join(sorted(display_name(i) for i in tied))
        raise AmbiguousTransitionError(f"State {dotted(traversal.state)} has equally ranked transitions on {inputs}.")
    return list(selected.values())


def resolve_transitions(
    unrolled: Sequence[StateTraversal],
    debug_display: bool = False,
    actions: Optional[ActionCompiler] = None,
) -> Tuple[StateTransition, ...]:
    """
    Resolve the inherited transitions of each unrolled leaf.

    :param unrolled: Leaf records from :func:`unroll`.
    :param debug_display: Attach ``A.B -- X --> C`` labels to the results.
    :param actions: Compiler used to resolve action slots; one is created if omitted.
    :raises TargetPathError: If a target path names no unrolled leaf.
    :raises AmbiguousTransitionError: If a leaf has tied candidates for one input.
    """
    actions = actions or ActionCompiler()
    leaves: Dict[StatePath, StateTraversal] = {leaf.state: leaf for leaf in unrolled}
    enters: Dict[StatePath, Tuple[Action, ...]] = {}

    resolved: List[StateTransition] = []
    for current in unrolled:
        exits = actions.compile_all(current.on_exit)
        for transition in select_transitions(current):
            target = leaves.get(transition.next)
            if target is None:
                raise TargetPathError(
                    f"Transition {dotted(current.state)} -- {display_name(transition.input)} --> "
                    f"{dotted(transition.next)} does not reach a leaf state.",
                    transition.next,
                )
            if target.state not in enters:
                enters[target.state] = actions.compile_all(target.on_enter)

            resolved.append(
                StateTransition(
                    state=current.state,
                    input=transition.input,
                    next=transition.next,
                    output=compose(exits, (actions.compile(transition.on_transition),), enters[target.state]),
                    display=describe_transition(current.state, transition.input, transition.next)
                    if debug_display
                    else None,
                )
            )

    logger.debug("Resolved %d transitions across %d leaf states", len(resolved), len(unrolled))
    return tuple(resolved)


def to_state_transitions(
    configuration: StateMachineConfiguration,
    debug_display: bool = False,
    validator: Optional[Validator] = None,
) -> Tuple[StateTransition, ...]:
    """
    Compile a configuration into leaf-level transitions.

    :param configuration: The root configuration.
    :param debug_display: Attach human-readable labels to each transition.
    :param validator: Validator run before compiling; defaults to :class:`Validator`.
    :raises ConfigurationError: If the configuration cannot be compiled.
    """
    (validator or Validator()).validate_configuration(configuration)
    return resolve_transitions(unroll(configuration), debug_display=debug_display)

