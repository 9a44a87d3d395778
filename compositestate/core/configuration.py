# compositestate/core/configuration.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional, Tuple

from compositestate.core.actions import ActionSlot
from compositestate.interfaces.types import InputID, StateID

if TYPE_CHECKING:
    from compositestate.compiler.composite import CompositeStateMachine
    from compositestate.compiler.linear import StateTransition
    from compositestate.compiler.table import StateTransitionTable
    from compositestate.core.validations import Validator


@dataclass(frozen=True, eq=False)
class TransitionConfiguration:
    """
    Describes a transition taken on ``input`` to the state named ``next``.

    ``next`` is resolved against the state set of the level that declares the
    transition. Naming a composite state means entering it at its start
    state, recursively.
    """

    input: InputID
    next: StateID
    on_transition: ActionSlot = None


@dataclass(frozen=True, eq=False)
class StateConfiguration:
    """
    Describes one state: its identifier, optional enter/exit actions, the
    transitions it declares and, for composite states, a nested machine.
    """

    state: StateID
    transitions: Tuple[TransitionConfiguration, ...] = ()
    on_enter: ActionSlot = None
    on_exit: ActionSlot = None
    sub_state: Optional["StateMachineConfiguration"] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "transitions", tuple(self.transitions or ()))

    @property
    def is_composite(self) -> bool:
        """True when this state owns a nested state machine."""
        return self.sub_state is not None


@dataclass(frozen=True, eq=False)
class StateMachineConfiguration:
    """
    An ordered set of states plus the identifier of the start state.

    Configurations compare and hash by identity. The same instance may be
    referenced as the sub-machine of several states; compilers treat it as
    one machine.
    """

    states: Tuple[StateConfiguration, ...]
    start: StateID

    def __post_init__(self) -> None:
        object.__setattr__(self, "states", tuple(self.states))

    def __iter__(self) -> Iterator[StateConfiguration]:
        return iter(self.states)

    def __len__(self) -> int:
        return len(self.states)

    def get_state(self, state: StateID) -> Optional[StateConfiguration]:
        """
        Return the state configuration named ``state`` at this level, or None.
        """
        for configuration in self.states:
            if configuration.state == state:
                return configuration
        return None

    def to_state_transitions(
        self, debug_display: bool = False, validator: Optional["Validator"] = None
    ) -> Tuple["StateTransition", ...]:
        """Compile this configuration into resolved leaf-level transitions."""
        from compositestate.compiler.linear import to_state_transitions

        return to_state_transitions(self, debug_display=debug_display, validator=validator)

    def to_state_transition_table(
        self, debug_display: bool = False, validator: Optional["Validator"] = None
    ) -> "StateTransitionTable":
        """Compile this configuration into a flat, index-addressed table."""
        from compositestate.compiler.table import to_state_transition_table

        return to_state_transition_table(self, debug_display=debug_display, validator=validator)

    def to_composite_state_machine(self, validator: Optional["Validator"] = None) -> "CompositeStateMachine":
        """Compile this configuration into a nesting-preserving runtime."""
        from compositestate.compiler.composite import to_composite_state_machine

        return to_composite_state_machine(self, validator=validator)
