# compositestate/core/validations.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import List, Set, Tuple

from compositestate.core.actions import Deferred
from compositestate.core.configuration import (
    StateConfiguration,
    StateMachineConfiguration,
    TransitionConfiguration,
)
from compositestate.core.errors import (
    AmbiguousTransitionError,
    CyclicConfigurationError,
    StateNotFoundError,
    ValidationError,
)


class Validator:
    """
    Performs compile-time validation of a state machine configuration tree,
    ensuring every level is well formed before a compiler walks it.
    """

    def __init__(self) -> None:
        """
        Initialize the validator with the default rules.
        """
        self._rules_engine = _ValidationRulesEngine()

    def validate_configuration(self, configuration: StateMachineConfiguration) -> None:
        """
        Check the configuration and every nested configuration it references.

        :param configuration: The root configuration to validate.
        :raises ConfigurationError: If validation fails.
        """
        self._rules_engine.validate_tree(configuration)


class _ValidationRulesEngine:
    """
    Internal engine walking the configuration tree and applying level rules
    to each distinct configuration exactly once.
    """

    def __init__(self) -> None:
        self._default_rules = _DefaultValidationRules

    def validate_tree(self, configuration: StateMachineConfiguration) -> None:
        """
        Depth-first walk over nested configurations with cycle detection.

        :param configuration: The root configuration.
        :raises CyclicConfigurationError: If a configuration nests itself.
        """
        if not isinstance(configuration, StateMachineConfiguration):
            raise ValidationError(f"Expected a StateMachineConfiguration, got {type(configuration).__name__}.")

        visited: Set[StateMachineConfiguration] = set()
        active: Set[StateMachineConfiguration] = set()
        stack: List[Tuple[StateMachineConfiguration, bool]] = [(configuration, False)]
        while stack:
            current, leaving = stack.pop()
            if leaving:
                active.discard(current)
                continue
            if current in active:
                raise CyclicConfigurationError(f"Configuration with start {current.start!r} contains itself.")
            if current in visited:
                continue
            visited.add(current)
            active.add(current)
            self._default_rules.validate_level(current)
            stack.append((current, True))
            for state in reversed(current.states):
                if state.sub_state is not None:
                    stack.append((state.sub_state, False))


class _DefaultValidationRules:
    """
    Built-in rules for a single level of configuration.
    """

    @staticmethod
    def validate_level(configuration: StateMachineConfiguration) -> None:
        """
        Check for basic level correctness:
        - The level has at least one state and unique identifiers.
        - The start identifier names one of the states.
        - Transition targets name states of this level.
        - Actions are callables or Deferred values.
        - No state declares two transitions for the same input.
        """
        if not configuration.states:
            raise ValidationError("StateMachineConfiguration must contain at least one state.")

        seen = set()
        for state in configuration.states:
            if not isinstance(state, StateConfiguration):
                raise ValidationError(f"Expected a StateConfiguration, got {type(state).__name__}.")
            if state.state in seen:
                raise ValidationError(f"Duplicate state identifier {state.state!r}.")
            seen.add(state.state)

        if configuration.start not in seen:
            raise StateNotFoundError(f"Start state {configuration.start!r} is not defined.", configuration.start)

        for state in configuration.states:
            _DefaultValidationRules.validate_action(state.on_enter, f"on_enter of {state.state!r}")
            _DefaultValidationRules.validate_action(state.on_exit, f"on_exit of {state.state!r}")
            if state.sub_state is not None and not isinstance(state.sub_state, StateMachineConfiguration):
                raise ValidationError(f"Sub-state of {state.state!r} must be a StateMachineConfiguration.")

            inputs = set()
            for transition in state.transitions:
                if not isinstance(transition, TransitionConfiguration):
                    raise ValidationError(f"Expected a TransitionConfiguration, got {type(transition).__name__}.")
                if transition.next not in seen:
                    raise StateNotFoundError(
                        f"Transition {state.state!r} --{transition.input!r}--> {transition.next!r} "
                        "targets an undefined state.",
                        transition.next,
                    )
                if transition.input in inputs:
                    raise AmbiguousTransitionError(
                        f"State {state.state!r} declares more than one transition on {transition.input!r}."
                    )
                inputs.add(transition.input)
                _DefaultValidationRules.validate_action(
                    transition.on_transition, f"transition {state.state!r} --{transition.input!r}-->"
                )

    @staticmethod
    def validate_action(slot, where: str) -> None:
        """
        Check that an action slot is empty, callable, or Deferred.
        """
        if slot is None or isinstance(slot, Deferred) or callable(slot):
            return
        raise ValidationError(f"Action for {where} must be callable.")
