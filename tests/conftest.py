# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from enum import Enum

import pytest

from compositestate.core.configuration import (
    StateConfiguration,
    StateMachineConfiguration,
    TransitionConfiguration,
)


class CallLog:
    """Records the names of actions in the order they run."""

    def __init__(self) -> None:
        self.calls = []

    def action(self, name: str):
        def _record() -> None:
            self.calls.append(name)

        return _record

    def state(self, name: str, transitions=(), sub_state=None) -> StateConfiguration:
        """A state whose enter/exit actions record ``enter:<name>`` and ``exit:<name>``."""
        return StateConfiguration(
            state=name,
            transitions=transitions,
            on_enter=self.action(f"enter:{name}"),
            on_exit=self.action(f"exit:{name}"),
            sub_state=sub_state,
        )

    def clear(self) -> None:
        self.calls.clear()


class Light(Enum):
    OFF = 1
    ON = 2
    DIM = 3
    BRIGHT = 4


class Switch(Enum):
    TOGGLE = 1
    CYCLE = 2


@pytest.fixture
def call_log():
    """A fresh action recorder."""
    return CallLog()


@pytest.fixture
def flat_configuration(call_log):
    """
    {A start, B}; A --X--> B with a recorded transition action.
    """
    return StateMachineConfiguration(
        states=[
            call_log.state("A", transitions=[TransitionConfiguration("X", "B", call_log.action("transition:X"))]),
            call_log.state("B"),
        ],
        start="A",
    )


@pytest.fixture
def nested_configuration(call_log):
    """
    A (composite) contains {A1 start, A2}; A --Y--> C; C is a leaf.
    """
    inner = StateMachineConfiguration(states=[call_log.state("A1"), call_log.state("A2")], start="A1")
    return StateMachineConfiguration(
        states=[
            call_log.state(
                "A",
                transitions=[TransitionConfiguration("Y", "C", call_log.action("transition:A.Y"))],
                sub_state=inner,
            ),
            call_log.state("C"),
        ],
        start="A",
    )


@pytest.fixture
def overriding_configuration(call_log):
    """
    Same as nested_configuration, but A1 also declares A1 --Y--> A2.
    """
    inner = StateMachineConfiguration(
        states=[
            call_log.state("A1", transitions=[TransitionConfiguration("Y", "A2", call_log.action("transition:A1.Y"))]),
            call_log.state("A2"),
        ],
        start="A1",
    )
    return StateMachineConfiguration(
        states=[
            call_log.state(
                "A",
                transitions=[TransitionConfiguration("Y", "C", call_log.action("transition:A.Y"))],
                sub_state=inner,
            ),
            call_log.state("C"),
        ],
        start="A",
    )


@pytest.fixture
def enum_configuration():
    """
    OFF --TOGGLE--> ON; ON contains {DIM start, BRIGHT}; DIM --CYCLE--> BRIGHT;
    ON --TOGGLE--> OFF.
    """
    brightness = StateMachineConfiguration(
        states=[
            StateConfiguration(Light.DIM, transitions=[TransitionConfiguration(Switch.CYCLE, Light.BRIGHT)]),
            StateConfiguration(Light.BRIGHT),
        ],
        start=Light.DIM,
    )
    return StateMachineConfiguration(
        states=[
            StateConfiguration(Light.OFF, transitions=[TransitionConfiguration(Switch.TOGGLE, Light.ON)]),
            StateConfiguration(
                Light.ON,
                transitions=[TransitionConfiguration(Switch.TOGGLE, Light.OFF)],
                sub_state=brightness,
            ),
        ],
        start=Light.OFF,
    )


@pytest.fixture
def looping_configuration():
    """A configuration whose only state nests the configuration itself."""
    loop = StateConfiguration("Loop")
    machine = StateMachineConfiguration(states=[loop], start="Loop")
    object.__setattr__(loop, "sub_state", machine)
    return machine


@pytest.fixture
def error_classes():
    """Provides a tuple of error classes for quick reference."""
    from compositestate.core.errors import (
        AmbiguousTransitionError,
        ConfigurationError,
        CyclicConfigurationError,
        HSMError,
        StateNotFoundError,
        TargetPathError,
        ValidationError,
    )

    return (
        HSMError,
        ConfigurationError,
        StateNotFoundError,
        TargetPathError,
        AmbiguousTransitionError,
        CyclicConfigurationError,
        ValidationError,
    )


@pytest.fixture
def light_enums():
    """The (Light, Switch) enums used by enum_configuration."""
    return Light, Switch
