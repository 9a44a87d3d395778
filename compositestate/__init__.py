"""compositestate: compiler for hierarchical state machine configurations

This package turns a tree of nested state machine configurations into an
executable form.

Responsibilities:
    - Configuration model for states, nested sub-machines and transitions
    - Resolution of transitions into composite states through start states
    - Flattening of the hierarchy into an index-addressed transition table
    - Nesting-preserving compilation into shared composite runtimes
    - Compile-time validation of configurations

Interactions:
    - Client code authoring configurations
    - External executors driving the compiled table or runtime
    - Logging system for diagnostics

Cross-cutting Concerns:
    Thread Safety:
        - Compilation keeps all working state local to the call
        - Configurations and compiled forms are immutable

    Error Handling:
        - Structured error hierarchy rooted at HSMError
        - Every failure is raised at compile time

    Logging:
        - Standard library logging, DEBUG summaries per pass
        - No handlers installed by the library
"""

from compositestate.compiler.composite import CompositeStateMachine, to_composite_state_machine
from compositestate.compiler.linear import StateTransition, to_state_transitions
from compositestate.compiler.table import StateTransitionTable, to_state_transition_table
from compositestate.core.actions import ActionSequence, Deferred
from compositestate.core.configuration import (
    StateConfiguration,
    StateMachineConfiguration,
    TransitionConfiguration,
)
from compositestate.core.errors import (
    AmbiguousTransitionError,
    ConfigurationError,
    CyclicConfigurationError,
    HSMError,
    StateNotFoundError,
    TargetPathError,
    ValidationError,
)
from compositestate.core.validations import Validator

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "StateMachineConfiguration",
    "StateConfiguration",
    "TransitionConfiguration",
    "Deferred",
    "Validator",
    # Compilers
    "to_state_transitions",
    "to_state_transition_table",
    "to_composite_state_machine",
    # Compiled forms
    "ActionSequence",
    "StateTransition",
    "StateTransitionTable",
    "CompositeStateMachine",
    # Errors
    "HSMError",
    "ConfigurationError",
    "StateNotFoundError",
    "TargetPathError",
    "AmbiguousTransitionError",
    "CyclicConfigurationError",
    "ValidationError",
]
