# compositestate/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details


class HSMError(Exception):
    """
    Base exception class for errors within the hierarchical state machine compiler.
    """


class ConfigurationError(HSMError):
    """
    Raised when a state machine configuration cannot be compiled. Every
    compile-time failure derives from this class.
    """


class StateNotFoundError(ConfigurationError):
    """
    Raised when a requested state identifier does not exist in the state set
    being searched, or when a compiled table or machine is asked for an
    unknown state.
    """

    def __init__(self, message: str, state=None) -> None:
        super().__init__(message)
        self.state = state


class TargetPathError(ConfigurationError):
    """
    Raised when a transition's fully resolved target path does not match any
    leaf state produced by unrolling the hierarchy.
    """

    def __init__(self, message: str, path=None) -> None:
        super().__init__(message)
        self.path = path


class AmbiguousTransitionError(ConfigurationError):
    """
    Raised when a leaf state inherits two transitions for the same input at
    the same rank, leaving no single most specific candidate.
    """


class CyclicConfigurationError(ConfigurationError):
    """
    Raised when nested state machine configurations reference each other in
    a cycle.
    """


class ValidationError(ConfigurationError):
    """
    Raised when validation detects structural configuration constraint violations.
    """
