# compositestate/core/actions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Dict, Iterable, Optional, Tuple, Union

from compositestate.core.errors import ValidationError
from compositestate.interfaces.types import Action, ActionFactory


class Deferred:
    """
    A lazily bound action. The factory is called at compile time and must
    return the zero-argument callable that will run when the action fires.
    """

    def __init__(self, factory: ActionFactory) -> None:
        """
        :param factory: Callable returning the action to bind.
        """
        if not callable(factory):
            raise ValidationError("Deferred action factory must be callable.")
        self._factory = factory

    @property
    def factory(self) -> ActionFactory:
        """The factory producing the bound action."""
        return self._factory

    def resolve(self) -> Action:
        """
        Call the factory and return the bound action.

        :raises ValidationError: If the factory does not produce a callable.
        """
        action = self._factory()
        if not callable(action):
            raise ValidationError(f"Deferred action resolved to non-callable {action!r}.")
        return action

    def __repr__(self) -> str:
        return f"Deferred({self._factory!r})"


ActionSlot = Union[None, Action, Deferred]


class ActionSequence:
    """
    An ordered, immutable sequence of actions invoked one after another.
    Compiled transitions expose their composed behaviour as an ActionSequence
    so callers can both invoke it and inspect what it will run.
    """

    __slots__ = ("_actions",)

    def __init__(self, actions: Iterable[Action] = ()) -> None:
        self._actions: Tuple[Action, ...] = tuple(actions)

    @property
    def actions(self) -> Tuple[Action, ...]:
        """The actions in invocation order."""
        return self._actions

    def __call__(self) -> None:
        for action in self._actions:
            action()

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self):
        return iter(self._actions)

    def __repr__(self) -> str:
        return f"ActionSequence({len(self._actions)} actions)"


class ActionCompiler:
    """
    Resolves action slots into callables. One compiler is created per
    compilation call; each Deferred is resolved at most once by it.
    """

    def __init__(self) -> None:
        self._resolved: Dict[Deferred, Action] = {}

    def compile(self, slot: ActionSlot) -> Optional[Action]:
        """
        Return the callable for a slot, or None for an empty slot.

        :param slot: None, a callable, or a Deferred.
        :raises ValidationError: If the slot is neither.
        """
        if slot is None:
            return None
        if isinstance(slot, Deferred):
            action = self._resolved.get(slot)
            if action is None:
                action = slot.resolve()
                self._resolved[slot] = action
            return action
        if callable(slot):
            return slot
        raise ValidationError(f"Action {slot!r} is not callable.")

    def compile_all(self, slots: Iterable[ActionSlot]) -> Tuple[Action, ...]:
        """
        Compile several slots in order, dropping empty ones.
        """
        compiled = (self.compile(slot) for slot in slots)
        return tuple(action for action in compiled if action is not None)


def compose(*groups: Iterable[Optional[Action]]) -> ActionSequence:
    """
    Chain groups of actions into a single ActionSequence, skipping None entries.
    """
    return ActionSequence(action for group in groups for action in group if action is not None)
