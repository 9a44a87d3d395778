# compositestate/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Callable, Hashable, Tuple

StateID = Hashable
InputID = Hashable
StatePath = Tuple[StateID, ...]

# Callback Types
Action = Callable[[], None]
ActionFactory = Callable[[], Action]
