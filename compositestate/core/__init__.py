"""
Core package providing the configuration model.

Architecture:
- Immutable configuration dataclasses for states, transitions and machines
- Deferred action binding and ordered action composition
- Structural validation of configuration trees
- Error hierarchy shared by every compiler pass
"""
