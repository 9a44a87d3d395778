"""
Shared type aliases for identifiers, paths and action callables.
"""
