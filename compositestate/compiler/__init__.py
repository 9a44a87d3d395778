"""
Compiler package turning configurations into executable forms.

Architecture:
- paths: resolution of identifiers to full leaf paths
- unroll: work-stack linearization of the hierarchy into leaf records
- linear: override-by-rank transition resolution and action composition
- table: flat, index-addressed transition tables
- composite: dependency-ordered, nesting-preserving compilation
"""
