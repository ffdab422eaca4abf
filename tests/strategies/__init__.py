"""Hypothesis strategies for jsxcond property-based testing.

Usage:
    from tests.strategies import directive_programs, markup_trees
    from tests.strategies.jsx import switch_samples, SwitchSample

Event-Emitting Strategies (HypoFuzz-Optimized):
    - switch_samples, directive_programs
"""

from .jsx import (
    ELSE_TAG,
    SwitchSample,
    condition_names,
    directive_programs,
    directive_trees,
    markup_trees,
    switch_samples,
    tag_names,
)

__all__ = [
    "ELSE_TAG",
    "SwitchSample",
    "condition_names",
    "directive_programs",
    "directive_trees",
    "markup_trees",
    "switch_samples",
    "tag_names",
]
