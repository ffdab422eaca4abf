"""Shared constants for jsxcond.

Constants are grouped by domain:
- Depth limits: Recursion protection for traversal and serialization
- Directive surface: Tag and attribute names recognised by the rewriter
- Generated code: Identifiers emitted into rewritten trees

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Directive surface
    "CONDITION_TAG",
    "SWITCH_TAG",
    "SWITCH_CASE_TAG",
    "IF_ATTR",
    "ELSE_ATTR",
    "SHORT_CIRCUIT_ATTR",
    # Generated code
    "BOOLEAN_FUNC",
    "CONDITION_PLACEHOLDER_TAG",
    "SWITCH_PLACEHOLDER_TAG",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Unified ceiling on traversal depth for recursion protection.
# Used by: rewriter, post-processor, serializer, generic visitors.
# The effective default is further lowered to what the interpreter recursion
# limit supports (see core.depth_guard.default_max_depth), 158 levels under
# the default limit of 1000.
MAX_DEPTH: int = 1000

# ============================================================================
# DIRECTIVE SURFACE
# ============================================================================

CONDITION_TAG: str = "Condition"
SWITCH_TAG: str = "Switch"
# Matched as the member expression <Switch.Case>
SWITCH_CASE_TAG: str = "Switch.Case"

IF_ATTR: str = "if"
ELSE_ATTR: str = "else"
SHORT_CIRCUIT_ATTR: str = "shortCircuit"

# ============================================================================
# GENERATED CODE
# ============================================================================

BOOLEAN_FUNC: str = "Boolean"

# Debug rendering of placeholder nodes. Never valid in final output.
CONDITION_PLACEHOLDER_TAG: str = "__CONDITION_PLACEHOLDER__"
SWITCH_PLACEHOLDER_TAG: str = "__SWITCH_PLACEHOLDER__"
