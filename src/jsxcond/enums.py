"""Enumerations for jsxcond type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class PositionContext(StrEnum):
    """Syntactic slot the currently visited node sits in.

    Decides both boolean coercion of directive conditions and how the
    rewritten expression is packaged back into the tree.
    """

    TEMPLATE_CHILD = "template_child"
    """Element or fragment child, attribute value, expression container: <div>{ here }</div>"""

    ASSIGNMENT = "assignment"
    """Variable initializer or assignment right-hand side: const el = here"""

    RETURN = "return"
    """Operand of a return statement: return here"""


class PlaceholderKind(StrEnum):
    """Origin of a placeholder node produced by the rewriter.

    StrEnum provides automatic string conversion: str(PlaceholderKind.SWITCH) == "switch"
    """

    CONDITION = "condition"
    """Carries a <Condition> rewrite or a hoisted else-only switch"""

    SWITCH = "switch"
    """Carries a short-circuit <Switch> chain; unwrapping collapses its branches"""


class SwitchMode(StrEnum):
    """Evaluation mode chosen for a <Switch> directive."""

    SHORT_CIRCUIT = "short_circuit"
    """Chained ternary: only the first truthy branch renders"""

    PARALLEL = "parallel"
    """Independent guards: every truthy branch renders"""


class DeclarationKind(StrEnum):
    """Keyword of a variable declaration."""

    CONST = "const"
    LET = "let"
    VAR = "var"


__all__ = [
    "DeclarationKind",
    "PlaceholderKind",
    "PositionContext",
    "SwitchMode",
]
