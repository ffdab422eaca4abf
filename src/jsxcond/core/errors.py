"""Error types shared across syntax and transform layers.

Directive misuse is never an error: unrecognised or partial directives are
copied through as ordinary markup. The errors here cover traversal safety,
configuration input, and internal consistency checks.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jsxcond.syntax.ast import Placeholder

__all__ = [
    "ConfigurationError",
    "DepthLimitExceededError",
    "JSXCondError",
    "PlaceholderLeakError",
]


class JSXCondError(Exception):
    """Base exception for all jsxcond errors."""


class DepthLimitExceededError(JSXCondError):
    """Raised when traversal exceeds the configured maximum depth.

    This error indicates either:
    - Pathologically deep markup or expression nesting
    - Malformed programmatic AST construction (e.g. accidental self-nesting)
    """

    def __init__(self, max_depth: int) -> None:
        super().__init__(
            f"Maximum traversal depth ({max_depth}) exceeded. "
            "Tree nesting is too deep to transform safely."
        )
        self.max_depth = max_depth


class PlaceholderLeakError(JSXCondError):
    """Raised when a placeholder node survives post-processing.

    Placeholders only exist between the two passes. Finding one in final
    output means the pipeline itself is broken, not the input.

    Attributes:
        placeholders: The leaked placeholder nodes, in traversal order
    """

    def __init__(self, placeholders: tuple[Placeholder, ...]) -> None:
        kinds = ", ".join(str(p.kind) for p in placeholders)
        super().__init__(
            f"{len(placeholders)} placeholder node(s) survived post-processing: {kinds}"
        )
        self.placeholders = placeholders


class ConfigurationError(JSXCondError):
    """Raised when the host passes a configuration value that is not a mapping."""
