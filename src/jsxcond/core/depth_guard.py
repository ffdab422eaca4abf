"""Depth limiting for recursion protection.

Provides reusable depth tracking to prevent stack overflow from:
- Deeply nested markup during rewriting and unwrapping
- Deep expression nesting during serialization
- Programmatically constructed adversarial ASTs

Thread-safe: uses explicit state, no thread-local storage.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from jsxcond.constants import MAX_DEPTH
from jsxcond.core.errors import DepthLimitExceededError

__all__ = ["DepthGuard", "default_max_depth", "depth_clamp", "max_safe_depth"]

logger = logging.getLogger(__name__)

# Interpreter frames spent per guarded level (dispatch, visit method, child loop)
_FRAMES_PER_LEVEL: int = 6


@dataclass(slots=True)
class DepthGuard:
    """Context manager for tracking and limiting recursion depth.

    Usage:
        guard = DepthGuard(max_depth=50)
        with guard:
            result = self.visit(child)

    Mutability Note:
        Intentionally mutable (not frozen=True) to enable stateful depth
        tracking via context manager protocol. The current_depth field is
        incremented/decremented on __enter__/__exit__.

    Attributes:
        max_depth: Maximum allowed depth (default: default_max_depth())
        current_depth: Current recursion depth
    """

    max_depth: int = field(default_factory=lambda: default_max_depth())
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Clamp max_depth against Python recursion limit."""
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        """Enter guarded section, increment depth.

        Checks the limit BEFORE incrementing: __exit__ is not called when
        __enter__ raises, so incrementing first would leave current_depth
        permanently elevated.
        """
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(self.max_depth)
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, decrement depth."""
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Current depth (alias for current_depth)."""
        return self.current_depth

    def is_exceeded(self) -> bool:
        """Check if depth limit has been reached."""
        return self.current_depth >= self.max_depth

    def reset(self) -> None:
        """Reset depth to zero (useful for reuse across multiple operations)."""
        self.current_depth = 0


def max_safe_depth(reserve_frames: int = 50) -> int:
    """Deepest guarded nesting the current recursion limit supports."""
    return (sys.getrecursionlimit() - reserve_frames) // _FRAMES_PER_LEVEL


def default_max_depth() -> int:
    """Default traversal limit: MAX_DEPTH, lowered to what the interpreter allows.

    Evaluated per guard, so raising sys.setrecursionlimit() takes effect for
    guards created afterwards.

    Example:
        >>> import sys
        >>> sys.getrecursionlimit()
        1000
        >>> default_max_depth()
        158
    """
    return min(MAX_DEPTH, max_safe_depth())


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Clamp requested depth against Python recursion limit.

    Every guarded level spends several interpreter frames (dispatch, visit
    method, child loop), so the usable depth is a fraction of the recursion
    limit. Logs a warning if clamping occurs.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames to reserve for call overhead (default: 50)

    Returns:
        Safe depth value, clamped if necessary

    Example:
        >>> import sys
        >>> sys.getrecursionlimit()
        1000
        >>> depth_clamp(100)
        100
        >>> depth_clamp(5000)
        158
    """
    safe_depth = max_safe_depth(reserve_frames)
    if requested_depth > safe_depth:
        logger.warning(
            "Requested depth %d exceeds what the Python recursion limit (%d) allows. "
            "Clamping to %d to prevent RecursionError. "
            "Consider increasing sys.setrecursionlimit() if needed.",
            requested_depth,
            sys.getrecursionlimit(),
            safe_depth,
        )
        return safe_depth
    return requested_depth
