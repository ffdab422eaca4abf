"""Core infrastructure shared by the syntax and transform packages.

Python 3.13+.
"""

from .depth_guard import DepthGuard, default_max_depth, depth_clamp
from .errors import (
    ConfigurationError,
    DepthLimitExceededError,
    JSXCondError,
    PlaceholderLeakError,
)

__all__ = [
    "ConfigurationError",
    "DepthGuard",
    "DepthLimitExceededError",
    "JSXCondError",
    "PlaceholderLeakError",
    "default_max_depth",
    "depth_clamp",
]
