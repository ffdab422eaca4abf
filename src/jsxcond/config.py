"""Configuration for the desugaring pass.

The directive surface has no tunable options. DesugarConfig still exists so
hosts can hand over their options object unchanged and so options can be
added without changing the desugar() signature.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields

from jsxcond.core.errors import ConfigurationError

__all__ = ["DesugarConfig"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DesugarConfig:
    """Immutable options for desugar().

    Currently field-less: constructing ``DesugarConfig()`` is the only
    meaningful configuration.

    Example:
        >>> DesugarConfig.from_mapping({})
        DesugarConfig()
    """

    @classmethod
    def from_mapping(cls, options: object) -> DesugarConfig:
        """Build a config from a host options object (parsed JSON).

        Unknown keys are ignored with a warning, matching how hosts pass
        options through to plugins without validating them.

        Args:
            options: Mapping of option names to values, or None

        Returns:
            DesugarConfig instance

        Raises:
            ConfigurationError: If options is neither a mapping nor None
        """
        if options is None:
            return cls()
        if not isinstance(options, Mapping):
            msg = f"Configuration must be a mapping, got {type(options).__name__}"
            raise ConfigurationError(msg)

        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in options if key not in known)
        if unknown:
            logger.warning("Ignoring unknown configuration option(s): %s", ", ".join(unknown))
        return cls(**{key: value for key, value in options.items() if key in known})
