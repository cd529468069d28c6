"""Value-semantics kernel configuration.

This module defines the tunables of the kernel with environment variable
overrides for production tuning.

Environment Variables:
- VALUEKIT_MAX_DEPTH: Deepest nesting a traversal may reach before it is
  treated as a cycle or runaway input (default: 500)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from valuekit.domain.primitives.limits import DEFAULT_MAX_DEPTH


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class KernelConfig:
    """Configuration for kernel traversals.

    All values can be overridden via environment variables.

    Attributes:
        max_depth: Maximum nesting depth for equality, cloning and
                   canonicalization. Default: 500.
    """

    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")

    @classmethod
    def from_environment(cls) -> "KernelConfig":
        """Create config from environment variables with defaults.

        Environment Variables:
            VALUEKIT_MAX_DEPTH: Maximum traversal depth (default: 500)

        Returns:
            KernelConfig with values from environment or defaults.
        """
        return cls(
            max_depth=_get_int_env("VALUEKIT_MAX_DEPTH", DEFAULT_MAX_DEPTH),
        )


# Pre-defined configurations for common use cases

# Default config (built-in values, environment ignored)
DEFAULT_KERNEL_CONFIG = KernelConfig()

# Testing config with a shallow bound so depth errors are cheap to provoke
TEST_KERNEL_CONFIG = KernelConfig(max_depth=16)
