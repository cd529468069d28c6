"""Configuration module for valuekit.

Available Configurations:
- KernelConfig: Traversal bounds for the value-semantics kernel
"""

from valuekit.config.kernel_config import (
    DEFAULT_KERNEL_CONFIG,
    TEST_KERNEL_CONFIG,
    KernelConfig,
)

__all__ = [
    "KernelConfig",
    "DEFAULT_KERNEL_CONFIG",
    "TEST_KERNEL_CONFIG",
]
