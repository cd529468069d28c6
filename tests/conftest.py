"""
Pytest configuration and shared fixtures for valuekit tests.

Testing Standards:
- Unit tests go in tests/unit/<layer>/
- Test modules need unique basenames (no __init__.py packages)
"""

from __future__ import annotations

import pytest

from valuekit.config import TEST_KERNEL_CONFIG, KernelConfig


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from valuekit import __version__

    return __version__


@pytest.fixture
def test_config() -> KernelConfig:
    """Kernel config with a shallow depth bound."""
    return TEST_KERNEL_CONFIG
