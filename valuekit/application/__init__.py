"""
Application layer - Configured entry points for valuekit.

This layer contains:
- Application services that run the kernel under a KernelConfig
- The structured logging mixin shared by services

IMPORT RULES:
- CAN import from: domain, config
- CANNOT import from: infrastructure
"""

from valuekit.application.services import ValueSemanticsService

__all__: list[str] = ["ValueSemanticsService"]
