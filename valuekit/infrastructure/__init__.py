"""
Infrastructure layer - Process-level setup for valuekit.

IMPORT RULES:
- CAN import from: domain, application
"""
