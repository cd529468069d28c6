"""Application services for valuekit."""

from valuekit.application.services.base import LoggingMixin
from valuekit.application.services.value_semantics_service import ValueSemanticsService

__all__: list[str] = ["LoggingMixin", "ValueSemanticsService"]
