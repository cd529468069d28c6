"""Field validators for records.

A validator is any callable taking a field value and returning True when
the value is acceptable, or an error message when it is not. A falsy
return (False, "" or None) is reported as "Invalid".

Example:
    >>> result = run_validators({"age": -1}, {"age": lambda v: v >= 0 or "age must be >= 0"})
    >>> result.ok, result.errors
    (False, {'age': ['age must be >= 0']})
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from valuekit.domain.primitives.undefined import UNDEFINED

DEFAULT_ERROR_MESSAGE: str = "Invalid"

Validator = Callable[[Any], Union[bool, str, None]]
Validators = Mapping[str, Union[Validator, Sequence[Validator]]]


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of running validators over a record.

    Attributes:
        ok: True when no validator reported an error.
        errors: Error messages per field name, in validator order.
            Fields without errors are absent.
    """

    ok: bool
    errors: dict[str, list[str]] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.ok


def run_validators(values: Mapping[str, Any], validators: Validators) -> ValidationResult:
    """Run validators against the fields of values.

    Args:
        values: The record (or any mapping) to check.
        validators: Validator or list of validators per field name.
            Fields missing from values are validated as UNDEFINED.

    Returns:
        ValidationResult collecting every failure.
    """
    errors: dict[str, list[str]] = {}
    for name, rule in validators.items():
        if rule is None:
            continue
        value = values.get(name, UNDEFINED)
        checks = [rule] if callable(rule) else list(rule)
        for check in checks:
            outcome = check(value)
            if outcome is True:
                continue
            message = outcome if isinstance(outcome, str) and outcome else DEFAULT_ERROR_MESSAGE
            errors.setdefault(name, []).append(message)
    return ValidationResult(ok=not errors, errors=errors)
