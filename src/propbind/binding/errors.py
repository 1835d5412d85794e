"""Binding diagnostics — the only externally observable failure artifacts.

Binding and validation never raise on the first problem.  They return
frozen records (one per offending key or constraint) so a caller can
report every finding in one pass:

- :class:`CoercionError`: a raw string cannot be converted to the field type.
- :class:`UnknownProperty`: a key matches no field (strict mode only).
- :class:`MissingRequiredProperty`: a field without default has no key.
- :class:`ValidationConstraintViolation`: a bound instance fails a constraint.

Two exceptions complete the taxonomy.  :class:`RegistrationError` is fatal
and signals a misdeclared configuration type.  :class:`ConfigurationError`
wraps a set of records for callers that prefer to abort on failure.

INVARIANT: ``value`` carries the redaction marker for sensitive fields and
messages never interpolate raw values.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from pydantic import BaseModel


class BindingProblem(BaseModel):
    """Structured finding produced while binding or validating a configuration."""

    model_config = {"frozen": True}

    code: str
    keys: tuple[str, ...]
    message: str
    value: str | None = None

    def __str__(self) -> str:
        return f"{', '.join(self.keys)}: {self.message}"


class BindingError(BindingProblem):
    """A problem detected by the binder before any instance exists."""


class CoercionError(BindingError):
    code: Literal["coercion_error"] = "coercion_error"


class UnknownProperty(BindingError):
    code: Literal["unknown_property"] = "unknown_property"
    message: str = "Configuration property was not used"


class MissingRequiredProperty(BindingError):
    code: Literal["missing_required_property"] = "missing_required_property"
    message: str = "Required configuration property is not set"


class ValidationConstraintViolation(BindingProblem):
    """A bound instance failed a single-field or cross-field constraint."""

    code: Literal["constraint_violation"] = "constraint_violation"
    constraint: str
    scope: str


ValidationViolation = ValidationConstraintViolation


class RegistrationError(ValueError):
    """A configuration type is misdeclared.

    Raised while the descriptor registry builds a type's descriptors, before
    any binding happens.  Never recoverable at bind time.
    """


class ConfigurationError(Exception):
    """Aggregates every binding error or constraint violation for one type."""

    def __init__(self, config_name: str, problems: Iterable[BindingProblem]) -> None:
        self.config_name = config_name
        self.problems: tuple[BindingProblem, ...] = tuple(problems)
        lines = [f"Invalid configuration for {config_name}:"]
        lines.extend(f"  {index}) {problem}" for index, problem in enumerate(self.problems, 1))
        super().__init__("\n".join(lines))
