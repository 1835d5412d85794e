"""Declarative validation of bound configuration instances.

Constraints are pure predicates over the whole instance.  They come from
two places:

- a :class:`~propbind.binding.model.NotNull` marker on a field;
- a method decorated with :func:`constraint`, e.g.::

      @constraint("Invalid JDBC URL for MySQL event listener", fields=("url",))
      def is_valid_url(self) -> bool:
          return self.url is None or self.url.startswith("jdbc:mysql:")

A constraint naming one field is single-field, otherwise cross-field; the
two are evaluated identically.  :func:`validate` evaluates every
constraint and returns all violations together.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, TypeVar

from propbind.binding.descriptors import descriptors_by_field, describe
from propbind.binding.errors import RegistrationError, ValidationConstraintViolation
from propbind.binding.model import ConfigModel, NotNull, field_marker
from propbind.binding.redaction import display_value

logger = logging.getLogger(__name__)

FuncT = TypeVar("FuncT", bound=Callable[..., bool])

_CONSTRAINT_ATTR = "__propbind_constraint__"


class ConstraintScope(StrEnum):
    SINGLE_FIELD = "single-field"
    CROSS_FIELD = "cross-field"


@dataclass(frozen=True)
class ValidationConstraint:
    """A named predicate plus the fields it inspects and its fixed message."""

    name: str
    fields: tuple[str, ...]
    predicate: Callable[[Any], bool]
    message: str

    @property
    def scope(self) -> ConstraintScope:
        if len(self.fields) == 1:
            return ConstraintScope.SINGLE_FIELD
        return ConstraintScope.CROSS_FIELD


def constraint(message: str, *, fields: Sequence[str]) -> Callable[[FuncT], FuncT]:
    """Declare a method as a validation constraint over *fields*.

    *message* is used verbatim; it must not embed field values.
    """
    if not fields:
        msg = "A constraint must name at least one field"
        raise ValueError(msg)

    def decorate(func: FuncT) -> FuncT:
        setattr(func, _CONSTRAINT_ATTR, (message, tuple(fields)))
        return func

    return decorate


# ---------------------------------------------------------------------------
# Constraint registry
# ---------------------------------------------------------------------------

_CONSTRAINTS: dict[type[ConfigModel], tuple[ValidationConstraint, ...]] = {}
_LOCK = threading.Lock()


def constraints(config_type: type[ConfigModel]) -> tuple[ValidationConstraint, ...]:
    """Return the constraints declared by *config_type*, building them once."""
    cached = _CONSTRAINTS.get(config_type)
    if cached is not None:
        return cached
    # Descriptors first: a misdeclared type must fail before its constraints.
    describe(config_type)
    with _LOCK:
        cached = _CONSTRAINTS.get(config_type)
        if cached is None:
            cached = _collect_constraints(config_type)
            _CONSTRAINTS[config_type] = cached
    return cached


def _collect_constraints(config_type: type[ConfigModel]) -> tuple[ValidationConstraint, ...]:
    found: list[ValidationConstraint] = []
    for field_name, field_info in config_type.model_fields.items():
        marker = field_marker(field_info, NotNull)
        if marker is not None:
            found.append(
                ValidationConstraint(
                    name=f"{field_name}_not_null",
                    fields=(field_name,),
                    predicate=_not_null(field_name),
                    message=marker.message,
                )
            )

    # Walk the MRO base-first so overriding methods replace inherited ones.
    methods: dict[str, ValidationConstraint] = {}
    for klass in reversed(config_type.__mro__):
        for name, attr in vars(klass).items():
            spec = getattr(attr, _CONSTRAINT_ATTR, None)
            if spec is None:
                continue
            message, fields = spec
            methods[name] = ValidationConstraint(
                name=name,
                fields=fields,
                predicate=attr,
                message=message,
            )

    declared = config_type.model_fields
    for item in methods.values():
        unknown = [name for name in item.fields if name not in declared]
        if unknown:
            msg = (
                f"{config_type.__name__}.{item.name} constrains undeclared "
                f"field(s): {', '.join(unknown)}"
            )
            raise RegistrationError(msg)
    found.extend(methods.values())
    return tuple(found)


def _not_null(field_name: str) -> Callable[[Any], bool]:
    def predicate(config: Any) -> bool:
        return getattr(config, field_name) is not None

    return predicate


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate(config: ConfigModel) -> tuple[ValidationConstraintViolation, ...]:
    """Evaluate every constraint of *config*; an empty result means valid.

    A predicate that raises counts as a violation of its constraint.
    """
    config_type = type(config)
    by_field = descriptors_by_field(config_type)
    violations: list[ValidationConstraintViolation] = []
    for item in constraints(config_type):
        try:
            passed = bool(item.predicate(config))
        except Exception as exc:
            logger.debug(
                "Constraint %s of %s raised %s",
                item.name,
                config_type.__name__,
                type(exc).__name__,
            )
            passed = False
        if passed:
            continue

        keys = tuple(by_field[name].key for name in item.fields)
        value = None
        if item.scope is ConstraintScope.SINGLE_FIELD:
            descriptor = by_field[item.fields[0]]
            value = display_value(descriptor, getattr(config, descriptor.field_name))
        violations.append(
            ValidationConstraintViolation(
                keys=keys,
                message=item.message,
                value=value,
                constraint=item.name,
                scope=str(item.scope),
            )
        )

    if violations:
        logger.debug(
            "%s failed %d of %d constraints",
            config_type.__name__,
            len(violations),
            len(constraints(config_type)),
        )
    return tuple(violations)
