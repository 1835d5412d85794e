"""Binder — applies a property map to a configuration type.

Binding starts from declared defaults and overrides each field whose key
is present.  Every problem is collected; a failing key leaves its field at
the default and no instance is produced while any error exists.

Unknown keys are ignored by default because several components usually
share one property map.  ``strict=True`` reports them as
:class:`UnknownProperty`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic

from propbind.binding.coercion import CoercionFailure, coerce
from propbind.binding.descriptors import describe, descriptors_by_key
from propbind.binding.errors import (
    BindingError,
    CoercionError,
    ConfigurationError,
    MissingRequiredProperty,
    UnknownProperty,
)
from propbind.binding.model import REDACTED, ConfigT
from propbind.binding.validation import validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BindResult(Generic[ConfigT]):
    """Outcome of :func:`bind`: an instance or the full list of errors."""

    config_type: type[ConfigT]
    config: ConfigT | None
    errors: tuple[BindingError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> ConfigT:
        """Return the bound instance or raise :class:`ConfigurationError`."""
        if self.config is None:
            raise ConfigurationError(self.config_type.__name__, self.errors)
        return self.config


def bind(
    config_type: type[ConfigT],
    properties: Mapping[str, str],
    *,
    strict: bool = False,
) -> BindResult[ConfigT]:
    """Bind *properties* onto a fresh instance of *config_type*.

    Args:
        config_type: The configuration model to populate.
        properties: Raw property map; iteration order drives error order.
        strict: Report keys that match no field as :class:`UnknownProperty`.
    """
    by_key = descriptors_by_key(config_type)
    builder = config_type.builder()
    errors: list[BindingError] = []

    for key, raw in properties.items():
        descriptor = by_key.get(key)
        if descriptor is None:
            if strict:
                errors.append(UnknownProperty(keys=(key,)))
            continue
        try:
            value: Any = coerce(raw, descriptor)
        except CoercionFailure as exc:
            errors.append(
                CoercionError(
                    keys=(key,),
                    message=str(exc),
                    value=REDACTED if descriptor.sensitive else raw,
                )
            )
            continue
        builder.set(descriptor.field_name, value)

    for descriptor in describe(config_type):
        if descriptor.required and descriptor.key not in properties:
            errors.append(MissingRequiredProperty(keys=(descriptor.key,)))

    logger.debug(
        "Bound %s: %d properties, %d errors",
        config_type.__name__,
        len(properties),
        len(errors),
    )
    if errors:
        return BindResult(config_type, None, tuple(errors))
    return BindResult(config_type, builder.build())


def load_config(
    config_type: type[ConfigT],
    properties: Mapping[str, str],
    *,
    strict: bool = False,
) -> ConfigT:
    """Bind and validate, raising one aggregated error on any finding.

    Raises:
        ConfigurationError: If binding fails or the bound instance violates
            any of its constraints.
    """
    config = bind(config_type, properties, strict=strict).unwrap()
    violations = validate(config)
    if violations:
        raise ConfigurationError(config_type.__name__, violations)
    return config
