"""Binding descriptor registry.

:func:`describe` derives one :class:`BindingDescriptor` per field of a
configuration type, in declaration order.  Results are cached for the
lifetime of the process; the first computation for a type is serialized
so concurrent initializers observe exactly one descriptor set.

A misdeclared type raises :class:`RegistrationError` here, before any
property is bound.
"""

from __future__ import annotations

import logging
import re
import threading
import types
from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import TYPE_CHECKING, Any, Union, get_args, get_origin

from propbind.binding.errors import RegistrationError
from propbind.binding.model import ConfigModel, Property, Sensitive, field_marker

if TYPE_CHECKING:
    from pydantic.fields import FieldInfo

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_]+(?:[.-][A-Za-z0-9_]+)*$")


class ValueType(StrEnum):
    """Semantic types a property can be coerced into."""

    STRING = "string"
    BOOLEAN = "boolean"
    ENUM = "enum"
    OPTIONAL_STRING = "optional<string>"
    LIST = "list<string>"


class _Required:
    """Sentinel default for fields that have none."""

    def __repr__(self) -> str:
        return "REQUIRED"


REQUIRED: Any = _Required()


@dataclass(frozen=True)
class BindingDescriptor:
    """How one property key maps onto one configuration field."""

    key: str
    field_name: str
    value_type: ValueType
    default: Any
    sensitive: bool = False
    description: str | None = None
    enum_type: type[Enum] | None = None

    @property
    def required(self) -> bool:
        return self.default is REQUIRED

    @property
    def type_name(self) -> str:
        """Human-readable type, e.g. ``enum(TableType)``."""
        if self.value_type is ValueType.ENUM and self.enum_type is not None:
            return f"enum({self.enum_type.__name__})"
        return str(self.value_type)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_REGISTRY: dict[type[ConfigModel], tuple[BindingDescriptor, ...]] = {}
_LOCK = threading.Lock()


def describe(config_type: type[ConfigModel]) -> tuple[BindingDescriptor, ...]:
    """Return the ordered descriptors of *config_type*, building them once.

    Raises:
        RegistrationError: If the type is not a :class:`ConfigModel`, a field
            lacks a :class:`Property` marker, two fields share a key, a key
            is malformed, a field type is unsupported, or a default does not
            match its field type.
    """
    cached = _REGISTRY.get(config_type)
    if cached is not None:
        return cached
    with _LOCK:
        cached = _REGISTRY.get(config_type)
        if cached is None:
            cached = _build_descriptors(config_type)
            _REGISTRY[config_type] = cached
            logger.debug(
                "Registered %s with %d properties",
                config_type.__name__,
                len(cached),
            )
    return cached


def descriptors_by_key(config_type: type[ConfigModel]) -> dict[str, BindingDescriptor]:
    return {descriptor.key: descriptor for descriptor in describe(config_type)}


def descriptors_by_field(config_type: type[ConfigModel]) -> dict[str, BindingDescriptor]:
    return {descriptor.field_name: descriptor for descriptor in describe(config_type)}


def _build_descriptors(config_type: type[ConfigModel]) -> tuple[BindingDescriptor, ...]:
    if not (isinstance(config_type, type) and issubclass(config_type, ConfigModel)):
        msg = f"{config_type!r} is not a ConfigModel subclass"
        raise RegistrationError(msg)

    descriptors: list[BindingDescriptor] = []
    seen: dict[str, str] = {}
    for field_name, field_info in config_type.model_fields.items():
        where = f"{config_type.__name__}.{field_name}"
        prop = field_marker(field_info, Property)
        if prop is None:
            msg = f"{where} has no Property(...) marker"
            raise RegistrationError(msg)
        if not _KEY_PATTERN.match(prop.key):
            msg = f"{where} declares malformed property key {prop.key!r}"
            raise RegistrationError(msg)
        if prop.key in seen:
            msg = f"{where} reuses property key {prop.key!r} already bound to {seen[prop.key]}"
            raise RegistrationError(msg)
        seen[prop.key] = field_name

        value_type, enum_type = _value_type(field_info.annotation, where)
        sensitive = field_marker(field_info, Sensitive) is not None
        default = _default(field_info)
        if default is not REQUIRED:
            _check_default(default, value_type, enum_type, where)

        descriptors.append(
            BindingDescriptor(
                key=prop.key,
                field_name=field_name,
                value_type=value_type,
                default=default,
                sensitive=sensitive,
                description=field_info.description,
                enum_type=enum_type,
            )
        )
    return tuple(descriptors)


def _value_type(annotation: Any, where: str) -> tuple[ValueType, type[Enum] | None]:
    if annotation is str:
        return ValueType.STRING, None
    if annotation is bool:
        return ValueType.BOOLEAN, None
    if isinstance(annotation, type) and issubclass(annotation, Enum):
        return ValueType.ENUM, annotation

    origin = get_origin(annotation)
    args = get_args(annotation)
    if origin in (Union, types.UnionType) and set(args) == {str, type(None)}:
        return ValueType.OPTIONAL_STRING, None
    if origin is tuple and args == (str, Ellipsis):
        return ValueType.LIST, None

    msg = f"{where} has unsupported type {annotation!r}"
    raise RegistrationError(msg)


def _default(field_info: FieldInfo) -> Any:
    if field_info.is_required():
        return REQUIRED
    return field_info.get_default(call_default_factory=True)


def _check_default(
    default: Any,
    value_type: ValueType,
    enum_type: type[Enum] | None,
    where: str,
) -> None:
    if value_type is ValueType.STRING:
        ok = isinstance(default, str)
    elif value_type is ValueType.BOOLEAN:
        ok = isinstance(default, bool)
    elif value_type is ValueType.ENUM:
        ok = enum_type is not None and isinstance(default, enum_type)
    elif value_type is ValueType.OPTIONAL_STRING:
        ok = default is None or isinstance(default, str)
    else:
        ok = isinstance(default, tuple) and all(isinstance(item, str) for item in default)
    if not ok:
        msg = f"{where} default of type {type(default).__name__} does not match {value_type}"
        raise RegistrationError(msg)
