"""Type coercion layer — raw property strings to typed field values.

Failure messages describe the expected form only; the raw input is never
part of the message so sensitive values cannot leak through it.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from propbind.binding.descriptors import BindingDescriptor, ValueType

LIST_DELIMITER = ","


class CoercionFailure(ValueError):
    """A raw string cannot be converted to the descriptor's value type."""


def coerce(raw: str, descriptor: BindingDescriptor) -> Any:
    """Convert *raw* into the value type declared by *descriptor*.

    Raises:
        CoercionFailure: If *raw* is not a valid representation.
    """
    return _COERCERS[descriptor.value_type](raw, descriptor)


def _coerce_string(raw: str, descriptor: BindingDescriptor) -> str:
    return raw


def _coerce_boolean(raw: str, descriptor: BindingDescriptor) -> bool:
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    msg = "Invalid boolean value, expected 'true' or 'false'"
    raise CoercionFailure(msg)


def _coerce_enum(raw: str, descriptor: BindingDescriptor) -> Any:
    enum_type = descriptor.enum_type
    assert enum_type is not None
    wanted = raw.lower()
    for member in enum_type:
        if member.name.lower() == wanted:
            return member
    choices = ", ".join(member.name for member in enum_type)
    msg = f"Invalid {enum_type.__name__} value, expected one of: {choices}"
    raise CoercionFailure(msg)


def _coerce_list(raw: str, descriptor: BindingDescriptor) -> tuple[str, ...]:
    if not raw.strip():
        return ()
    items = tuple(item.strip() for item in raw.split(LIST_DELIMITER))
    if any(not item for item in items):
        msg = "Invalid list value, contains an empty element"
        raise CoercionFailure(msg)
    return items


_COERCERS: dict[ValueType, Callable[[str, BindingDescriptor], Any]] = {
    ValueType.STRING: _coerce_string,
    ValueType.BOOLEAN: _coerce_boolean,
    ValueType.ENUM: _coerce_enum,
    # Presence, even of an empty string, yields the raw value.
    ValueType.OPTIONAL_STRING: _coerce_string,
    ValueType.LIST: _coerce_list,
}
