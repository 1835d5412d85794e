"""Redaction view of configuration instances.

Values are rendered in the textual form the coercion layer accepts, so a
rendered non-sensitive value binds back to the same field value.  Sensitive
fields always render as :data:`REDACTED`, whatever their value.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from propbind.binding.descriptors import REQUIRED, BindingDescriptor, ValueType, describe
from propbind.binding.model import REDACTED, ConfigModel

__all__ = ["REDACTED", "display_value", "format_value", "render"]


def format_value(descriptor: BindingDescriptor, value: Any) -> str | None:
    """Render *value* as a property string, or None for an absent value."""
    if value is None or value is REQUIRED:
        return None
    if descriptor.value_type is ValueType.BOOLEAN:
        return "true" if value else "false"
    if descriptor.value_type is ValueType.ENUM and isinstance(value, Enum):
        return value.name
    if descriptor.value_type is ValueType.LIST:
        return ",".join(value)
    return str(value)


def display_value(descriptor: BindingDescriptor, value: Any) -> str | None:
    """Like :func:`format_value`, masking sensitive fields."""
    if descriptor.sensitive:
        return REDACTED
    return format_value(descriptor, value)


def render(config: ConfigModel) -> dict[str, str | None]:
    """Map each property key of *config* to its displayable value."""
    return {
        descriptor.key: display_value(descriptor, getattr(config, descriptor.field_name))
        for descriptor in describe(type(config))
    }
