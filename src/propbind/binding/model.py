"""Configuration model base class, field markers, and fluent builder.

A configuration type is a frozen pydantic model whose fields carry
``typing.Annotated`` markers instead of framework-specific decorators::

    class LakehouseConfig(ConfigModel):
        table_type: Annotated[
            TableType,
            Property("lakehouse.table-type"),
            Field(description="Default table type for new tables"),
        ] = TableType.ICEBERG

Markers:

- :class:`Property`: the property key bound to the field (mandatory).
- :class:`Sensitive`: the value is masked in every rendering.
- :class:`NotNull`: a single-field constraint rejecting ``None``.

Instances are frozen.  Code that needs to assemble one step by step
(the binder, tests, an owning component) goes through
:class:`ConfigBuilder`, whose ``set()`` returns the builder for chaining.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Self, TypeVar

from pydantic import BaseModel

if TYPE_CHECKING:
    from pydantic.fields import FieldInfo

REDACTED = "[REDACTED]"

MarkerT = TypeVar("MarkerT")
ConfigT = TypeVar("ConfigT", bound="ConfigModel")


@dataclass(frozen=True)
class Property:
    """Binds a field to a property key such as ``mysql-event-listener.db.url``."""

    key: str


@dataclass(frozen=True)
class Sensitive:
    """Marks a field whose value must never appear in logs or diagnostics."""


@dataclass(frozen=True)
class NotNull:
    """Declares that a bound instance must carry a value for the field."""

    message: str = "may not be null"


def field_marker(field_info: FieldInfo, marker_type: type[MarkerT]) -> MarkerT | None:
    """Return the first ``Annotated`` marker of *marker_type* on a field."""
    for item in field_info.metadata:
        if isinstance(item, marker_type):
            return item
    return None


class ConfigModel(BaseModel):
    """Base class for every bindable configuration type.

    ``repr()`` masks sensitive fields, so instances can be logged or shown
    in assertion messages safely.
    """

    model_config = {
        "frozen": True,
        "extra": "forbid",
        "hide_input_in_errors": True,
    }

    @classmethod
    def builder(cls) -> ConfigBuilder[Self]:
        """Start a builder populated with nothing but declared defaults."""
        return ConfigBuilder(cls)

    def to_builder(self) -> ConfigBuilder[Self]:
        """Start a builder seeded with this instance's field values."""
        values = {name: getattr(self, name) for name in type(self).model_fields}
        return ConfigBuilder(type(self), values)

    def __repr_args__(self) -> Any:
        fields = type(self).model_fields
        for name, value in super().__repr_args__():
            info = fields.get(name) if name else None
            if info is not None and field_marker(info, Sensitive) is not None:
                yield name, REDACTED
            else:
                yield name, value


class ConfigBuilder(Generic[ConfigT]):
    """Mutable staging area that freezes into a configuration instance.

    Fields that are never set keep their declared default.
    """

    def __init__(self, config_type: type[ConfigT], values: dict[str, Any] | None = None) -> None:
        self._config_type = config_type
        self._values: dict[str, Any] = dict(values or {})

    @property
    def config_type(self) -> type[ConfigT]:
        return self._config_type

    def set(self, field_name: str, value: Any) -> Self:
        """Set one field and return the builder for chaining."""
        if field_name not in self._config_type.model_fields:
            msg = f"{self._config_type.__name__} has no field {field_name!r}"
            raise AttributeError(msg)
        self._values[field_name] = value
        return self

    def values(self) -> dict[str, Any]:
        """Return a copy of the fields set so far."""
        return dict(self._values)

    def build(self) -> ConfigT:
        """Freeze the staged values into an immutable instance."""
        return self._config_type.model_validate(self._values)
