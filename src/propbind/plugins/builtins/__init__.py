"""Configuration types shipped with the platform."""

from __future__ import annotations

from typing import TYPE_CHECKING

from propbind.plugins.builtins.lakehouse import LakehouseConfig, TableType
from propbind.plugins.builtins.mysql_event_listener import MysqlEventListenerConfig
from propbind.plugins.builtins.openlineage import OpenLineageTransport, OpenLineageTransportConfig
from propbind.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from propbind.binding.model import ConfigModel

__all__ = [
    "BuiltinConfigTypesPlugin",
    "LakehouseConfig",
    "MysqlEventListenerConfig",
    "OpenLineageTransport",
    "OpenLineageTransportConfig",
    "TableType",
]


class BuiltinConfigTypesPlugin:
    """Registers the built-in configuration types."""

    @hookimpl
    def propbind_config_types(self) -> dict[str, type[ConfigModel]]:
        return {
            "lakehouse": LakehouseConfig,
            "mysql-event-listener": MysqlEventListenerConfig,
            "openlineage-transport": OpenLineageTransportConfig,
        }
