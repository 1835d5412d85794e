"""Configuration of the lakehouse connector."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

from pydantic import Field

from propbind.binding import ConfigModel, Property


class TableType(StrEnum):
    """Table formats the lakehouse connector can create."""

    HIVE = "hive"
    ICEBERG = "iceberg"
    DELTA = "delta"
    HUDI = "hudi"


class LakehouseConfig(ConfigModel):
    """``lakehouse.*`` properties."""

    table_type: Annotated[
        TableType,
        Property("lakehouse.table-type"),
        Field(description="Table format used when creating new tables"),
    ] = TableType.ICEBERG
