"""Configuration of the OpenLineage event listener transport."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

from pydantic import Field

from propbind.binding import ConfigModel, Property


class OpenLineageTransport(StrEnum):
    CONSOLE = "console"
    HTTP = "http"


class OpenLineageTransportConfig(ConfigModel):
    transport: Annotated[
        OpenLineageTransport,
        Property("openlineage-event-listener.transport.type"),
        Field(description="Type of transport used to emit lineage information"),
    ] = OpenLineageTransport.CONSOLE
