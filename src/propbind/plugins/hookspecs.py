"""Pluggy hook specifications for propbind.

Components contribute the configuration types they bind so that tooling
(documentation, property-file checks) can find them by name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from propbind.binding.model import ConfigModel

hookspec = pluggy.HookspecMarker("propbind")
hookimpl = pluggy.HookimplMarker("propbind")


class PropbindHookSpec:
    """Hook specifications for the propbind plugin system."""

    @hookspec
    def propbind_config_types(self) -> dict[str, type[ConfigModel]] | None:
        """Return name -> configuration type mappings, e.g. ``{"lakehouse": LakehouseConfig}``."""
