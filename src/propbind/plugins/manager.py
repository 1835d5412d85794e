"""Plugin discovery and configuration type collection.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus the built-in plugin shipping the platform's own configuration types.
Each contributed type is registered with the descriptor registry on
collection, so a misdeclared type is reported at startup.
"""

from __future__ import annotations

import inspect
import logging

import pluggy

from propbind.binding.descriptors import describe
from propbind.binding.errors import RegistrationError
from propbind.binding.model import ConfigModel
from propbind.binding.validation import constraints
from propbind.plugins.hookspecs import PropbindHookSpec

PROJECT_NAME = "propbind"
ENTRY_POINT_GROUP = "propbind.plugins"
BUILTIN_PLUGIN_NAME = "builtin"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and configuration type lookup."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(PropbindHookSpec)
        self._loaded: bool = False

    def discover_and_load(self, *, builtins: bool = True) -> list[str]:
        """Load the built-in plugin and every ``propbind.plugins`` entry point.

        Returns a list of loaded plugin names.
        """
        if builtins and self._pm.get_plugin(BUILTIN_PLUGIN_NAME) is None:
            from propbind.plugins.builtins import BuiltinConfigTypesPlugin

            self.register_plugin(BuiltinConfigTypesPlugin(), name=BUILTIN_PLUGIN_NAME)
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [name for name, _plugin in self._pm.list_name_plugin()]

    def config_types(self) -> dict[str, type[ConfigModel]]:
        """Collect configuration types from every plugin, sorted by name.

        Plugins are consulted in registration order; on a name clash the
        first registration wins.  Misdeclared types and duplicate names are
        logged and skipped.
        """
        collected: dict[str, type[ConfigModel]] = {}
        for plugin_name, plugin in self._pm.list_name_plugin():
            for name, config_type in self._plugin_config_types(plugin, plugin_name).items():
                existing = collected.get(name)
                if existing is not None and existing is not config_type:
                    logger.warning(
                        "Skipping configuration type %r from plugin %s: name already registered",
                        name,
                        plugin_name,
                    )
                    continue
                collected[name] = config_type
        return dict(sorted(collected.items()))

    @staticmethod
    def _plugin_config_types(plugin: object, plugin_name: str) -> dict[str, type[ConfigModel]]:
        """Configuration types exposed by a single plugin instance."""
        hook = getattr(plugin, "propbind_config_types", None)
        if hook is None:
            return {}

        try:
            type_map = hook()
        except Exception:
            logger.warning(
                "Failed to collect configuration types from plugin %s",
                plugin_name,
                exc_info=True,
            )
            return {}

        if type_map is None:
            return {}
        if not isinstance(type_map, dict):
            logger.warning(
                "Plugin %s returned non-dict configuration type registrations",
                plugin_name,
            )
            return {}

        accepted: dict[str, type[ConfigModel]] = {}
        for name, config_type in type_map.items():
            try:
                describe(config_type)
                constraints(config_type)
            except RegistrationError:
                logger.warning(
                    "Skipping configuration type %r from plugin %s",
                    name,
                    plugin_name,
                    exc_info=True,
                )
                continue
            accepted[name] = config_type
        return accepted

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("propbind")`` sets a ``propbind_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "propbind_impl", None):
                return True
        return False
