"""ConfigService — list, document, and check configuration types.

Types are looked up by the names plugins register them under.  Every
payload renders values through the redaction view.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from propbind.binding.binder import bind
from propbind.binding.descriptors import describe, descriptors_by_key
from propbind.binding.redaction import display_value, render
from propbind.binding.validation import constraints, validate
from propbind.config.sources import (
    PropertiesFileError,
    load_properties,
    merge_properties,
    resolve_env_references,
)
from propbind.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from pathlib import Path

    from propbind.binding.errors import BindingProblem
    from propbind.binding.model import ConfigModel
    from propbind.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class ConfigService:
    """Operations over the configuration types registered by plugins."""

    def __init__(self, plugins: PluginManager, *, strict: bool = False) -> None:
        self._plugins = plugins
        self._strict = strict
        self._types: dict[str, type[ConfigModel]] | None = None

    @property
    def types(self) -> dict[str, type[ConfigModel]]:
        """Registered configuration types (collected lazily)."""
        if self._types is None:
            if not self._plugins.is_loaded:
                self._plugins.discover_and_load()
            self._types = self._plugins.config_types()
        return self._types

    def list_types(self) -> ServiceResult:
        items = [
            {
                "name": name,
                "class": config_type.__name__,
                "properties": len(describe(config_type)),
            }
            for name, config_type in self.types.items()
        ]
        return ServiceResult(ok=True, op="list_types", data={"items": items, "count": len(items)})

    def describe(self, name: str) -> ServiceResult:
        """Document every property of the type registered as *name*."""
        config_type = self.types.get(name)
        if config_type is None:
            return self._unknown_type("describe", name)

        properties = [
            {
                "key": d.key,
                "type": d.type_name,
                "default": None if d.required else display_value(d, d.default),
                "required": d.required,
                "sensitive": d.sensitive,
                "description": d.description or "",
            }
            for d in describe(config_type)
        ]
        rules = [
            {"constraint": c.name, "scope": str(c.scope), "message": c.message}
            for c in constraints(config_type)
        ]
        return ServiceResult(
            ok=True,
            op="describe",
            data={
                "name": name,
                "class": config_type.__name__,
                "properties": properties,
                "constraints": rules,
            },
        )

    def check(
        self,
        name: str,
        paths: Sequence[Path] = (),
        *,
        overrides: Mapping[str, str] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> ServiceResult:
        """Load property sources, then bind and validate them as *name*.

        Later files override earlier ones and *overrides* win over all files.
        """
        op = "check"
        config_type = self.types.get(name)
        if config_type is None:
            return self._unknown_type(op, name)

        try:
            layers = [load_properties(path) for path in paths]
            properties = resolve_env_references(
                merge_properties(*layers, overrides or {}),
                environ,
            )
        except PropertiesFileError as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="PROPERTIES_FILE", message=str(exc)),
            )

        result = bind(config_type, properties, strict=self._strict)
        if result.config is None:
            return self._rejected(op, name, "BINDING_FAILED", result.errors)

        violations = validate(result.config)
        if violations:
            return self._rejected(op, name, "VALIDATION_FAILED", violations)

        known = descriptors_by_key(config_type)
        warnings = [f"Unused property {key}" for key in properties if key not in known]
        logger.debug("Checked %s: %d properties, %d unused", name, len(properties), len(warnings))
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "name": name,
                "class": config_type.__name__,
                "properties": render(result.config),
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _unknown_type(self, op: str, name: str) -> ServiceResult:
        known = ", ".join(self.types) or "none"
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code="UNKNOWN_TYPE",
                message=f"No configuration type named {name!r} (known: {known})",
            ),
        )

    @staticmethod
    def _rejected(
        op: str,
        name: str,
        code: str,
        problems: Sequence[BindingProblem],
    ) -> ServiceResult:
        detail: dict[str, Any] = {
            "problems": [problem.model_dump(mode="json") for problem in problems],
        }
        noun = "problem" if len(problems) == 1 else "problems"
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code=code,
                message=f"{name}: {len(problems)} {noun}",
                detail=detail,
            ),
        )
