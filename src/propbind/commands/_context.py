"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``.  Plugins are loaded lazily so ``--help`` never
imports third-party entry points.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from propbind.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from propbind.config.settings import PropbindSettings
    from propbind.services.config import ConfigService
    from propbind.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: PropbindSettings) -> None:
        self.settings = settings
        self._service: ConfigService | None = None

        from propbind.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> ConfigService:
        """The configuration service (plugins loaded on first access)."""
        if self._service is None:
            from propbind.plugins.manager import PluginManager
            from propbind.services.config import ConfigService

            plugins = PluginManager()
            plugins.discover_and_load()
            self._service = ConfigService(plugins, strict=self.settings.strict)
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout, warnings on stderr (human mode only).
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
