"""CLI settings — flags and ``PROPBIND_*`` environment variables in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``PROPBIND_*`` prefix
  3. Code defaults

Flags default to ``None`` at the Click layer so that an omitted flag does
not mask an environment variable.
"""

from __future__ import annotations

from typing import Any

from pydantic_settings import BaseSettings


class PropbindSettings(BaseSettings):
    """Frozen settings stored on the CLI context.

    Attributes:
        json_output: Emit results as JSON.
        verbose: DEBUG logging for ``propbind.*``.
        log_json: JSON log lines on stderr.
        strict: Report properties that match no field of the checked type.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PROPBIND_",
    }

    json_output: bool = False
    verbose: bool = False
    log_json: bool = False
    strict: bool = False

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> PropbindSettings:
        """Build settings, letting only flags that were actually given override env vars."""
        given = {name: value for name, value in cli_flags.items() if value is not None}
        return cls(**given)
