"""Property sources — files, override layers, and environment references.

Produces the ordered ``dict[str, str]`` consumed by the binder:

- :func:`load_properties` reads a Java-style ``.properties`` file.
- :func:`merge_properties` layers maps; later layers win.
- :func:`resolve_env_references` expands ``${ENV:NAME}`` in values.

Errors name files, lines, and keys but never property values.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path

_ENV_REFERENCE = re.compile(r"\$\{ENV:([A-Za-z_][A-Za-z0-9_]*)\}")
_COMMENT_PREFIXES = ("#", "!")


class PropertiesFileError(ValueError):
    """A property source cannot be read or resolved."""


def parse_properties(text: str, *, source: str = "<string>") -> dict[str, str]:
    """Parse ``key=value`` / ``key: value`` lines into an ordered dict.

    Blank lines and lines starting with ``#`` or ``!`` are skipped.  Keys
    and values are stripped of surrounding whitespace.

    Raises:
        PropertiesFileError: On a line without separator, an empty key,
            or a key defined twice.
    """
    properties: dict[str, str] = {}
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(_COMMENT_PREFIXES):
            continue
        positions = [pos for pos in (stripped.find("="), stripped.find(":")) if pos >= 0]
        if not positions:
            msg = f"{source}:{lineno}: expected 'key=value'"
            raise PropertiesFileError(msg)
        split_at = min(positions)
        key = stripped[:split_at].strip()
        value = stripped[split_at + 1 :].strip()
        if not key:
            msg = f"{source}:{lineno}: empty property key"
            raise PropertiesFileError(msg)
        if key in properties:
            msg = f"{source}:{lineno}: duplicate property {key!r}"
            raise PropertiesFileError(msg)
        properties[key] = value
    return properties


def load_properties(path: Path) -> dict[str, str]:
    """Read and parse a ``.properties`` file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read properties file {path}: {exc.strerror or exc}"
        raise PropertiesFileError(msg) from exc
    except UnicodeDecodeError as exc:
        # The decode error carries the raw file bytes; do not chain it.
        msg = f"Properties file {path} is not valid UTF-8 (byte offset {exc.start})"
        raise PropertiesFileError(msg) from None
    return parse_properties(text, source=str(path))


def merge_properties(*layers: Mapping[str, str]) -> dict[str, str]:
    """Merge layers left to right; keys keep their first-seen position."""
    merged: dict[str, str] = {}
    for layer in layers:
        merged.update(layer)
    return merged


def resolve_env_references(
    properties: Mapping[str, str],
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Replace ``${ENV:NAME}`` in every value with the variable's value.

    Raises:
        PropertiesFileError: If a referenced variable is not set.
    """
    env = os.environ if environ is None else environ
    resolved: dict[str, str] = {}
    for key, value in properties.items():
        missing = [name for name in _ENV_REFERENCE.findall(value) if name not in env]
        if missing:
            msg = f"Property {key!r} references unset environment variable(s): {', '.join(missing)}"
            raise PropertiesFileError(msg)
        resolved[key] = _ENV_REFERENCE.sub(lambda match: env[match.group(1)], value)
    return resolved
