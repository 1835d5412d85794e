"""Reusable pytest suite for configuration types.

Subclass in a ``Test*`` class and supply fixtures; the inherited tests
cover defaults, explicit mappings, key coverage, idempotence, and the
redaction round trip::

    class TestLakehouseConfig(ConfigConformanceSuite):
        config_type = LakehouseConfig
        explicit_mappings = [
            ({"lakehouse.table-type": "hive"}, LakehouseConfig(table_type=TableType.HIVE)),
        ]

        def expected_defaults(self):
            return record_defaults(LakehouseConfig).set("table_type", TableType.ICEBERG)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, ClassVar

from propbind.binding.binder import bind
from propbind.binding.descriptors import describe
from propbind.binding.model import ConfigModel
from propbind.binding.redaction import render
from propbind.testing.assertions import (
    DefaultsRecorder,
    PropertyMapping,
    assert_defaults_match,
    assert_explicit_mappings,
    assert_fields_equal,
    assert_recorded_defaults,
)


class ConfigConformanceSuite(ABC):
    """Conformance tests shared by every configuration type.

    Subclasses set ``config_type`` and ``explicit_mappings`` and must
    implement :meth:`expected_defaults`.
    """

    config_type: ClassVar[type[ConfigModel]]
    explicit_mappings: ClassVar[Sequence[PropertyMapping]] = ()

    @abstractmethod
    def expected_defaults(self) -> ConfigModel | DefaultsRecorder[Any]:
        """Return the expected default state, preferably as a recorder."""

    def test_defaults(self) -> None:
        expected = self.expected_defaults()
        if isinstance(expected, DefaultsRecorder):
            assert_recorded_defaults(expected)
        else:
            assert_defaults_match(self.config_type, expected)

    def test_explicit_property_mappings(self) -> None:
        assert_explicit_mappings(self.config_type, self.explicit_mappings)

    def test_binding_is_idempotent(self) -> None:
        for properties, _expected in self.explicit_mappings:
            first = bind(self.config_type, properties).unwrap()
            second = bind(self.config_type, properties).unwrap()
            assert_fields_equal(second, first, context="second binding")

    def test_rendered_view_binds_back(self) -> None:
        descriptors = describe(self.config_type)
        sensitive_keys = {d.key for d in descriptors if d.sensitive}
        for properties, _expected in self.explicit_mappings:
            config = bind(self.config_type, properties).unwrap()
            rendered = {
                key: value
                for key, value in render(config).items()
                if value is not None and key not in sensitive_keys
            }
            secrets = {key: raw for key, raw in properties.items() if key in sensitive_keys}
            rebound = bind(self.config_type, {**secrets, **rendered}).unwrap()
            for descriptor in descriptors:
                if descriptor.sensitive or descriptor.key not in rendered:
                    continue
                assert getattr(rebound, descriptor.field_name) == getattr(
                    config, descriptor.field_name
                ), descriptor.key

    def test_sensitive_values_are_redacted(self) -> None:
        descriptors = describe(self.config_type)
        for properties, _expected in self.explicit_mappings:
            config = bind(self.config_type, properties).unwrap()
            rendered = render(config)
            for descriptor in descriptors:
                raw = properties.get(descriptor.key)
                if not descriptor.sensitive or not raw:
                    continue
                assert rendered[descriptor.key] != raw, descriptor.key
                leaks = [
                    key for key, value in rendered.items() if value is not None and raw in value
                ]
                assert not leaks, f"{descriptor.key} leaks through {', '.join(leaks)}"
