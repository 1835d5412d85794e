"""Conformance test harness for configuration types."""

from propbind.testing.assertions import (
    DefaultsRecorder,
    assert_defaults_match,
    assert_explicit_mappings,
    assert_fields_equal,
    assert_full_mapping,
    assert_recorded_defaults,
    record_defaults,
)
from propbind.testing.suite import ConfigConformanceSuite

__all__ = [
    "ConfigConformanceSuite",
    "DefaultsRecorder",
    "assert_defaults_match",
    "assert_explicit_mappings",
    "assert_fields_equal",
    "assert_full_mapping",
    "assert_recorded_defaults",
    "record_defaults",
]
