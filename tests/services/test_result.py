"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from propbind.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="describe", data={"name": "lakehouse"})
        assert result.ok is True
        assert result.op == "describe"
        assert result.data == {"name": "lakehouse"}
        assert result.warnings == []
        assert result.error is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="UNKNOWN_TYPE", message="No configuration type named 'x'")
        result = ServiceResult(ok=False, op="check", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "UNKNOWN_TYPE"
        assert result.error.detail == {}

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="check", data={"k": "v"}, warnings=["Unused property x"])
        parsed = json.loads(result.model_dump_json())
        assert parsed == {
            "ok": True,
            "op": "check",
            "data": {"k": "v"},
            "warnings": ["Unused property x"],
            "error": None,
        }

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="check")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]
