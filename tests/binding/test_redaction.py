"""Tests for the redaction view and masked representations."""

from __future__ import annotations

from propbind.binding import REDACTED, bind, render
from propbind.plugins.builtins import MysqlEventListenerConfig
from tests.sample_configs import Compression, ExporterConfig, FlagsConfig


class TestRender:
    def test_values_render_in_property_syntax(self) -> None:
        config = ExporterConfig(
            name="audit",
            enabled=False,
            compression=Compression.GZIP,
            headers=("a", "b"),
        )
        assert render(config) == {
            "exporter.name": "audit",
            "exporter.enabled": "false",
            "exporter.compression": "GZIP",
            "exporter.endpoint": None,
            "exporter.headers": "a,b",
            "exporter.auth.token": REDACTED,
            "exporter.region": "us-east-1",
        }

    def test_sensitive_fields_always_masked(self) -> None:
        assert render(FlagsConfig())["flags.secret"] == REDACTED
        assert render(ExporterConfig(name="x"))["exporter.auth.token"] == REDACTED

    def test_non_sensitive_fields_bind_back(self) -> None:
        original = bind(
            ExporterConfig,
            {
                "exporter.name": "audit",
                "exporter.enabled": "FALSE",
                "exporter.compression": "zstd",
                "exporter.headers": " a , b ",
                "exporter.auth.token": "t0ken",
            },
        ).unwrap()
        rendered = {
            key: value
            for key, value in render(original).items()
            if value is not None and value != REDACTED
        }
        rebound = bind(ExporterConfig, rendered).unwrap()
        assert rebound.model_dump(exclude={"token"}) == original.model_dump(exclude={"token"})


class TestMaskedRepr:
    def test_repr_masks_sensitive_fields(self) -> None:
        config = FlagsConfig(secret="hunter2")
        assert "hunter2" not in repr(config)
        assert "hunter2" not in str(config)
        assert f"secret='{REDACTED}'" in repr(config)

    def test_repr_keeps_plain_fields(self) -> None:
        assert "dry_run=True" in repr(FlagsConfig(dry_run=True))


def test_password_never_rendered() -> None:
    config = bind(MysqlEventListenerConfig, {"mysql-event-listener.db.password": "secret"}).unwrap()
    rendered = render(config)
    assert all("secret" not in (value or "") for value in rendered.values())
    assert "secret" not in repr(config)
    assert "secret" not in str(rendered)
