import pytest
from fastapi import FastAPI

from core.telemetry import configure_telemetry, setup_telemetry


def test_configure_telemetry_disabled_without_endpoint() -> None:
    assert configure_telemetry(FastAPI(), "test-service") is None


def test_setup_telemetry_sets_service_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4317")

    provider = setup_telemetry("test-service")
    try:
        assert provider.resource.attributes["service.name"] == "test-service"
        assert provider.resource.attributes["deployment.role"] == "serverless-function"
    finally:
        provider.shutdown()
