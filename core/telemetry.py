from typing import Optional

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from core.config import otlp_endpoint, telemetry_enabled


def setup_telemetry(service_name: str) -> TracerProvider:
    """
    建立 TracerProvider，span 經 OTLP (gRPC) 送到 OTEL_EXPORTER_OTLP_ENDPOINT
    :param service_name: paypal-webhook / validate-discount
    :return: TracerProvider:
    """
    provider = TracerProvider(
        resource=Resource.create(
            attributes={
                "service.name": service_name,
                "service.version": "1.0.0",
                "deployment.role": "serverless-function",
            }
        )
    )

    exporter = OTLPSpanExporter(
        endpoint=otlp_endpoint() or "http://localhost:4317", insecure=True
    )
    provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(provider)
    return provider


def instrument_app(app: Optional[FastAPI]) -> None:
    """FastAPI 進來的 request 跟送往 Telegram 的 httpx 呼叫都自動產生 span"""
    # 1. FastAPI
    if app:
        FastAPIInstrumentor.instrument_app(app)

    # 2. HTTPX (Telegram)
    HTTPXClientInstrumentor().instrument()


def configure_telemetry(app: FastAPI, service_name: str) -> Optional[TracerProvider]:
    # 沒設定 OTLP endpoint 就不啟用 (本機 / 測試)
    if not telemetry_enabled():
        return None
    provider = setup_telemetry(service_name)
    instrument_app(app)
    return provider
