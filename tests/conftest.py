from datetime import datetime, timezone
from typing import List

import pytest

from core.notifier import NotifyResult


class RecordingNotifier:
    """假的 notifier：只記錄訊息，不打網路"""

    def __init__(self, ok: bool = True) -> None:
        self.ok = ok
        self.messages: List[str] = []

    async def send(self, message: str) -> NotifyResult:
        self.messages.append(message)
        return NotifyResult(ok=self.ok, error=None if self.ok else "HTTP 500")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TELEGRAM_BOT_TOKEN",
        "TELEGRAM_CHAT_ID",
        "TELEGRAM_API_HOST",
        "DISCOUNT_CODES_FILE",
        "OTEL_EXPORTER_OTLP_ENDPOINT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def before_expiry() -> datetime:
    return datetime(2026, 2, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def after_expiry() -> datetime:
    # FEB15 到 2026-02-23 23:59:59 EST = 2026-02-24 04:59:59 UTC
    return datetime(2026, 2, 24, 5, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def failing_notifier() -> RecordingNotifier:
    return RecordingNotifier(ok=False)
