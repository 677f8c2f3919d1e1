import os
from dataclasses import dataclass
from typing import Optional

# 每次呼叫都重新讀環境變數，不做 process 內快取 (serverless 每次都是新的請求)

DEFAULT_TELEGRAM_HOST = "api.telegram.org"


@dataclass(frozen=True)
class TelegramSettings:
    bot_token: Optional[str]
    chat_id: Optional[str]
    api_host: str = DEFAULT_TELEGRAM_HOST

    @classmethod
    def from_env(cls) -> "TelegramSettings":
        return cls(
            bot_token=os.getenv("TELEGRAM_BOT_TOKEN") or None,
            chat_id=os.getenv("TELEGRAM_CHAT_ID") or None,
            api_host=os.getenv("TELEGRAM_API_HOST", DEFAULT_TELEGRAM_HOST),
        )

    @property
    def is_complete(self) -> bool:
        return bool(self.bot_token and self.chat_id)


def discount_codes_file() -> Optional[str]:
    return os.getenv("DISCOUNT_CODES_FILE") or None


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def otlp_endpoint() -> Optional[str]:
    return os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT") or None


def telemetry_enabled() -> bool:
    return otlp_endpoint() is not None
