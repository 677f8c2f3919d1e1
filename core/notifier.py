import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from core.config import TelegramSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotifyResult:
    ok: bool
    error: Optional[str] = None


class TelegramNotifier:
    """
    把訊息丟到 Telegram chat (Bot API sendMessage)
    send() 永遠不會 raise，失敗一律轉成 NotifyResult(ok=False)
    """

    def __init__(
        self,
        settings: TelegramSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        # 測試時注入 httpx.MockTransport
        self._transport = transport

    @classmethod
    def from_env(cls) -> "TelegramNotifier":
        return cls(TelegramSettings.from_env())

    @property
    def url(self) -> str:
        return (
            f"https://{self.settings.api_host}/bot{self.settings.bot_token}/sendMessage"
        )

    async def send(self, message: str) -> NotifyResult:
        logger.info(f" 📣 NOTIFICATION: {message}")

        if not self.settings.is_complete:
            logger.error(
                " ❌ [Telegram] Missing credentials - "
                "set TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID"
            )
            return NotifyResult(ok=False, error="missing credentials")

        payload = {
            "chat_id": self.settings.chat_id,
            "text": message,
            "parse_mode": "HTML",
        }
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(self.url, json=payload)
        except Exception as e:
            logger.error(f" ❌ [Telegram] Request error: {e}")
            return NotifyResult(ok=False, error=str(e))

        if response.status_code != 200:
            logger.error(
                f" ❌ [Telegram] API error: {response.status_code} {response.text}"
            )
            return NotifyResult(ok=False, error=f"HTTP {response.status_code}")

        logger.info(" ✅ [Telegram] Notification sent.")
        return NotifyResult(ok=True)
