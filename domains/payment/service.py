import logging
from typing import Mapping, Optional, Protocol

from opentelemetry import trace

from core.notifier import NotifyResult
from domains.payment.formatters import EVENT_FORMATTERS, Formatter
from domains.payment.schemas import WebhookEvent

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class Notifier(Protocol):
    async def send(self, message: str) -> NotifyResult: ...


class WebhookService:
    def __init__(
        self,
        notifier: Notifier,
        formatters: Optional[Mapping[str, Formatter]] = None,
    ) -> None:
        self.notifier = notifier
        self.formatters = EVENT_FORMATTERS if formatters is None else formatters

    async def handle_event(self, event: WebhookEvent) -> None:
        """
        依 event_type 找 formatter -> 產生訊息 -> 通知
        不論結果如何都不往外丟錯，呼叫端一律回 200 給 PayPal
        """
        logger.info(f" 📨 [Webhook] Event type: {event.event_type}")

        with tracer.start_as_current_span("paypal.webhook.dispatch") as span:
            span.set_attribute("paypal.event_type", event.event_type or "")

            formatter = self.formatters.get(event.event_type or "")
            if formatter is None:
                logger.info(f" 🤷 [Webhook] Unhandled event type: {event.event_type}")
                return

            try:
                message = formatter(event.resource)
            except Exception:
                # 格式錯的 resource 只記 log，不能讓 PayPal 一直重送
                logger.exception(
                    f" ❌ [Webhook] Could not format {event.event_type} resource"
                )
                span.set_attribute("paypal.formatted", False)
                return

            if message is None:
                logger.info(f" ⏭️ [Webhook] Nothing to notify for {event.event_type}")
                return

            # 結果只用來標記 span，失敗已經在 notifier 裡記過 log
            result = await self.notifier.send(message)
            span.set_attribute("notification.ok", result.ok)
