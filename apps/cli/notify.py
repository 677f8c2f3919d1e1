import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, Optional, Sequence

from core.log_config import setup_logging
from core.notifier import TelegramNotifier
from domains.payment.formatters import EVENT_FORMATTERS

logger = logging.getLogger(__name__)

# 用來確認 Telegram 設定的範例事件
SAMPLE_RESOURCES: Dict[str, Dict[str, Any]] = {
    "PAYMENT.CAPTURE.COMPLETED": {
        "id": "TEST-CAPTURE-0001",
        "status": "COMPLETED",
        "create_time": "2026-01-15T17:30:00Z",
        "amount": {"currency_code": "USD", "value": "42.00"},
        "shipping": {
            "name": {"full_name": "Test Customer"},
            "address": {
                "address_line_1": "1 Main St",
                "admin_area_2": "Springfield",
                "admin_area_1": "IL",
                "postal_code": "62701",
            },
        },
    },
    "CHECKOUT.ORDER.COMPLETED": {
        "id": "TEST-ORDER-0001",
        "create_time": "2026-01-15T17:30:00Z",
        "purchase_units": [
            {
                "amount": {"currency_code": "USD", "value": "42.00"},
                "items": [
                    {"name": "Sample item", "quantity": "2", "unit_amount": {"value": "21.00"}}
                ],
            }
        ],
    },
    "PAYMENT.SALE.COMPLETED": {
        "id": "TEST-SALE-0001",
        "create_time": "2026-01-15T17:30:00Z",
        "amount": {"total": "42.00", "currency": "USD"},
    },
}


def build_message(message: Optional[str], sample: Optional[str]) -> str:
    if sample:
        formatted = EVENT_FORMATTERS[sample](SAMPLE_RESOURCES[sample])
        if formatted is None:
            raise ValueError(f"Sample {sample} produced no message")
        return formatted
    return message or "✅ Test notification"


async def run(message: str) -> bool:
    result = await TelegramNotifier.from_env().send(message)
    return result.ok


def main(argv: Optional[Sequence[str]] = None) -> int:
    setup_logging()
    parser = argparse.ArgumentParser(description="Send a test Telegram notification")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--message", "-m", help="free-form message text")
    group.add_argument(
        "--sample",
        choices=sorted(SAMPLE_RESOURCES),
        help="format a sample PayPal event and send it",
    )
    args = parser.parse_args(argv)

    text = build_message(args.message, args.sample)
    if asyncio.run(run(text)):
        logger.info(" 🎉 Notification delivered.")
        return 0
    logger.error(" ❌ Notification was not delivered.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
