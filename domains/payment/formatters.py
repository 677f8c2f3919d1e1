"""
PayPal event -> Telegram 訊息

每個 formatter 都是純函式：吃 resource dict，回傳訊息字串；
回傳 None 代表這個事件不需要通知。
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional
from zoneinfo import ZoneInfo

from domains.payment.schemas import Address, Money, Resource, Shipping

logger = logging.getLogger(__name__)

Formatter = Callable[[Mapping[str, Any]], Optional[str]]

DISPLAY_TIMEZONE = ZoneInfo("America/New_York")
MISSING = "N/A"
INVALID_DATE = "Invalid Date"


def _text(value: Any) -> str:
    if value is None:
        return MISSING
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _part(value: Any) -> str:
    return str(value) if value else ""


def format_address(address: Optional[Address]) -> str:
    if address is None:
        return MISSING
    return (
        f"{_part(address.address_line_1)}, "
        f"{_part(address.admin_area_2)}, "
        f"{_part(address.admin_area_1)} "
        f"{_part(address.postal_code)}"
    ).strip()


def format_timestamp(create_time: Any) -> str:
    """ISO 8601 -> 美東時間 en-US 格式，例如 "1/15/2024, 7:00:00 AM" """
    if not create_time or not isinstance(create_time, str):
        return INVALID_DATE
    try:
        parsed = datetime.fromisoformat(create_time)
    except (TypeError, ValueError):
        return INVALID_DATE
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    local = parsed.astimezone(DISPLAY_TIMEZONE)
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return (
        f"{local.month}/{local.day}/{local.year}, "
        f"{hour}:{local.minute:02d}:{local.second:02d} {meridiem}"
    )


def _customer(shipping: Optional[Shipping]) -> str:
    if shipping is None or shipping.name is None:
        return MISSING
    return _text(shipping.name.full_name)


def _ship_to(shipping: Optional[Shipping]) -> str:
    if shipping is None:
        return MISSING
    return format_address(shipping.address)


def _value(amount: Optional[Money]) -> str:
    return _text(amount.value if amount else None)


def format_capture_completed(raw: Mapping[str, Any]) -> Optional[str]:
    resource = Resource.model_validate(raw)
    amount = resource.amount

    supplementary = resource.supplementary_data
    related_ids = supplementary.get("related_ids") if isinstance(supplementary, dict) else None
    if not isinstance(related_ids, dict):
        related_ids = {}
    details = {
        "transaction_id": resource.id,
        "amount": f"{amount.currency_code if amount else MISSING} {_value(amount)}",
        "status": resource.status,
        "create_time": resource.create_time,
        "customer_name": _customer(resource.shipping),
        "shipping_address": _ship_to(resource.shipping),
        "order_id": related_ids.get("order_id") or MISSING,
    }
    logger.info(f" 💰 NEW SALE: {details}")

    return (
        "🎉 NEW SALE!\n\n"
        f"Amount: ${_value(amount)}\n"
        f"Customer: {details['customer_name']}\n"
        f"Ship to: {details['shipping_address']}\n"
        f"Transaction: {_text(resource.id)}\n"
        f"Time: {format_timestamp(resource.create_time)}"
    )


def format_order_completed(raw: Mapping[str, Any]) -> Optional[str]:
    resource = Resource.model_validate(raw)
    if not resource.purchase_units:
        return None

    unit = resource.purchase_units[0]
    items_list = "\n".join(
        f"  - {_text(item.name)} x{_text(item.quantity)}: ${_value(item.unit_amount)}"
        for item in unit.items
    )

    message = (
        "🎉 NEW ORDER!\n\n"
        f"Amount: ${_value(unit.amount)}\n"
        f"Customer: {_customer(unit.shipping)}\n"
        f"Ship to: {_ship_to(unit.shipping)}\n"
        f"Items:\n{items_list}\n"
        f"Order ID: {_text(resource.id)}\n"
        f"Time: {format_timestamp(resource.create_time)}"
    )
    logger.info(f" 💰 NEW ORDER: {message}")
    return message


def format_sale_completed(raw: Mapping[str, Any]) -> Optional[str]:
    resource = Resource.model_validate(raw)
    total = resource.amount.total if resource.amount else None

    message = (
        "💵 SALE COMPLETED!\n\n"
        f"Amount: ${_text(total)}\n"
        f"Transaction: {_text(resource.id)}\n"
        f"Time: {format_timestamp(resource.create_time)}"
    )
    logger.info(f" ✅ SALE: {message}")
    return message


EVENT_FORMATTERS: Dict[str, Formatter] = {
    "PAYMENT.CAPTURE.COMPLETED": format_capture_completed,
    "CHECKOUT.ORDER.COMPLETED": format_order_completed,
    "PAYMENT.SALE.COMPLETED": format_sale_completed,
}
