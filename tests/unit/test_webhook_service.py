from typing import Any

import pytest

from domains.payment.schemas import WebhookEvent
from domains.payment.service import WebhookService

SALE_RESOURCE = {
    "id": "SALE-1",
    "create_time": "2024-01-15T12:00:00Z",
    "amount": {"total": "15.00"},
}


@pytest.mark.parametrize(
    "event_type", ["PAYMENT.CAPTURE.DENIED", "payment.sale.completed", "", None]
)
async def test_unrecognized_event_type_sends_nothing(
    notifier: Any, event_type: Any
) -> None:
    service = WebhookService(notifier=notifier)

    await service.handle_event(WebhookEvent(event_type=event_type, resource=SALE_RESOURCE))

    assert notifier.messages == []


async def test_known_event_is_formatted_and_sent(notifier: Any) -> None:
    service = WebhookService(notifier=notifier)

    await service.handle_event(
        WebhookEvent(event_type="PAYMENT.SALE.COMPLETED", resource=SALE_RESOURCE)
    )

    assert len(notifier.messages) == 1
    assert notifier.messages[0].startswith("💵 SALE COMPLETED!")


async def test_order_without_purchase_units_sends_nothing(notifier: Any) -> None:
    service = WebhookService(notifier=notifier)

    await service.handle_event(
        WebhookEvent(
            event_type="CHECKOUT.ORDER.COMPLETED",
            resource={"id": "ORDER-1", "purchase_units": []},
        )
    )

    assert notifier.messages == []


async def test_notification_failure_is_not_raised(failing_notifier: Any) -> None:
    service = WebhookService(notifier=failing_notifier)

    await service.handle_event(
        WebhookEvent(event_type="PAYMENT.SALE.COMPLETED", resource=SALE_RESOURCE)
    )

    assert len(failing_notifier.messages) == 1


async def test_formatter_error_is_logged_not_raised(notifier: Any) -> None:
    def broken(resource: Any) -> str:
        raise KeyError("amount")

    service = WebhookService(notifier=notifier, formatters={"BROKEN": broken})

    await service.handle_event(WebhookEvent(event_type="BROKEN"))

    assert notifier.messages == []


async def test_custom_formatter_table(notifier: Any) -> None:
    service = WebhookService(
        notifier=notifier, formatters={"PING": lambda resource: f"pong {resource['id']}"}
    )

    await service.handle_event(WebhookEvent(event_type="PING", resource={"id": "1"}))

    assert notifier.messages == ["pong 1"]


@pytest.mark.parametrize(
    "body, event_type, resource",
    [
        ({"event_type": "X", "resource": {"id": "1"}}, "X", {"id": "1"}),
        ({"event_type": "X"}, "X", {}),
        ({"event_type": 5, "resource": "oops"}, None, {}),
        ([1, 2, 3], None, {}),
        ("text", None, {}),
        (None, None, {}),
    ],
)
def test_webhook_event_from_body(body: Any, event_type: Any, resource: Any) -> None:
    event = WebhookEvent.from_body(body)

    assert event.event_type == event_type
    assert event.resource == resource


async def test_numeric_create_time_still_notifies(notifier: Any) -> None:
    service = WebhookService(notifier=notifier)

    await service.handle_event(
        WebhookEvent(
            event_type="PAYMENT.SALE.COMPLETED",
            resource={"id": "S-1", "create_time": 1705320000000, "amount": {"total": "15.00"}},
        )
    )

    assert len(notifier.messages) == 1
    assert notifier.messages[0].endswith("Time: Invalid Date")
