from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# PayPal 金額 / 數量通常是字串 ("10.00")，但也接受數字
Scalar = Union[str, int, float]
# 只拿來顯示的欄位不限型別，型別怪也不能讓整則通知失敗
Display = Any


class PayPalModel(BaseModel):
    # PayPal 的 payload 欄位很多，只挑我們要的，其他保留不報錯
    model_config = ConfigDict(extra="allow")


class Money(PayPalModel):
    currency_code: Optional[Display] = None
    value: Optional[Scalar] = None
    # v1 Sale API 用 total
    total: Optional[Scalar] = None


class Name(PayPalModel):
    full_name: Optional[Display] = None


class Address(PayPalModel):
    address_line_1: Optional[Display] = None
    admin_area_2: Optional[Display] = None
    admin_area_1: Optional[Display] = None
    postal_code: Optional[Display] = None


class Shipping(PayPalModel):
    name: Optional[Name] = None
    address: Optional[Address] = None


class Item(PayPalModel):
    name: Optional[Display] = None
    quantity: Optional[Display] = None
    unit_amount: Optional[Money] = None


class PurchaseUnit(PayPalModel):
    amount: Optional[Money] = None
    shipping: Optional[Shipping] = None
    items: List[Item] = Field(default_factory=list)


class Resource(PayPalModel):
    id: Optional[Display] = None
    status: Optional[Display] = None
    create_time: Optional[Display] = None
    amount: Optional[Money] = None
    shipping: Optional[Shipping] = None
    purchase_units: List[PurchaseUnit] = Field(default_factory=list)
    supplementary_data: Optional[Display] = None


class WebhookEvent(PayPalModel):
    """
    Webhook 外層信封
    resource 保持 dict，交給對應的 formatter 再驗證，
    這樣格式錯的 resource 不會讓整個 request 失敗
    """

    event_type: Optional[str] = None
    resource: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_body(cls, data: Any) -> "WebhookEvent":
        if not isinstance(data, dict):
            return cls()
        resource = data.get("resource")
        event_type = data.get("event_type")
        return cls(
            event_type=event_type if isinstance(event_type, str) else None,
            resource=resource if isinstance(resource, dict) else {},
        )
