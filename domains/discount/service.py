import logging
import math
import re
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Mapping

from domains.discount.exceptions import DiscountRequestError
from domains.discount.schemas import DiscountCode, DiscountResult

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Missing code or amount"
INVALID_AMOUNT = "Invalid amount"
INVALID_CODE = "Invalid discount code"
EXPIRED_CODE = "This discount code has expired"

# 跟瀏覽器 parseFloat 一樣：只取開頭的數字部分 ("12abc" -> 12)
_LEADING_NUMBER = re.compile(
    r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)
_CENT = Decimal("0.01")
# float 最大約 1.8e308，quantize 到分位需要 300 多位有效數字
_FIXED_PRECISION = 400


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _is_truthy(value: Any) -> bool:
    # JS 的 truthiness：[] 和 {} 是 true，NaN 是 false
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def _js_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return ",".join(_js_string(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def parse_amount(value: Any) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    # 其他型別先轉成 JS 字串再解析，例如 [5] -> "5"
    text = value if isinstance(value, str) else _js_string(value)
    match = _LEADING_NUMBER.match(text.lstrip())
    if match is None:
        return math.nan
    return float(match.group().replace("Infinity", "inf"))


def to_fixed(value: float) -> str:
    """2 位小數字串；以 float 的精確二進位值四捨五入 (同 JS toFixed)"""
    with localcontext() as ctx:
        ctx.prec = _FIXED_PRECISION
        return str(Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP))


def validate(
    code: Any,
    original_amount: Any,
    codes: Mapping[str, DiscountCode],
    now: datetime,
) -> DiscountResult:
    if not _is_truthy(code) or not _is_truthy(original_amount):
        raise DiscountRequestError(MISSING_FIELDS)

    amount = parse_amount(original_amount)
    if not math.isfinite(amount) or amount <= 0:
        raise DiscountRequestError(INVALID_AMOUNT)

    code_upper = code.upper().strip()
    discount = codes.get(code_upper)
    if discount is None:
        logger.info(f" 🔍 [Discount] Unknown code {code_upper!r}")
        return DiscountResult(valid=False, message=INVALID_CODE)

    if now > discount.expires_at:
        logger.info(f" ⌛ [Discount] Code {code_upper} expired at {discount.expires_at}")
        return DiscountResult(valid=False, message=EXPIRED_CODE)

    # finalAmount 用未四捨五入的 discount_amount 計算，兩者各自 round
    discount_amount = amount * (discount.percent / 100)
    final_amount = amount - discount_amount

    logger.info(f" 🏷️ [Discount] Applied {code_upper} ({discount.percent}%) to {amount}")
    return DiscountResult(
        valid=True,
        code=code_upper,
        original_amount=to_fixed(amount),
        discount_percent=discount.percent,
        discount_amount=to_fixed(discount_amount),
        final_amount=to_fixed(final_amount),
        message=discount.description,
    )
