import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from core.config import discount_codes_file
from domains.discount.exceptions import DiscountTableError
from domains.discount.schemas import DiscountCode

logger = logging.getLogger(__name__)

DiscountTable = Dict[str, DiscountCode]

# 目前上架中的折扣碼
DEFAULT_DISCOUNT_CODES: Dict[str, Dict[str, Any]] = {
    "FEB15": {
        "percent": 15,
        "expires_at": "2026-02-23T23:59:59-05:00",  # Feb 23, 2026 11:59 PM EST
        "description": "15% off all orders",
    },
}


def build_table(raw: Any) -> DiscountTable:
    """
    接受兩種格式：
      {"FEB15": {"percent": 15, ...}}  或  [{"code": "FEB15", "percent": 15, ...}]
    """
    if isinstance(raw, dict):
        entries = [{**spec, "code": code} for code, spec in raw.items()]
    elif isinstance(raw, list):
        entries = raw
    else:
        raise DiscountTableError(f"Unsupported discount table type: {type(raw)}")

    try:
        codes = [DiscountCode.model_validate(entry) for entry in entries]
    except ValidationError as err:
        raise DiscountTableError(f"Invalid discount code entry: {err}") from err
    return {discount.code: discount for discount in codes}


def load_discount_codes(path: Optional[str] = None) -> DiscountTable:
    """每次 request 都重新載入，不做快取"""
    path = path or discount_codes_file()
    if path is None:
        return build_table(DEFAULT_DISCOUNT_CODES)

    logger.info(f" 📂 [Discount] Loading codes from {path}")
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as err:
        raise DiscountTableError(f"Cannot read discount codes file {path}: {err}") from err
    return build_table(raw)
