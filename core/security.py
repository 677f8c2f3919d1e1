import logging

from fastapi import Request

logger = logging.getLogger(__name__)

PAYPAL_SIGNATURE_HEADERS = (
    "paypal-transmission-id",
    "paypal-transmission-time",
    "paypal-cert-url",
    "paypal-transmission-sig",
    "paypal-auth-algo",
)


async def verify_paypal_signature(request: Request) -> bool:
    """
    PayPal webhook 簽章檢查
    目前只記錄 header 並一律放行，尚未對 PayPal 憑證做驗證
    """
    transmission = {
        name: request.headers.get(name) for name in PAYPAL_SIGNATURE_HEADERS
    }
    if not transmission["paypal-transmission-sig"]:
        logger.warning(" paypal-transmission-sig header is missing")

    logger.info(f" 🔏 [Signature] Accepting webhook: {transmission}")
    return True
