import json
import logging
from typing import Any, Dict

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.log_config import setup_logging
from core.notifier import TelegramNotifier
from core.security import verify_paypal_signature
from core.telemetry import configure_telemetry
from domains.payment.schemas import WebhookEvent
from domains.payment.service import WebhookService

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="paypal-webhook")
configure_telemetry(app, "paypal-webhook")


@app.exception_handler(StarletteHTTPException)  # type: ignore
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == 405:
        return JSONResponse(status_code=405, content={"error": "Method not allowed"})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


# Dependency Injection
def get_webhook_service() -> WebhookService:
    # 每個 request 都重新讀設定，不共用狀態
    return WebhookService(notifier=TelegramNotifier.from_env())


@app.post(
    "/paypal-webhook",
    tags=["webhook"],
    dependencies=[Depends(verify_paypal_signature)],
)  # type: ignore
async def paypal_webhook(
    request: Request,
    service: WebhookService = Depends(get_webhook_service),  # noqa: B008
) -> Any:
    body = await request.body()
    logger.info(" 📥 PayPal webhook received")
    logger.info(f" Headers: {dict(request.headers)}")
    logger.info(f" Body: {body.decode('utf-8', errors='replace')}")

    try:
        data = json.loads(body)
    except ValueError as err:
        logger.error(f" ❌ Webhook processing error: {err}")
        return JSONResponse(status_code=500, content={"error": str(err)})

    # 只要 body 解析成功就一律回 200，避免 PayPal 重送
    await service.handle_event(WebhookEvent.from_body(data))
    response: Dict[str, bool] = {"received": True}
    return response


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)  # nosec
