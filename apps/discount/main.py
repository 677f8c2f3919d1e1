import json
import logging
from datetime import datetime
from typing import Any, Callable, Dict

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.log_config import setup_logging
from core.telemetry import configure_telemetry
from domains.discount.codes import DiscountTable, load_discount_codes
from domains.discount.exceptions import DiscountRequestError
from domains.discount.service import utc_now, validate

setup_logging()
logger = logging.getLogger(__name__)

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Content-Type": "application/json",
}

app = FastAPI(title="validate-discount")
configure_telemetry(app, "validate-discount")


def cors_json(status_code: int, content: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=CORS_HEADERS)


@app.exception_handler(StarletteHTTPException)  # type: ignore
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == 405:
        return cors_json(405, {"error": "Method not allowed"})
    return cors_json(exc.status_code, {"error": exc.detail})


# Dependency Injection (測試時可以 override)
def get_code_loader() -> Callable[[], DiscountTable]:
    return load_discount_codes


def get_clock() -> Callable[[], datetime]:
    return utc_now


@app.api_route("/validate-discount", methods=["POST", "OPTIONS"], tags=["discount"])  # type: ignore
async def validate_discount(
    request: Request,
    load_codes: Callable[[], DiscountTable] = Depends(get_code_loader),  # noqa: B008
    clock: Callable[[], datetime] = Depends(get_clock),  # noqa: B008
) -> Response:
    # preflight 直接回，不做任何驗證
    if request.method == "OPTIONS":
        return Response(status_code=200, content="", headers=CORS_HEADERS)

    try:
        data = json.loads(await request.body())
        if not isinstance(data, dict):
            data = {}
        result = validate(
            data.get("code"),
            data.get("originalAmount"),
            codes=load_codes(),
            now=clock(),
        )
    except DiscountRequestError as err:
        return cors_json(400, {"error": err.message})
    except Exception:
        logger.exception(" ❌ Discount validation error")
        return cors_json(500, {"error": "Server error"})

    return cors_json(200, result.to_response())


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8001)  # nosec
