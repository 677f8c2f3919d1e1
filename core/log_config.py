import logging
import sys

from core.config import log_level


def setup_logging() -> None:
    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # httpx 每個 request 都會打 INFO，太吵
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
