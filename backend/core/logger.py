# backend/core/logger.py
import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# 預設輸出到主控台，等級由 setup_logging 依設定調整
logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    handlers=[logging.StreamHandler()]
)

logger = logging.getLogger("stockxpert")


def setup_logging(level: str = "INFO") -> logging.Logger:
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger
