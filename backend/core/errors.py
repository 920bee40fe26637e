# backend/core/errors.py
from typing import Optional


class AppError(Exception):
    """所有業務錯誤的基底類別"""

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class UpstreamError(AppError):
    """
    上游 (Yahoo Finance) 查詢失敗：
    未知代號、網路錯誤或回傳格式不符
    """

    def __init__(self, symbol: str, reason: Optional[str] = None) -> None:
        message = f"Unable to retrieve data for {symbol}"
        if reason:
            message += f": {reason}"
        super().__init__(message, code="UPSTREAM_FAILURE")
        self.symbol = symbol
        self.reason = reason
