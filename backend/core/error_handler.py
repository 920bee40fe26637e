# backend/core/error_handler.py
import asyncio
import traceback
from typing import Any, Dict

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from core.logger import logger


class ExceptionMiddleware(BaseHTTPMiddleware):
    """
    最後一道防線：任何從路由漏出的例外都在這裡被攔下，
    記錄完整 traceback 並回傳統一的錯誤格式 (HTTP 500)
    """
    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            traceback_str = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
            logger.error("Unhandled exception on %s %s:\n%s", request.method, request.url.path, traceback_str)

            return JSONResponse(
                status_code=500,
                content={
                    "error": "Something went wrong!",
                    "message": str(exc) or exc.__class__.__name__
                }
            )


def handle_loop_exception(loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
    """
    未被 await 的 task / future 發生例外時呼叫：
    只記錄，不中止程序
    """
    exc = context.get("exception")
    message = context.get("message", "Unhandled exception in event loop")
    if exc is not None:
        logger.error("Unhandled rejection: %s | reason: %r", message, exc)
    else:
        logger.error("Unhandled rejection: %s", message)


def install_loop_exception_handler(loop: asyncio.AbstractEventLoop) -> None:
    loop.set_exception_handler(handle_loop_exception)
