import asyncio
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from controllers import stock_controller, system_controller
from core.config import Settings, load_settings
from core.error_handler import ExceptionMiddleware, install_loop_exception_handler
from core.logger import logger, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 未被攔截的背景例外只記錄，不讓程序結束
    install_loop_exception_handler(asyncio.get_running_loop())
    logger.info(f"Server is running on port {app.state.settings.port}")
    yield


def create_app(settings: Settings) -> FastAPI:
    setup_logging(settings.log_level)

    app = FastAPI(title=settings.app_title, lifespan=lifespan)
    app.state.settings = settings

    # 最後加入的 middleware 在最外層，讓錯誤回應也帶 CORS 標頭
    app.add_middleware(ExceptionMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"]
    )

    app.include_router(stock_controller.router)
    app.include_router(system_controller.router)
    return app


app = create_app(load_settings())


if __name__ == "__main__":
    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)
