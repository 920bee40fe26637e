from fastapi import APIRouter, Request

from models.stock_model import HealthResponse, RootResponse

router = APIRouter(tags=["system"])

ENDPOINTS = [
    "/api/market/overview",
    "/api/stock/:symbol",
    "/health"
]


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """系統健康檢查接口 (不依賴上游)"""
    return HealthResponse(status="ok", message="Server is running")


@router.get("/", response_model=RootResponse)
async def root(request: Request):
    settings = request.app.state.settings
    return RootResponse(message=f"{settings.app_title} is running", endpoints=ENDPOINTS)
