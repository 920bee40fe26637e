from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from core.logger import logger
from models.stock_model import ErrorEnvelope, MarketIndexQuote, StockDetail
from services.stock_service import StockService, get_stock_service

# 初始化路由
router = APIRouter(prefix="/api", tags=["stocks"])

ERROR_RESPONSES = {500: {"model": ErrorEnvelope}}


def error_code(exc: Exception) -> str:
    return getattr(exc, "code", None) or exc.__class__.__name__


def error_response(summary: str, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content=ErrorEnvelope(error=summary, message=str(exc) or exc.__class__.__name__).model_dump()
    )


@router.get("/stock/{symbol}", response_model=StockDetail, responses=ERROR_RESPONSES, summary="獲取單一股票明細")
async def get_stock(
    symbol: str,
    stock_service: StockService = Depends(get_stock_service)
):
    """
    股票明細 Controller：
    1. 代號不做任何轉換，直接交給 StockService
    2. 上游失敗一律回傳 500 與錯誤說明
    """
    try:
        return await stock_service.get_stock_detail(symbol)
    except Exception as e:
        logger.error(f"[{error_code(e)}] Error fetching stock data for {symbol}: {e}")
        return error_response("Failed to fetch stock data", e)


@router.get(
    "/market/overview",
    response_model=List[MarketIndexQuote],
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
    summary="獲取三大指數概況"
)
async def get_market_overview(stock_service: StockService = Depends(get_stock_service)):
    """單一指數失敗仍回傳 200，只有整體流程失敗才回傳 500"""
    try:
        return await stock_service.get_market_overview()
    except Exception as e:
        logger.error(f"[{error_code(e)}] Error fetching market overview: {e}")
        return error_response("Failed to fetch market overview", e)
