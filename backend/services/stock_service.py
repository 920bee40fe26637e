from typing import List

from fastapi import Depends
from fastapi.concurrency import run_in_threadpool

from core.logger import logger
from models.stock_model import MarketIndexQuote, QuoteSummaryBundle, StockDetail
from services.normalizer import SUMMARY_MODULES, StockNormalizer
from services.quote_client import YahooQuoteClient, get_quote_client

# S&P 500, NASDAQ, DOW
MARKET_INDICES = ["^GSPC", "^IXIC", "^DJI"]


class StockService:
    """
    股票服務類別 (Service Layer)
    負責協調上游查詢與欄位整理的流程。
    """
    def __init__(self, client: YahooQuoteClient):
        self.client = client
        self.normalizer = StockNormalizer()

    async def get_stock_detail(self, symbol: str) -> StockDetail:
        """
        單一股票明細：
        代號原樣送往上游，任何上游錯誤直接往外拋
        """
        raw = await run_in_threadpool(self.client.fetch_quote_summary, symbol, SUMMARY_MODULES)
        bundle = QuoteSummaryBundle.from_raw(raw)
        return self.normalizer.normalize(bundle, symbol)

    async def get_market_overview(self) -> List[MarketIndexQuote]:
        """
        三大指數報價：
        逐一抓取，單一指數失敗只標記 error，不影響其他指數
        """
        market_data = []
        for symbol in MARKET_INDICES:
            try:
                quote = await run_in_threadpool(self.client.fetch_quote, symbol)
                market_data.append(MarketIndexQuote(
                    symbol=quote.get("symbol") or symbol,
                    price=quote.get("regularMarketPrice"),
                    change=quote.get("regularMarketChange"),
                    changePercent=quote.get("regularMarketChangePercent")
                ))
            except Exception as e:
                logger.error(f"Error fetching data for {symbol}: {e}")
                market_data.append(MarketIndexQuote(
                    symbol=symbol,
                    price=None,
                    change=None,
                    changePercent=None,
                    error=True
                ))
        return market_data


def get_stock_service(client: YahooQuoteClient = Depends(get_quote_client)) -> StockService:
    return StockService(client)
