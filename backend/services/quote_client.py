from typing import Any, Dict, List
from urllib.parse import quote

from yfinance.data import YfData

from core.errors import UpstreamError
from core.logger import logger

QUOTE_SUMMARY_URL = "https://query2.finance.yahoo.com/v10/finance/quoteSummary"
QUOTE_URL = "https://query1.finance.yahoo.com/v7/finance/quote"

QUOTE_FIELDS = ["symbol", "regularMarketPrice", "regularMarketChange", "regularMarketChangePercent"]


class YahooQuoteClient:
    """
    Yahoo Finance 查詢介面
    透過 yfinance 的連線層 (含 cookie / crumb 處理) 直接取得原始 JSON
    """
    def __init__(self, data: YfData = None):
        self.data = data or YfData()

    def _get_json(self, symbol: str, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            payload = self.data.get_raw_json(url, params=params)
        except Exception as e:
            raise UpstreamError(symbol, str(e)) from e
        if not isinstance(payload, dict):
            raise UpstreamError(symbol, "unexpected payload type")
        return payload

    def fetch_quote_summary(self, symbol: str, modules: List[str]) -> Dict[str, Any]:
        """
        取得 quoteSummary 的多個區塊
        回傳格式: {"price": {...}, "summaryDetail": {...}, ...}
        """
        params = {
            "modules": ",".join(modules),
            "corsDomain": "finance.yahoo.com",
            "formatted": "false",
            "symbol": symbol,
        }
        payload = self._get_json(symbol, f"{QUOTE_SUMMARY_URL}/{quote(symbol, safe='')}", params)
        summary = payload.get("quoteSummary") or {}

        # Yahoo 對未知代號會回傳 error 物件而非空結果
        if summary.get("error"):
            error = summary["error"]
            reason = error.get("description") if isinstance(error, dict) else str(error)
            raise UpstreamError(symbol, reason or "quoteSummary error")

        results = summary.get("result") or []
        if not results or not isinstance(results[0], dict):
            raise UpstreamError(symbol, "no quoteSummary result")

        logger.debug("quoteSummary %s: %s", symbol, ", ".join(results[0].keys()))
        return results[0]

    def fetch_quote(self, symbol: str) -> Dict[str, Any]:
        """取得單一報價 (symbol / 價格 / 漲跌 / 漲跌幅)"""
        params = {"symbols": symbol, "formatted": "false"}
        payload = self._get_json(symbol, QUOTE_URL, params)
        response = payload.get("quoteResponse") or {}

        if response.get("error"):
            raise UpstreamError(symbol, str(response["error"]))

        results = response.get("result") or []
        if not results or not isinstance(results[0], dict):
            raise UpstreamError(symbol, "quote not found")

        item = results[0]
        return {field: item.get(field) for field in QUOTE_FIELDS}


def get_quote_client() -> YahooQuoteClient:
    return YahooQuoteClient()
