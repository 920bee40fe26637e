import pandas as pd
from numbers import Number
from typing import Any, Dict, Optional, Tuple

from models.stock_model import QuoteSummaryBundle, StockDetail

# 文字欄位的預設值
NOT_AVAILABLE = "N/A"

# quoteSummary 需要的區塊
SUMMARY_MODULES = ["summaryProfile", "defaultKeyStatistics", "financialData", "price", "summaryDetail"]

# 文字欄位：(輸出欄位, 依優先順序排列的 (區塊, 鍵))
TEXT_FIELDS: Dict[str, Tuple[Tuple[str, str], ...]] = {
    "sector": (("summaryProfile", "sector"),),
    "industry": (("summaryProfile", "industry"),),
    "location": (("summaryProfile", "country"),),
    "website": (("summaryProfile", "website"),),
    "exchange": (("price", "exchangeName"),),
}

# 數值欄位：全部缺席時為 None
NUMERIC_FIELDS: Dict[str, Tuple[Tuple[str, str], ...]] = {
    # 估值 (key statistics 優先於 summary detail)
    "forwardPE": (("defaultKeyStatistics", "forwardPE"), ("summaryDetail", "forwardPE")),
    "trailingPE": (("defaultKeyStatistics", "trailingPE"), ("summaryDetail", "trailingPE")),
    "priceToBook": (("defaultKeyStatistics", "priceToBook"),),
    "ebitda": (("financialData", "ebitda"),),
    "dividendYield": (("defaultKeyStatistics", "yield"), ("summaryDetail", "dividendYield")),
    # 利潤率與報酬率
    "grossMargin": (("financialData", "grossMargins"),),
    "operatingMargin": (("financialData", "operatingMargins"),),
    "profitMargin": (("financialData", "profitMargins"),),
    "returnOnAssets": (("financialData", "returnOnAssets"),),
    "returnOnEquity": (("financialData", "returnOnEquity"),),
    # 損益與現金流
    "totalRevenue": (("financialData", "totalRevenue"),),
    "costOfRevenue": (("financialData", "costOfRevenue"),),
    "netIncome": (("financialData", "netIncome"),),
    "cash": (("financialData", "totalCash"),),
    "shortTermDebt": (("financialData", "shortTermDebt"),),
    "longTermDebt": (("financialData", "longTermDebt"),),
    "totalCashFromOperatingActivities": (("financialData", "totalCashFromOperatingActivities"),),
    "totalCashflowsFromInvestingActivities": (("financialData", "totalCashflowsFromInvestingActivities"),),
    "totalCashFromFinancingActivities": (("financialData", "totalCashFromFinancingActivities"),),
    "freeCashflow": (("financialData", "freeCashflow"),),
    # 市價
    "regularMarketPrice": (("price", "regularMarketPrice"),),
    "regularMarketChange": (("price", "regularMarketChange"),),
    "regularMarketChangePercent": (("price", "regularMarketChangePercent"),),
    "marketCap": (("price", "marketCap"),),
    "fiftyTwoWeekChange": (("price", "fiftyTwoWeekChange"), ("defaultKeyStatistics", "52WeekChange")),
    "oneYearTargetEstimate": (("defaultKeyStatistics", "oneYearTargetEstimate"), ("financialData", "targetMeanPrice")),
}


def _unwrap(value: Any) -> Any:
    # formatted 模式下 Yahoo 會回傳 {"raw": 1.23, "fmt": "1.23"}
    if isinstance(value, dict):
        return value.get("raw")
    return value


def _as_number(value: Any) -> Optional[float]:
    value = _unwrap(value)
    if isinstance(value, bool) or not isinstance(value, Number):
        return None
    if pd.isna(value):
        return None
    return value


def _as_text(value: Any) -> Optional[str]:
    value = _unwrap(value)
    if isinstance(value, str) and value.strip():
        return value
    return None


def _first(bundle: QuoteSummaryBundle, sources, convert) -> Any:
    """依序走訪來源，回傳第一個有效值"""
    for section, key in sources:
        value = convert(getattr(bundle, section).get(key))
        if value is not None:
            return value
    return None


class StockNormalizer:
    @staticmethod
    def normalize(bundle: QuoteSummaryBundle, symbol: str) -> StockDetail:
        """
        將 quoteSummary 的巢狀區塊攤平成 StockDetail：
        1. 每個欄位依宣告的優先順序取第一個有效值
        2. 全部缺席時使用預設值 (文字為 "N/A"，數值為 None)
        3. symbol / name 最後退回請求的代號
        """
        record: Dict[str, Any] = {
            "symbol": _as_text(bundle.price.get("symbol")) or symbol,
            "name": _first(bundle, (("price", "longName"), ("price", "shortName")), _as_text) or symbol,
        }

        for field, sources in TEXT_FIELDS.items():
            record[field] = _first(bundle, sources, _as_text) or NOT_AVAILABLE

        for field, sources in NUMERIC_FIELDS.items():
            record[field] = _first(bundle, sources, _as_number)

        return StockDetail(**record)
