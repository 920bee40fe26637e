from pydantic import BaseModel, field_validator
from typing import Any, Dict, List, Optional


class QuoteSummaryBundle(BaseModel):
    """
    Yahoo quoteSummary 回傳的各區塊 (每個區塊皆可能缺席)
    缺少或格式不是 dict 的區塊一律視為空 dict
    """
    summaryProfile: Dict[str, Any] = {}
    defaultKeyStatistics: Dict[str, Any] = {}
    financialData: Dict[str, Any] = {}
    price: Dict[str, Any] = {}
    summaryDetail: Dict[str, Any] = {}

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_section(cls, value: Any) -> Dict[str, Any]:
        return value if isinstance(value, dict) else {}

    @classmethod
    def from_raw(cls, raw: Any) -> "QuoteSummaryBundle":
        if not isinstance(raw, dict):
            return cls()
        return cls(**{name: raw.get(name) for name in cls.model_fields})


class StockDetail(BaseModel):
    symbol: str
    name: str
    sector: str = "N/A"
    industry: str = "N/A"
    location: str = "N/A"
    website: str = "N/A"
    exchange: str = "N/A"
    forwardPE: Optional[float] = None
    trailingPE: Optional[float] = None
    priceToBook: Optional[float] = None
    ebitda: Optional[float] = None
    dividendYield: Optional[float] = None
    grossMargin: Optional[float] = None
    operatingMargin: Optional[float] = None
    profitMargin: Optional[float] = None
    returnOnAssets: Optional[float] = None
    returnOnEquity: Optional[float] = None
    totalRevenue: Optional[float] = None
    costOfRevenue: Optional[float] = None
    netIncome: Optional[float] = None
    cash: Optional[float] = None
    shortTermDebt: Optional[float] = None
    longTermDebt: Optional[float] = None
    totalCashFromOperatingActivities: Optional[float] = None
    totalCashflowsFromInvestingActivities: Optional[float] = None
    totalCashFromFinancingActivities: Optional[float] = None
    freeCashflow: Optional[float] = None
    regularMarketPrice: Optional[float] = None
    regularMarketChange: Optional[float] = None
    regularMarketChangePercent: Optional[float] = None
    marketCap: Optional[float] = None
    fiftyTwoWeekChange: Optional[float] = None
    oneYearTargetEstimate: Optional[float] = None
    # 上游沒有對應區塊，保留空陣列讓前端格式不變
    quarterly_earnings: List[Any] = []
    recommendations: List[Any] = []


class MarketIndexQuote(BaseModel):
    symbol: str
    price: Optional[float] = None
    change: Optional[float] = None
    changePercent: Optional[float] = None
    error: Optional[bool] = None


class ErrorEnvelope(BaseModel):
    error: str
    message: str


class HealthResponse(BaseModel):
    status: str
    message: str


class RootResponse(BaseModel):
    message: str
    endpoints: List[str]
