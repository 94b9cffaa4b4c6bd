"""
Domain entities for the assembled report.
Zero external dependencies: pure Python dataclasses only.

A Report is built fresh for each generation run and never mutated afterwards.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from src.domain.entities.analysis import AnalysisResult
from src.domain.entities.results import StageFailure
from src.domain.entities.stock_price import DateRange, DerivedMetrics

FALLBACK_WARNING = "⚠️ Using cached data (API unavailable)"

DISCLAIMER = (
    "This analysis is generated by AI and should not be considered as financial advice. "
    "Always conduct your own research and consult with financial professionals before "
    "making investment decisions."
)


class ReportMode(str, Enum):
    LIVE = "live"
    DEMO = "demo"


@dataclass(frozen=True)
class TickerReport:
    ticker: str
    analysis: AnalysisResult
    metrics: Optional[DerivedMetrics] = None
    used_fallback: bool = False
    failure: Optional[StageFailure] = None

    @property
    def warning(self) -> Optional[str]:
        return FALLBACK_WARNING if self.used_fallback else None


@dataclass(frozen=True)
class Report:
    generated_at: datetime
    date_range: DateRange
    mode: ReportMode
    entries: tuple[TickerReport, ...]
    disclaimer: str = DISCLAIMER

    @property
    def tickers(self) -> tuple[str, ...]:
        return tuple(entry.ticker for entry in self.entries)

    @property
    def fallback_count(self) -> int:
        return sum(1 for entry in self.entries if entry.used_fallback)
