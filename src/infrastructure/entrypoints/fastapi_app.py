"""
FastAPI entry point: HTTP API for stock data, single analyses and reports.

create_app() is the Composition Root for HTTP runs: it loads configuration,
wires the use cases (unless a ReportServices bundle is injected) and mounts
the routes.

Run locally:
    uvicorn src.infrastructure.entrypoints.fastapi_app:create_app --factory --reload --port 3000
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.domain.entities.report import ReportMode
from src.domain.entities.stock_price import DateRange
from src.domain.entities.ticker import TickerSet, normalize_ticker
from src.domain.errors import EmptyTickerSet, MalformedResponse, UpstreamFailure
from src.infrastructure.config import Settings
from src.infrastructure.entrypoints.composition import ReportServices, build_services, load_secrets
from src.infrastructure.logging_config import configure_logging
from src.infrastructure.presentation.report_format import metrics_payload, to_payload
from src.infrastructure.stock_data.polygon_adapter import decode_aggregates, encode_aggregates

logger = logging.getLogger(__name__)


class AnalyzeRequest(BaseModel):
    ticker: Optional[str] = None
    stockData: Optional[dict] = None
    startDate: Optional[str] = None
    endDate: Optional[str] = None


class ReportRequest(BaseModel):
    tickers: list[str] = []
    demo: bool = False


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _request_range(body: AnalyzeRequest) -> Optional[DateRange]:
    if body.startDate and body.endDate:
        return DateRange.parse(body.startDate, body.endDate)
    return None


def create_app(
    services: Optional[ReportServices] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    load_dotenv()
    settings = settings or load_secrets(Settings.from_env())
    configure_logging(settings.log_level)
    services = services or build_services(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        services.close()

    app = FastAPI(title="Stock Report API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/stock/{ticker}")
    def get_stock(ticker: str):
        """Daily aggregates for *ticker* over the default window, in Polygon's shape."""
        try:
            series = services.get_price_series.execute(ticker)
        except ValueError as exc:
            return _error(400, str(exc))
        except UpstreamFailure as exc:
            logger.error("Error fetching stock data for %s: %s", ticker, exc)
            return _error(502, "Failed to fetch stock data")
        return encode_aggregates(series)

    @app.post("/api/analyze")
    def analyze(body: AnalyzeRequest):
        """Three-section analysis of one ticker; model failures still answer 200."""
        ticker = normalize_ticker(body.ticker)
        if not ticker:
            return _error(400, "Ticker is required")
        try:
            date_range = _request_range(body) or DateRange.trailing()
        except ValueError:
            return _error(400, "startDate and endDate must be YYYY-MM-DD")

        series = None
        if body.stockData is not None:
            try:
                series = decode_aggregates(ticker, date_range, body.stockData)
            except MalformedResponse as exc:
                return _error(400, f"stockData is malformed: {exc}")

        result = services.analyze_stock.execute(ticker, series=series, date_range=date_range)
        payload = {
            "summary": result.analysis.summary,
            "technical": result.analysis.technical,
            "recommendation": result.analysis.recommendation,
            "fullResponse": result.raw_text,
            "metrics": metrics_payload(result.metrics or None),
        }
        if result.error:
            payload["error"] = result.error
        return payload

    @app.post("/api/report")
    def generate_report(body: ReportRequest):
        """Full report for up to three tickers; extra or duplicate symbols are ignored."""
        ticker_set = TickerSet.from_symbols(body.tickers)
        mode = ReportMode.DEMO if body.demo else ReportMode.LIVE
        try:
            report = services.generate_report.execute(ticker_set, mode=mode)
        except EmptyTickerSet as exc:
            return _error(400, str(exc))
        return to_payload(report)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
