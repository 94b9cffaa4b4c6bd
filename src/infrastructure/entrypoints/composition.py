"""
Composition Root shared by the CLI, FastAPI and AgentCore entry points.

Wires Settings -> price fetcher -> Bedrock adapter -> AnalysisClient ->
per-ticker pipeline -> use cases.  Nothing outside the entry points imports
from this module.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from src.application.analysis.client import AnalysisClient
from src.application.report.pipeline import build_ticker_pipeline
from src.application.use_cases.analyze_stock import AnalyzeStockUseCase
from src.application.use_cases.demo_mode import DemoModeAdapter
from src.application.use_cases.generate_report import GenerateReportUseCase
from src.application.use_cases.get_price_series import GetPriceSeriesUseCase
from src.domain.ports.llm_port import ILanguageModel
from src.domain.ports.observability_port import IObservabilityHandler, NullObservabilityHandler
from src.domain.ports.stock_data_port import IPriceSeriesFetcher
from src.infrastructure.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportServices:
    generate_report: GenerateReportUseCase
    demo: DemoModeAdapter
    get_price_series: GetPriceSeriesUseCase
    analyze_stock: AnalyzeStockUseCase
    fetcher: IPriceSeriesFetcher

    def close(self) -> None:
        """Release the price fetcher's connections; called once on shutdown."""
        self.fetcher.close()


def load_secrets(settings: Settings) -> Settings:
    """Pull secrets into the environment when configured, then re-read Settings."""
    if not settings.secret_arn:
        return settings
    from src.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter

    SecretsManagerAdapter(region=settings.aws_region).load_into_env(settings.secret_arn)
    return Settings.from_env(os.environ)


def build_fetcher(settings: Settings) -> IPriceSeriesFetcher:
    if settings.price_provider == "yfinance":
        from src.infrastructure.stock_data.yfinance_adapter import YFinancePriceSeriesFetcher

        return YFinancePriceSeriesFetcher()
    if settings.price_provider != "polygon":
        raise ValueError(f"Unknown PRICE_PROVIDER: {settings.price_provider!r}")

    from src.infrastructure.stock_data.polygon_adapter import PolygonPriceSeriesFetcher

    if not settings.polygon_api_key:
        logger.warning("POLYGON_API_KEY is not set; live price fetches will fall back")
    return PolygonPriceSeriesFetcher(
        api_key=settings.polygon_api_key,
        base_url=settings.polygon_base_url,
        timeout=settings.http_timeout_seconds,
    )


def build_llm(settings: Settings) -> ILanguageModel:
    from src.infrastructure.llm.bedrock_adapter import BedrockChatAdapter

    return BedrockChatAdapter(
        model_id=settings.bedrock_model_id,
        region=settings.aws_region,
        max_tokens=settings.analysis_max_tokens,
        temperature=settings.analysis_temperature,
    )


def build_observability(settings: Settings) -> IObservabilityHandler:
    if not settings.langfuse_enabled:
        return NullObservabilityHandler()
    from src.infrastructure.observability.langfuse_adapter import LangfuseObservabilityHandler

    return LangfuseObservabilityHandler()


def build_services(
    settings: Optional[Settings] = None,
    fetcher: Optional[IPriceSeriesFetcher] = None,
    llm: Optional[ILanguageModel] = None,
    observability: Optional[IObservabilityHandler] = None,
) -> ReportServices:
    """Wire every use case.  Explicit collaborators override the Settings-built ones."""
    settings = settings or Settings.from_env()
    fetcher = fetcher or build_fetcher(settings)
    llm = llm or build_llm(settings)
    observability = observability or build_observability(settings)

    client = AnalysisClient(llm)
    pipeline = build_ticker_pipeline(fetcher, client)
    generate_report = GenerateReportUseCase(pipeline, observability)
    return ReportServices(
        generate_report=generate_report,
        demo=DemoModeAdapter(generate_report),
        get_price_series=GetPriceSeriesUseCase(fetcher),
        analyze_stock=AnalyzeStockUseCase(fetcher, client),
        fetcher=fetcher,
    )
