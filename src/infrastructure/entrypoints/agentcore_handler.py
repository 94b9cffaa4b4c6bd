"""
AgentCore Runtime entry point: cloud deployment of report generation.

API keys are fetched from AWS Secrets Manager at container startup (before
any Langfuse import) when STOCK_REPORT_SECRET_ARN is set.

Payload:
    {"tickers": ["AAPL", "TSLA"], "demo": false}

Deploy:
    agentcore configure \\
        --entrypoint src/infrastructure/entrypoints/agentcore_handler.py \\
        --execution-role <AGENTCORE_EXECUTION_ROLE_ARN> \\
        --ecr-uri <ECR_REPOSITORY_URL>
    agentcore deploy --env STOCK_REPORT_SECRET_ARN=<arn>
"""

import logging

from bedrock_agentcore.runtime import BedrockAgentCoreApp

from src.domain.entities.report import ReportMode
from src.domain.entities.ticker import TickerSet
from src.domain.errors import EmptyTickerSet
from src.infrastructure.config import Settings
from src.infrastructure.entrypoints.composition import ReportServices, build_services, load_secrets
from src.infrastructure.logging_config import configure_logging
from src.infrastructure.presentation.report_format import to_payload

logger = logging.getLogger(__name__)


def handle(payload: dict, services: ReportServices) -> dict:
    """Generate a report for the payload's tickers and return it as a JSON dict."""
    tickers = payload.get("tickers") or []
    if isinstance(tickers, str):
        tickers = tickers.split(",")
    mode = ReportMode.DEMO if payload.get("demo") else ReportMode.LIVE

    ticker_set = TickerSet.from_symbols(tickers)
    try:
        report = services.generate_report.execute(ticker_set, mode=mode)
    except EmptyTickerSet as exc:
        return {"error": str(exc)}
    return to_payload(report)


# ---------------------------------------------------------------------------
# Composition Root: wire all dependencies once at container startup
# ---------------------------------------------------------------------------
_settings = load_secrets(Settings.from_env())
configure_logging(_settings.log_level)
_services = build_services(_settings)

app = BedrockAgentCoreApp()


@app.entrypoint
def invoke(payload: dict, context=None):
    """AgentCore entrypoint: one report per invocation."""
    return handle(payload, _services)


if __name__ == "__main__":
    app.run()
