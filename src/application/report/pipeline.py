"""
Per-ticker report pipeline as a LangGraph state machine.

    fetch --ok--> derive --> analyze --ok--> parse --> assemble --> END
      |                         |
      +--failed--> fallback <---+----------------------------> END

Dependency-injection contract:
  - Receives an IPriceSeriesFetcher and an AnalysisClient.
  - Never imports httpx, yfinance, ChatBedrock or boto3 directly.

Fetch and Analyze wrap their call in a tagged StageResult; the conditional
edges route on that tag.  Derive and Parse are total and cannot fail.
"""

import logging

from langgraph.graph import END, START, StateGraph

from src.application.analysis.client import AnalysisClient
from src.application.analysis.parser import parse_analysis
from src.application.report.samples import fallback_analysis
from src.application.report.state import TickerPipelineState
from src.domain.entities.report import TickerReport
from src.domain.entities.results import Failed, Ok, StageFailure, StageResult
from src.domain.entities.stock_price import DateRange, DerivedMetrics, MetricsOrEmpty, PriceSeries
from src.domain.errors import UpstreamFailure
from src.domain.ports.stock_data_port import IPriceSeriesFetcher
from src.domain.services.metrics import derive_metrics

logger = logging.getLogger(__name__)

FETCH = "fetch"
DERIVE = "derive"
ANALYZE = "analyze"
PARSE = "parse"
ASSEMBLE = "assemble"
FALLBACK = "fallback"


def fetch_stage(
    fetcher: IPriceSeriesFetcher, ticker: str, date_range: DateRange
) -> StageResult[PriceSeries]:
    try:
        return Ok(fetcher.fetch(ticker, date_range))
    except UpstreamFailure as exc:
        return Failed(StageFailure(stage=FETCH, kind=exc.kind, message=str(exc)))


def analyze_stage(
    client: AnalysisClient, ticker: str, metrics: MetricsOrEmpty, date_range: DateRange
) -> StageResult[str]:
    try:
        return Ok(client.analyze(ticker, metrics, date_range))
    except UpstreamFailure as exc:
        return Failed(StageFailure(stage=ANALYZE, kind=exc.kind, message=str(exc)))


def fallback_report(ticker: str, failure: StageFailure) -> TickerReport:
    return TickerReport(
        ticker=ticker,
        analysis=fallback_analysis(ticker),
        metrics=None,
        used_fallback=True,
        failure=failure,
    )


def build_ticker_pipeline(fetcher: IPriceSeriesFetcher, client: AnalysisClient):
    """Build and compile the per-ticker pipeline graph.

    Returns:
        Compiled LangGraph graph; invoke it with {"ticker", "date_range"} and
        read the TickerReport from the "report" key of the final state.
    """

    def fetch_node(state: TickerPipelineState) -> dict:
        result = fetch_stage(fetcher, state["ticker"], state["date_range"])
        if isinstance(result, Failed):
            return {"failure": result.failure}
        logger.debug("Fetched %d points for %s", len(result.value), state["ticker"])
        return {"series": result.value}

    def derive_node(state: TickerPipelineState) -> dict:
        return {"metrics": derive_metrics(state["series"])}

    def analyze_node(state: TickerPipelineState) -> dict:
        result = analyze_stage(client, state["ticker"], state["metrics"], state["date_range"])
        if isinstance(result, Failed):
            return {"failure": result.failure}
        return {"analysis_text": result.value}

    def parse_node(state: TickerPipelineState) -> dict:
        return {"analysis": parse_analysis(state["analysis_text"])}

    def assemble_node(state: TickerPipelineState) -> dict:
        metrics = state["metrics"]
        report = TickerReport(
            ticker=state["ticker"],
            analysis=state["analysis"],
            metrics=metrics if isinstance(metrics, DerivedMetrics) else None,
        )
        return {"report": report}

    def fallback_node(state: TickerPipelineState) -> dict:
        failure = state["failure"]
        logger.warning(
            "Using cached data for %s: %s failed (%s): %s",
            state["ticker"],
            failure.stage,
            failure.kind.value,
            failure.message,
        )
        return {"report": fallback_report(state["ticker"], failure)}

    def route_after(next_node: str):
        def route(state: TickerPipelineState) -> str:
            return FALLBACK if state.get("failure") else next_node

        return route

    workflow = StateGraph(TickerPipelineState)
    workflow.add_node(FETCH, fetch_node)
    workflow.add_node(DERIVE, derive_node)
    workflow.add_node(ANALYZE, analyze_node)
    workflow.add_node(PARSE, parse_node)
    workflow.add_node(ASSEMBLE, assemble_node)
    workflow.add_node(FALLBACK, fallback_node)

    workflow.add_edge(START, FETCH)
    workflow.add_conditional_edges(FETCH, route_after(DERIVE), [DERIVE, FALLBACK])
    workflow.add_edge(DERIVE, ANALYZE)
    workflow.add_conditional_edges(ANALYZE, route_after(PARSE), [PARSE, FALLBACK])
    workflow.add_edge(PARSE, ASSEMBLE)
    workflow.add_edge(ASSEMBLE, END)
    workflow.add_edge(FALLBACK, END)
    return workflow.compile()
