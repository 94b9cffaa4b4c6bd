"""
Cached sample analyses.

Used verbatim in demo mode and as the fallback content for a ticker whose
live pipeline failed.  Tickers without a sample get a generic placeholder.
"""

from types import MappingProxyType

from src.domain.entities.analysis import AnalysisResult
from src.domain.entities.ticker import TickerSet

SAMPLE_TICKERS = ("AAPL", "TSLA", "NVDA")

SAMPLE_ANALYSES = MappingProxyType(
    {
        "AAPL": AnalysisResult(
            summary=(
                "Apple shows strong momentum with consistent revenue growth "
                "from services and wearables."
            ),
            technical=(
                "Technical indicators suggest consolidation around current levels "
                "with potential breakout above $195."
            ),
            recommendation="HOLD - Wait for clearer directional signals before adding positions.",
        ),
        "TSLA": AnalysisResult(
            summary="Tesla maintains volatility amid EV market competition and margin pressures.",
            technical="Watch for support at $240 and resistance at $265 levels.",
            recommendation="NEUTRAL - High volatility presents both opportunities and risks.",
        ),
        "NVDA": AnalysisResult(
            summary=(
                "NVIDIA continues to dominate AI chip market with exceptional "
                "datacenter growth."
            ),
            technical=(
                "Recent consolidation healthy after massive run-up, with strong "
                "institutional accumulation."
            ),
            recommendation=(
                "BUY - Long-term AI tailwinds remain intact despite short-term volatility."
            ),
        ),
    }
)


def fallback_analysis(ticker: str) -> AnalysisResult:
    """Cached sample for *ticker*, or the "unable to fetch" placeholder."""
    sample = SAMPLE_ANALYSES.get(ticker)
    if sample is not None:
        return sample
    return AnalysisResult(
        summary=f"Unable to fetch real-time data for {ticker}.",
        technical="Please check your API connection and try again.",
        recommendation="N/A",
    )


def demo_analysis(ticker: str) -> AnalysisResult:
    """Cached sample for *ticker*, or the "not available in demo mode" placeholder."""
    sample = SAMPLE_ANALYSES.get(ticker)
    if sample is not None:
        return sample
    return AnalysisResult(
        summary=f"{ticker} is not available in demo mode.",
        technical=f"Demo mode only includes cached samples for {', '.join(SAMPLE_TICKERS)}.",
        recommendation="N/A",
    )


def unavailable_analysis(ticker: str) -> AnalysisResult:
    """Body returned by a standalone analysis request whose model call failed."""
    return AnalysisResult(
        summary=f"Unable to generate real-time analysis for {ticker}.",
        technical="API connection error. Please try again later.",
        recommendation="Analysis unavailable.",
    )


def populate_with_samples(ticker_set: TickerSet) -> bool:
    """Fill an empty *ticker_set* with the sample tickers up to its capacity.

    Returns:
        True if any ticker was added.  A non-empty set is left untouched.
    """
    if not ticker_set.is_empty:
        return False
    added = False
    for ticker in SAMPLE_TICKERS:
        added = ticker_set.add(ticker) or added
    return added
