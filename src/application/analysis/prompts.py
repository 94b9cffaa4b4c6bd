"""
Prompts for the per-ticker market analysis.
Keeping the prompt in the application layer keeps it next to the parser that
depends on its section labels, independent from any infrastructure SDK.
"""

from src.domain.entities.stock_price import DateRange, MetricsOrEmpty
from src.domain.services.metrics import describe_metrics

SUMMARY_LABEL = "SUMMARY:"
TECHNICAL_LABEL = "TECHNICAL:"
RECOMMENDATION_LABEL = "RECOMMENDATION:"

SYSTEM_PROMPT = f"""You are a professional stock market analyst providing concise, actionable insights.
Format your response with exactly three sections:
{SUMMARY_LABEL} One sentence about the stock's recent trends, performance and dividend information.

{TECHNICAL_LABEL} One sentence about key technical indicators or patterns.

{RECOMMENDATION_LABEL} One sentence with BUY/HOLD/SELL and brief reasoning.
Be specific and data-driven. No disclaimers needed.
"""


def build_user_prompt(ticker: str, metrics: MetricsOrEmpty, date_range: DateRange) -> str:
    return (
        f"Analyze the stock {ticker} with the following data:\n"
        f"{describe_metrics(metrics, date_range)}"
    )
