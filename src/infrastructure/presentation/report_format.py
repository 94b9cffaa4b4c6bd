"""
Presentation helpers: a Report as labelled plain-text sections or as a JSON payload.
"""

import dataclasses
from typing import Optional

from src.domain.entities.report import Report, TickerReport
from src.domain.entities.stock_price import DerivedMetrics
from src.domain.services.metrics import (
    NOT_AVAILABLE,
    format_percent_change,
    format_price_change,
)


def _price_change_line(metrics: Optional[DerivedMetrics]) -> str:
    if metrics is None:
        return f"{NOT_AVAILABLE} ({NOT_AVAILABLE})"
    return (
        f"{format_price_change(metrics.price_change)} "
        f"({format_percent_change(metrics.percent_change)})"
    )


def _render_entry(entry: TickerReport) -> list[str]:
    lines = [f"{entry.ticker} Analysis"]
    if entry.warning:
        lines.append(entry.warning)
    else:
        lines.append(f"Price Change: {_price_change_line(entry.metrics)}")
    lines.extend(
        [
            f"Summary: {entry.analysis.summary}",
            f"Technical: {entry.analysis.technical}",
            f"Recommendation: {entry.analysis.recommendation}",
        ]
    )
    return lines


def render_text(report: Report) -> str:
    sections = [
        [
            f"Analysis Date: {report.generated_at.date().isoformat()}",
            f"Date Range: {report.date_range.start_str} to {report.date_range.end_str}",
        ]
    ]
    sections.extend(_render_entry(entry) for entry in report.entries)
    sections.append(["Disclaimer", report.disclaimer])
    return "\n\n".join("\n".join(section) for section in sections)


def metrics_payload(metrics: Optional[DerivedMetrics]) -> Optional[dict]:
    if metrics is None:
        return None
    payload = dataclasses.asdict(metrics)
    payload["percent_change_display"] = format_percent_change(metrics.percent_change)
    return payload


def to_payload(report: Report) -> dict:
    """JSON-serializable dict (dates as YYYY-MM-DD, timestamp as ISO-8601)."""
    return {
        "generated_at": report.generated_at.isoformat(),
        "mode": report.mode.value,
        "date_range": {
            "start": report.date_range.start_str,
            "end": report.date_range.end_str,
        },
        "entries": [
            {
                "ticker": entry.ticker,
                "metrics": metrics_payload(entry.metrics),
                "price_change": _price_change_line(entry.metrics),
                "summary": entry.analysis.summary,
                "technical": entry.analysis.technical,
                "recommendation": entry.analysis.recommendation,
                "used_fallback": entry.used_fallback,
                "warning": entry.warning,
                "failure": (
                    {
                        "stage": entry.failure.stage,
                        "kind": entry.failure.kind.value,
                        "message": entry.failure.message,
                    }
                    if entry.failure
                    else None
                ),
            }
            for entry in report.entries
        ],
        "disclaimer": report.disclaimer,
    }
