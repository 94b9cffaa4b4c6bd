"""
Domain entity for the structured language-model analysis of one ticker.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass

DEFAULT_SUMMARY = "Analysis completed."
DEFAULT_TECHNICAL = "Technical indicators analyzed."
DEFAULT_RECOMMENDATION = "Please review the data."


@dataclass(frozen=True)
class AnalysisResult:
    summary: str = DEFAULT_SUMMARY
    technical: str = DEFAULT_TECHNICAL
    recommendation: str = DEFAULT_RECOMMENDATION
