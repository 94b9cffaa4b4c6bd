"""
Best-effort extraction of the three labelled sections of an analysis reply.

parse_analysis is total: any string (empty, unlabelled, labels out of order)
yields an AnalysisResult whose three fields are all non-empty, falling back
to a fixed default per field.
"""

from typing import Optional

from src.application.analysis.prompts import (
    RECOMMENDATION_LABEL,
    SUMMARY_LABEL,
    TECHNICAL_LABEL,
)
from src.domain.entities.analysis import (
    DEFAULT_RECOMMENDATION,
    DEFAULT_SUMMARY,
    DEFAULT_TECHNICAL,
    AnalysisResult,
)

# (field, label, default) in the order the labels must appear.
SECTIONS = (
    ("summary", SUMMARY_LABEL, DEFAULT_SUMMARY),
    ("technical", TECHNICAL_LABEL, DEFAULT_TECHNICAL),
    ("recommendation", RECOMMENDATION_LABEL, DEFAULT_RECOMMENDATION),
)


def _locate_labels(text: str) -> list[Optional[int]]:
    """Position of each label, each searched after the previous label found."""
    positions: list[Optional[int]] = []
    cursor = 0
    for _, label, _ in SECTIONS:
        index = text.find(label, cursor)
        if index == -1:
            positions.append(None)
            continue
        positions.append(index)
        cursor = index + len(label)
    return positions


def parse_analysis(text: Optional[str]) -> AnalysisResult:
    text = text or ""
    positions = _locate_labels(text)

    fields: dict[str, str] = {}
    for i, (field, label, default) in enumerate(SECTIONS):
        start = positions[i]
        if start is None:
            fields[field] = default
            continue
        following = [p for p in positions[i + 1:] if p is not None]
        end = following[0] if following else len(text)
        content = text[start + len(label):end].strip()
        fields[field] = content or default

    return AnalysisResult(**fields)
