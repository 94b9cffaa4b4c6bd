"""Unit tests for section extraction from the model reply."""

import pytest

from src.application.analysis.parser import parse_analysis
from src.domain.entities.analysis import (
    DEFAULT_RECOMMENDATION,
    DEFAULT_SUMMARY,
    DEFAULT_TECHNICAL,
    AnalysisResult,
)

DEFAULTS = AnalysisResult(DEFAULT_SUMMARY, DEFAULT_TECHNICAL, DEFAULT_RECOMMENDATION)


class TestParseAnalysis:
    def test_inline_sections(self):
        result = parse_analysis("SUMMARY: X TECHNICAL: Y RECOMMENDATION: Z")
        assert result == AnalysisResult(summary="X", technical="Y", recommendation="Z")

    def test_multiline_sections_are_trimmed(self):
        text = (
            "Here is my view.\n"
            "SUMMARY:  Strong quarter.\nMore detail.\n\n"
            "TECHNICAL:\n  RSI near 60.  \n\n"
            "RECOMMENDATION: HOLD - wait.\n"
        )
        result = parse_analysis(text)
        assert result.summary == "Strong quarter.\nMore detail."
        assert result.technical == "RSI near 60."
        assert result.recommendation == "HOLD - wait."

    def test_no_labels_yields_defaults(self):
        assert parse_analysis("The stock went up.") == DEFAULTS

    @pytest.mark.parametrize("text", ["", None, "   \n"])
    def test_empty_input_yields_defaults(self, text):
        assert parse_analysis(text) == DEFAULTS

    def test_missing_middle_label(self):
        result = parse_analysis("SUMMARY: Up trend. RECOMMENDATION: BUY")
        assert result.summary == "Up trend."
        assert result.technical == DEFAULT_TECHNICAL
        assert result.recommendation == "BUY"

    def test_labels_are_case_sensitive(self):
        result = parse_analysis("summary: lower case Technical: mixed")
        assert result == DEFAULTS

    def test_empty_section_takes_default(self):
        result = parse_analysis("SUMMARY:   TECHNICAL: Flat. RECOMMENDATION:")
        assert result.summary == DEFAULT_SUMMARY
        assert result.technical == "Flat."
        assert result.recommendation == DEFAULT_RECOMMENDATION

    def test_out_of_order_labels_never_fail(self):
        result = parse_analysis("TECHNICAL: Y SUMMARY: X RECOMMENDATION: Z")
        assert result.summary == "X"
        assert result.technical == DEFAULT_TECHNICAL
        assert result.recommendation == "Z"

    @pytest.mark.parametrize(
        "text",
        [
            "RECOMMENDATION:",
            "SUMMARY:SUMMARY:SUMMARY:",
            "TECHNICAL: RECOMMENDATION: SUMMARY:",
            "\x00\x01 garbage",
            "SUMMARY" * 50,
        ],
    )
    def test_all_fields_always_non_empty(self, text):
        result = parse_analysis(text)
        assert result.summary and result.technical and result.recommendation
