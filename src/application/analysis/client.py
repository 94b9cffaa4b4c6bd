"""
Application service: one language-model analysis request per ticker.

langchain_core.messages is treated as framework (not infrastructure): the
concrete model is injected through the ILanguageModel port.
"""

import logging
from typing import Any

from langchain_core.messages import HumanMessage, SystemMessage

from src.application.analysis.prompts import SYSTEM_PROMPT, build_user_prompt
from src.domain.entities.stock_price import DateRange, MetricsOrEmpty
from src.domain.errors import EmptyResponse
from src.domain.ports.llm_port import ILanguageModel

logger = logging.getLogger(__name__)


def extract_text(response: Any) -> str:
    """Join the text blocks of a chat response.

    ``content`` is either a plain string or a list of content blocks
    (strings or ``{"type": "text", "text": ...}`` dicts).
    """
    content = getattr(response, "content", response)
    if content is None:
        return ""
    if isinstance(content, str):
        return content

    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type", "text") == "text":
            parts.append(str(block.get("text", "")))
    return "".join(parts)


class AnalysisClient:
    def __init__(self, llm: ILanguageModel) -> None:
        self._llm = llm

    def analyze(self, ticker: str, metrics: MetricsOrEmpty, date_range: DateRange) -> str:
        """Request a three-section analysis of *ticker* and return the raw reply text.

        Raises:
            UpstreamUnavailable: propagated from the ILanguageModel adapter.
            EmptyResponse:       the model returned no content blocks or only whitespace.
        """
        messages = [
            SystemMessage(content=SYSTEM_PROMPT),
            HumanMessage(content=build_user_prompt(ticker, metrics, date_range)),
        ]
        logger.debug("Requesting analysis for %s", ticker)
        response = self._llm.invoke(messages)

        text = extract_text(response)
        if not text.strip():
            raise EmptyResponse(f"Language model returned no content for {ticker!r}")
        return text
