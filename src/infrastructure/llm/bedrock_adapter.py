"""
Infrastructure adapter: Anthropic Claude on Amazon Bedrock (ChatBedrock) -> ILanguageModel.

All ChatBedrock / langchain_aws details are confined here.  Any failure of the
Bedrock call (credentials, throttling, network, service errors) surfaces as
UpstreamUnavailable so the report pipeline can fall back to cached content.
"""

import logging
import os
from typing import Any, Optional

from langchain_aws import ChatBedrock

from src.domain.errors import UpstreamUnavailable
from src.domain.ports.llm_port import ILanguageModel

logger = logging.getLogger(__name__)


class BedrockChatAdapter(ILanguageModel):
    """Wraps ChatBedrock and exposes the ILanguageModel interface."""

    MODEL_ID = "anthropic.claude-3-haiku-20240307-v1:0"

    def __init__(
        self,
        model_id: Optional[str] = None,
        region: Optional[str] = None,
        max_tokens: int = 200,
        temperature: float = 0.0,
        _runnable: Any = None,
    ) -> None:
        """
        Args:
            model_id:    Bedrock model id; defaults to Claude 3 Haiku.
            region:      AWS region; defaults to AWS_DEFAULT_REGION or us-east-1.
            max_tokens:  Response length cap for the three one-sentence sections.
            temperature: Kept near zero so the section formatting stays consistent.
            _runnable:   Optional pre-configured Runnable (used by tests to
                         inject a fake chat model). Pass nothing normally.
        """
        if _runnable is not None:
            self._llm = _runnable
        else:
            self._llm = ChatBedrock(
                model=model_id or self.MODEL_ID,
                model_kwargs={"temperature": temperature, "max_tokens": max_tokens},
                region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
            )

    def invoke(self, messages: list[Any]) -> Any:
        try:
            return self._llm.invoke(messages)
        except Exception as exc:
            logger.debug("Bedrock invocation failed", exc_info=True)
            raise UpstreamUnavailable(f"Bedrock invocation failed: {exc}") from exc
