"""Unit tests for the Bedrock adapter's error translation."""

from unittest.mock import MagicMock

import pytest
from langchain_core.messages import AIMessage, HumanMessage

from src.domain.errors import UpstreamUnavailable
from src.infrastructure.llm.bedrock_adapter import BedrockChatAdapter


class TestBedrockChatAdapter:
    def test_invoke_passes_messages_through(self):
        runnable = MagicMock()
        runnable.invoke.return_value = AIMessage(content="SUMMARY: ok")
        adapter = BedrockChatAdapter(_runnable=runnable)
        messages = [HumanMessage(content="hi")]

        assert adapter.invoke(messages).content == "SUMMARY: ok"
        runnable.invoke.assert_called_once_with(messages)

    def test_invoke_failure_becomes_upstream_unavailable(self):
        runnable = MagicMock()
        runnable.invoke.side_effect = ValueError("Error raised by bedrock service: ThrottlingException")
        adapter = BedrockChatAdapter(_runnable=runnable)

        with pytest.raises(UpstreamUnavailable, match="ThrottlingException"):
            adapter.invoke([HumanMessage(content="hi")])
