"""Unit tests for the Langfuse tracing adapter with the SDK patched out."""

from unittest.mock import patch

from src.infrastructure.observability.langfuse_adapter import LangfuseObservabilityHandler


def test_callback_and_flush():
    with patch("langfuse.langchain.CallbackHandler") as handler_cls, patch(
        "langfuse.get_client"
    ) as get_client:
        handler = LangfuseObservabilityHandler()
        assert handler.as_callback() is handler_cls.return_value

        handler.flush()

    get_client.return_value.flush.assert_called_once_with()
