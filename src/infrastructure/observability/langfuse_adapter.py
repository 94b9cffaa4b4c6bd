"""
Infrastructure adapter: Langfuse -> IObservabilityHandler.

Enabled with LANGFUSE_ENABLED=true.  GenerateReportUseCase attaches the
callback to every per-ticker pipeline run, so each ticker shows up in Langfuse
as one trace (run name "ticker-report:<TICKER>", tag "stock-report") holding
its Bedrock call.  Fallback entries appear as traces without an LLM span.

Langfuse is imported lazily so the module loads without LANGFUSE_* keys; when
the keys live in Secrets Manager, load_secrets() has already put them in the
environment before build_observability() constructs this adapter.
"""

import logging
from typing import Any

from src.domain.ports.observability_port import IObservabilityHandler

logger = logging.getLogger(__name__)


class LangfuseObservabilityHandler(IObservabilityHandler):
    """Traces report pipeline runs through the Langfuse LangChain CallbackHandler."""

    def __init__(self) -> None:
        from langfuse.langchain import CallbackHandler
        self._handler = CallbackHandler()

    def as_callback(self) -> Any:
        return self._handler

    def flush(self) -> None:
        """Send the traces of the report just assembled before the request returns."""
        from langfuse import get_client
        get_client().flush()
        logger.debug("Flushed Langfuse traces")
