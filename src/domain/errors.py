"""
Domain error taxonomy.

Adapters translate library exceptions (httpx, botocore, yfinance) into these
with ``raise ... from exc``; the report pipeline turns them into fallback
entries and never lets them escape a report run.
"""

from src.domain.entities.results import FailureKind


class StockReportError(Exception):
    """Base class for every error raised by this package."""


class UpstreamFailure(StockReportError):
    """Base for failures of an external service call."""

    kind: FailureKind = FailureKind.UNEXPECTED


class UpstreamUnavailable(UpstreamFailure):
    """Network, auth, rate-limit or non-success status from an external service."""

    kind = FailureKind.UPSTREAM_UNAVAILABLE


class MalformedResponse(UpstreamFailure):
    """Payload does not match the documented response shape."""

    kind = FailureKind.MALFORMED_RESPONSE


class EmptyResponse(UpstreamFailure):
    """The service answered but returned no usable content."""

    kind = FailureKind.EMPTY_RESPONSE


class EmptyTickerSet(StockReportError, ValueError):
    """A live report was requested without any ticker selected."""
