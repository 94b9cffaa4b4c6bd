"""
Infrastructure adapter: Polygon.io daily aggregates -> IPriceSeriesFetcher.
All Polygon-specific details (URL layout, {o,h,l,c,v,t} aggregate shape) are
confined here; the rest of the codebase depends only on IPriceSeriesFetcher.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from src.domain.entities.stock_price import DateRange, PricePoint, PriceSeries
from src.domain.errors import MalformedResponse, UpstreamUnavailable
from src.domain.ports.stock_data_port import IPriceSeriesFetcher

logger = logging.getLogger(__name__)

_AGGREGATE_KEYS = ("o", "h", "l", "c", "v", "t")


def _timestamp_to_date(millis: float):
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc).date()


def _finite(aggregate: dict, key: str) -> float:
    value = float(aggregate[key])
    if not math.isfinite(value):
        raise ValueError(f"{key}={value} is not a finite number")
    return value


def decode_aggregates(ticker: str, date_range: DateRange, payload: Any) -> PriceSeries:
    """Decode a Polygon aggregates payload into an ascending PriceSeries.

    An absent or non-list ``results`` field is a valid empty series.

    Raises:
        MalformedResponse: payload is not an object, or an aggregate is
                           missing a field or carries a non-numeric or
                           non-finite value.
    """
    if not isinstance(payload, dict):
        raise MalformedResponse(f"Expected a JSON object for {ticker!r}, got {type(payload).__name__}")

    results = payload.get("results")
    if not isinstance(results, list):
        return PriceSeries(ticker=ticker, date_range=date_range)

    points = []
    for index, aggregate in enumerate(results):
        if not isinstance(aggregate, dict):
            raise MalformedResponse(f"Aggregate #{index} for {ticker!r} is not an object")
        missing = [key for key in _AGGREGATE_KEYS if key not in aggregate]
        if missing:
            raise MalformedResponse(
                f"Aggregate #{index} for {ticker!r} is missing {', '.join(missing)}"
            )
        try:
            points.append(
                PricePoint(
                    date=_timestamp_to_date(_finite(aggregate, "t")),
                    open=_finite(aggregate, "o"),
                    high=_finite(aggregate, "h"),
                    low=_finite(aggregate, "l"),
                    close=_finite(aggregate, "c"),
                    volume=_finite(aggregate, "v"),
                )
            )
        except (TypeError, ValueError, OverflowError, OSError) as exc:
            raise MalformedResponse(f"Aggregate #{index} for {ticker!r}: {exc}") from exc

    points.sort(key=lambda point: point.date)
    return PriceSeries(ticker=ticker, date_range=date_range, points=tuple(points))


def encode_aggregates(series: PriceSeries) -> dict:
    """Polygon-shaped payload for a PriceSeries (as served by GET /api/stock/{ticker})."""
    results = [
        {
            "o": point.open,
            "h": point.high,
            "l": point.low,
            "c": point.close,
            "v": point.volume,
            "t": int(
                datetime(point.date.year, point.date.month, point.date.day, tzinfo=timezone.utc)
                .timestamp()
                * 1000
            ),
        }
        for point in series.points
    ]
    return {
        "ticker": series.ticker,
        "adjusted": True,
        "queryCount": len(results),
        "resultsCount": len(results),
        "results": results,
    }


class PolygonPriceSeriesFetcher(IPriceSeriesFetcher):
    """Fetches split/dividend-adjusted daily aggregates from the Polygon REST API."""

    BASE_URL = "https://api.polygon.io"

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)

    def fetch(self, ticker: str, date_range: DateRange) -> PriceSeries:
        url = (
            f"{self._base_url}/v2/aggs/ticker/{ticker}/range/1/day/"
            f"{date_range.start_str}/{date_range.end_str}"
        )
        params = {"apiKey": self._api_key, "adjusted": "true", "sort": "asc"}

        try:
            response = self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamUnavailable(
                f"Polygon returned {exc.response.status_code} for {ticker!r}"
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamUnavailable(f"Polygon request failed for {ticker!r}: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedResponse(f"Polygon response for {ticker!r} is not JSON") from exc

        series = decode_aggregates(ticker, date_range, payload)
        logger.info("Polygon returned %d daily points for %s", len(series), ticker)
        return series

    def close(self) -> None:
        self._client.close()
