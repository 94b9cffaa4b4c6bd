"""Unit tests for the Polygon aggregates adapter, served by httpx.MockTransport."""

from datetime import date

import httpx
import pytest

from src.domain.errors import MalformedResponse, UpstreamUnavailable
from src.infrastructure.stock_data.polygon_adapter import (
    PolygonPriceSeriesFetcher,
    decode_aggregates,
    encode_aggregates,
)

# 2025-01-02 and 2025-01-03, 05:00 UTC (US/Eastern midnight)
T_JAN_2 = 1735794000000
T_JAN_3 = 1735880400000


def aggregate(t, close, high=None, low=None, volume=1000):
    return {"o": close, "h": high or close + 1, "l": low or close - 1, "c": close, "v": volume, "t": t}


def make_fetcher(handler) -> PolygonPriceSeriesFetcher:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return PolygonPriceSeriesFetcher(api_key="test-key", base_url="https://polygon.test", client=client)


class TestPolygonFetcher:
    def test_builds_adjusted_ascending_request(self, date_range):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json={"results": [aggregate(T_JAN_2, 100.0)]})

        series = make_fetcher(handler).fetch("AAPL", date_range)

        request = seen["request"]
        assert request.url.path == "/v2/aggs/ticker/AAPL/range/1/day/2025-01-01/2025-01-31"
        assert request.url.params["apiKey"] == "test-key"
        assert request.url.params["adjusted"] == "true"
        assert request.url.params["sort"] == "asc"
        assert series.ticker == "AAPL"
        assert series.points[0].date == date(2025, 1, 2)
        assert series.points[0].close == 100.0

    def test_points_sorted_by_date(self, date_range):
        payload = {"results": [aggregate(T_JAN_3, 101.0), aggregate(T_JAN_2, 100.0)]}
        series = make_fetcher(lambda request: httpx.Response(200, json=payload)).fetch(
            "AAPL", date_range
        )
        assert [p.close for p in series.points] == [100.0, 101.0]

    @pytest.mark.parametrize("payload", [{}, {"results": None}, {"results": "n/a"}, {"results": []}])
    def test_missing_results_is_empty_series(self, date_range, payload):
        series = make_fetcher(lambda request: httpx.Response(200, json=payload)).fetch(
            "NEWCO", date_range
        )
        assert series.is_empty

    @pytest.mark.parametrize("status", [401, 429, 500, 503])
    def test_error_status_is_upstream_unavailable(self, date_range, status):
        fetcher = make_fetcher(lambda request: httpx.Response(status, json={"error": "nope"}))
        with pytest.raises(UpstreamUnavailable):
            fetcher.fetch("AAPL", date_range)

    def test_transport_error_is_upstream_unavailable(self, date_range):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UpstreamUnavailable):
            make_fetcher(handler).fetch("AAPL", date_range)

    def test_non_json_body_is_malformed(self, date_range):
        fetcher = make_fetcher(lambda request: httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(MalformedResponse):
            fetcher.fetch("AAPL", date_range)


class TestDecodeAggregates:
    def test_non_object_payload_is_malformed(self, date_range):
        with pytest.raises(MalformedResponse):
            decode_aggregates("AAPL", date_range, [1, 2, 3])

    def test_missing_field_is_malformed(self, date_range):
        broken = aggregate(T_JAN_2, 100.0)
        del broken["c"]
        with pytest.raises(MalformedResponse, match="missing c"):
            decode_aggregates("AAPL", date_range, {"results": [broken]})

    def test_non_numeric_field_is_malformed(self, date_range):
        broken = aggregate(T_JAN_2, 100.0)
        broken["v"] = "lots"
        with pytest.raises(MalformedResponse):
            decode_aggregates("AAPL", date_range, {"results": [broken]})

    def test_encode_matches_polygon_shape(self, date_range):
        series = decode_aggregates("AAPL", date_range, {"results": [aggregate(T_JAN_2, 100.0)]})
        payload = encode_aggregates(series)

        assert payload["ticker"] == "AAPL"
        assert payload["resultsCount"] == 1
        assert set(payload["results"][0]) == {"o", "h", "l", "c", "v", "t"}
        assert decode_aggregates("AAPL", date_range, payload) == series

    @pytest.mark.parametrize("key", ["c", "h", "v"])
    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_value_is_malformed(self, date_range, key, bad):
        broken = aggregate(T_JAN_2, 100.0)
        broken[key] = bad
        with pytest.raises(MalformedResponse, match="not a finite number"):
            decode_aggregates("AAPL", date_range, {"results": [broken]})


def test_close_releases_http_client():
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    fetcher = PolygonPriceSeriesFetcher(api_key="k", client=client)

    fetcher.close()

    assert client.is_closed
