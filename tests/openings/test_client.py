"""Tests for the opening-explorer client."""

from __future__ import annotations

import json
import logging
from typing import Any

import pytest
import requests

from gambit.config import OpeningSettings
from gambit.openings import OpeningExplorerClient, OpeningMove, OpeningStats

PAYLOAD: dict[str, Any] = {
    "white": 120,
    "draws": 30,
    "black": 50,
    "opening": {"eco": "C20", "name": "King's Pawn Game"},
    "moves": [
        {"uci": "g1f3", "san": "Nf3", "white": 80, "draws": 20, "black": 30},
        {"uci": "f1c4", "san": "Bc4", "white": 10, "draws": 2, "black": 3},
        {"uci": "b1c3", "san": "Nc3", "white": 20, "draws": 5, "black": 10},
        {"uci": "d2d4", "san": "d4", "white": 10, "draws": 3, "black": 7},
    ],
}


def _response(status: int, body: str) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response._content = body.encode()
    response.url = "https://explorer.test/lichess"
    return response


class _FakeSession(requests.Session):
    def __init__(self, outcome: requests.Response | Exception) -> None:
        super().__init__()
        self.outcome = outcome
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def get(self, url: str, **kwargs: Any) -> requests.Response:  # type: ignore[override]
        self.calls.append((url, kwargs))
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


def _client(outcome: requests.Response | Exception, **settings: Any):
    session = _FakeSession(outcome)
    return OpeningExplorerClient(OpeningSettings(**settings), session), session


class TestLookup:
    def test_decodes_statistics(self) -> None:
        client, _ = _client(_response(200, json.dumps(PAYLOAD)))
        stats = client.lookup(["e2e4", "e7e5"])
        assert stats is not None
        assert stats.total == 200
        assert stats.opening_name == "King's Pawn Game"
        assert stats.eco == "C20"
        assert stats.moves[0] == OpeningMove("g1f3", "Nf3", 80, 20, 30)
        assert stats.moves[0].total == 130

    def test_query_parameters(self) -> None:
        client, session = _client(_response(200, json.dumps(PAYLOAD)))
        client.lookup(["e2e4", "e7e5"])
        url, kwargs = session.calls[0]
        assert url == "https://explorer.lichess.ovh/lichess"
        assert kwargs["params"] == {
            "variant": "standard",
            "speeds": "blitz,rapid,classical",
            "ratings": "2000,2200,2500",
            "play": "e2e4,e7e5",
        }
        assert kwargs["timeout"] == 5.0

    def test_sets_headers(self) -> None:
        _, session = _client(_response(200, "{}"))
        assert session.headers["Accept"] == "application/json"

    def test_missing_opening_name(self) -> None:
        client, _ = _client(_response(200, json.dumps({"white": 1, "moves": []})))
        stats = client.lookup(["a2a3"])
        assert stats == OpeningStats(white=1, draws=0, black=0)

    def test_top_moves(self) -> None:
        stats = OpeningStats.from_payload(PAYLOAD)
        assert [m.san for m in stats.top_moves()] == ["Nf3", "Nc3", "d4"]


class TestSkippedLookups:
    def test_empty_history(self) -> None:
        client, session = _client(_response(200, "{}"))
        assert client.lookup([]) is None
        assert session.calls == []

    def test_too_many_plies(self) -> None:
        client, session = _client(_response(200, "{}"))
        assert client.lookup(["e2e4"] * 21) is None
        assert session.calls == []
        assert client.should_lookup(["e2e4"] * 20)

    def test_game_over(self) -> None:
        client, session = _client(_response(200, "{}"))
        assert client.lookup(["f2f3"], game_over=True) is None
        assert session.calls == []

    def test_disabled(self) -> None:
        client, session = _client(_response(200, "{}"), enabled=False)
        assert client.lookup(["e2e4"]) is None
        assert session.calls == []


class TestFailures:
    def test_network_error(self, caplog: pytest.LogCaptureFixture) -> None:
        client, _ = _client(requests.ConnectionError("offline"))
        with caplog.at_level(logging.WARNING, logger="gambit.openings.client"):
            assert client.lookup(["e2e4"]) is None
        assert "offline" in caplog.text

    def test_timeout(self) -> None:
        client, _ = _client(requests.Timeout("slow"))
        assert client.lookup(["e2e4"]) is None

    def test_server_error(self, caplog: pytest.LogCaptureFixture) -> None:
        client, _ = _client(_response(503, "busy"))
        with caplog.at_level(logging.WARNING, logger="gambit.openings.client"):
            assert client.lookup(["e2e4"]) is None
        assert "HTTP error" in caplog.text

    def test_rare_position(self, caplog: pytest.LogCaptureFixture) -> None:
        client, _ = _client(_response(400, "bad request"))
        with caplog.at_level(logging.INFO, logger="gambit.openings.client"):
            assert client.lookup(["e2e4"]) is None
        assert "no data" in caplog.text

    def test_invalid_json(self) -> None:
        client, _ = _client(_response(200, "<html>"))
        assert client.lookup(["e2e4"]) is None

    def test_unexpected_shape(self) -> None:
        body = json.dumps({"white": 1, "moves": [{"san": "e4"}]})
        client, _ = _client(_response(200, body))
        assert client.lookup(["e2e4"]) is None
