import asyncio
import logging
from datetime import datetime, timezone

import httpx

from boggle import notifier
from boggle.session import GameSummary

SUMMARY = GameSummary(
    player_name="ana",
    score=14,
    words=["sol", "mad", "caminata", "toldo"],
    last_played=datetime(2024, 5, 1, 12, 3, tzinfo=timezone.utc),
)


def _patch_client(monkeypatch, handler):
    real_client = httpx.AsyncClient

    def factory(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(notifier.httpx, "AsyncClient", factory)


def test_format_summary():
    title, body = notifier.format_summary(SUMMARY)
    assert title == "Boggle - ana: 14 pts"
    assert body.startswith("sol,mad,caminata,toldo\n\n")
    assert "3L:2 | 5L:1 | 8L:1" in body
    assert "played 2024-05-01T12:03:00+00:00" in body


def test_format_summary_without_words():
    _, body = notifier.format_summary(GameSummary("ana", 0))
    assert "no words" in body
    assert body.endswith("played -")


def test_send_game_summary_posts_to_topic(monkeypatch):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200)

    _patch_client(monkeypatch, handler)
    asyncio.run(notifier.send_game_summary(SUMMARY, "boggle-test", "https://ntfy.example"))

    assert len(requests) == 1
    req = requests[0]
    assert str(req.url) == "https://ntfy.example/boggle-test"
    assert req.headers["Title"] == "Boggle - ana: 14 pts"
    assert req.content.decode("utf-8").startswith("sol,mad")


def test_send_game_summary_logs_failures(monkeypatch, caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    _patch_client(monkeypatch, handler)
    with caplog.at_level(logging.ERROR, logger="boggle"):
        asyncio.run(notifier.send_game_summary(SUMMARY, "boggle-test"))
    assert "Failed to send notification" in caplog.text
