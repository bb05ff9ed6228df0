"""Tests for small page helpers that do not need a running Streamlit session."""

from __future__ import annotations

import pytest

from custom_pages.scrape import count_queries, submit_queries
from src.mapscraper.ui.layout import status_badge


@pytest.mark.parametrize(
    ("text", "expected"),
    [("", 0), ("   ", 0), ("coffee shops", 1), ("a\n\n  \nb\nc\n", 3), (None, 0)],
)
def test_count_queries_ignores_blank_lines(text, expected: int) -> None:
    assert count_queries(text) == expected


def test_status_badge_defaults_to_pending() -> None:
    assert status_badge("completed") == "✅ Completed"
    assert status_badge("weird") == "🕐 Pending"


def test_submit_queries_clears_box_on_success(monkeypatch: pytest.MonkeyPatch) -> None:
    from src.mapscraper import apify_client
    from src.mapscraper.schemas import ActorRun

    submitted = []

    def _run_actor(query: str, limit: int) -> ActorRun:
        submitted.append((query, limit))
        return ActorRun(id="run-1", status="READY")

    monkeypatch.setattr(apify_client, "run_actor", _run_actor)
    state = {"queries": "coffee shops\nbakeries"}

    assert submit_queries(state, 20) == ("success", "Run run-1 started.")
    assert submitted == [("coffee shops\nbakeries", 20)]
    assert state["queries"] == ""
    assert count_queries(state["queries"]) == 0


def test_submit_queries_keeps_box_on_failure(without_token: None, no_network: None) -> None:
    state = {"queries": "coffee shops"}

    kind, msg = submit_queries(state, 20)

    assert kind == "error"
    assert "APIFY_TOKEN" in msg
    assert state["queries"] == "coffee shops"
