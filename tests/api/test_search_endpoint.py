"""
Test suite for search API endpoints.

Tests POST /search, POST /search/stream and the history routes with FastAPI
TestClient and a SearchService wired to a fake answer stream.

System role: Verification of search HTTP API
"""

import asyncio
import json

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from conftest import FAILURE_MESSAGE, FakeAnswerStream, GatedAnswerStream, make_chunk
from grounded_search.api.deps import (
    get_html_renderer,
    get_search_service,
    get_search_session,
)
from grounded_search.api.routers.search import router
from grounded_search.application.services import SearchService
from grounded_search.core.search_session import SearchSession
from grounded_search.presentation import HtmlRenderer


def build_app(service: SearchService, session: SearchSession) -> FastAPI:
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_search_service] = lambda: service
    app.dependency_overrides[get_search_session] = lambda: session
    app.dependency_overrides[get_html_renderer] = lambda: HtmlRenderer()
    return app


def build_client(service: SearchService, session: SearchSession) -> TestClient:
    return TestClient(build_app(service, session))


def async_client(app: FastAPI) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")


@pytest.fixture
def client(search_service: SearchService, search_session: SearchSession) -> TestClient:
    """Provide TestClient with the fake-stream search service."""
    return build_client(search_service, search_session)


def parse_sse(body: str) -> list[tuple[str, dict]]:
    events = []
    for frame in body.strip().split("\n\n"):
        lines = dict(line.split(": ", 1) for line in frame.splitlines())
        events.append((lines["event"], json.loads(lines["data"])))
    return events


class TestSearchEndpoint:
    """POST /search."""

    def test_search_returns_answer_and_html(self, client: TestClient) -> None:
        response = client.post("/search", json={"query": "capital of france"})

        assert response.status_code == 200
        body = response.json()
        assert body["answer"]["status"] == "completed"
        assert body["answer"]["request_id"] == 1
        kinds = [unit["kind"] for unit in body["answer"]["plan"]["units"]]
        assert kinds == ["text", "footnote", "text", "footnote"]
        assert body["answer"]["plan"]["units"][3]["source_ordinals"] == [0, 1]
        assert 'href="#footnote-1-2"' in body["html"]
        assert '<li id="footnote-1-1">' in body["html"]

    def test_missing_query_is_rejected(self, client: TestClient) -> None:
        assert client.post("/search", json={}).status_code == 422

    def test_blank_query_is_rejected(self, client: TestClient) -> None:
        response = client.post("/search", json={"query": "   "})

        assert response.status_code == 422
        assert response.json()["detail"] == "Query must not be empty"

    def test_stream_failure_returns_failed_answer(self, search_session: SearchSession) -> None:
        service = SearchService(
            FakeAnswerStream([make_chunk(text="partial")], fail_after=1),
            search_session,
            failure_message=FAILURE_MESSAGE,
        )
        client = build_client(service, search_session)

        response = client.post("/search", json={"query": "q"})

        assert response.status_code == 200
        body = response.json()
        assert body["answer"]["status"] == "failed"
        assert body["answer"]["plan"]["units"] == []
        assert FAILURE_MESSAGE in body["html"]

    def test_request_in_progress_conflicts(
        self, search_service: SearchService, search_session: SearchSession
    ) -> None:
        search_session.begin_request("stuck")
        client = build_client(search_service, search_session)

        response = client.post("/search", json={"query": "q"})

        assert response.status_code == 409


class TestSearchStreamEndpoint:
    """POST /search/stream."""

    def test_stream_emits_sse_events(self, client: TestClient) -> None:
        response = client.post("/search/stream", json={"query": "q"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        events = parse_sse(response.text)
        assert [name for name, _ in events] == ["started", "token", "token", "complete"]
        assert events[-1][1]["answer"]["request_id"] == 1

    def test_blank_query_streams_error_event(self, client: TestClient) -> None:
        response = client.post("/search/stream", json={"query": " "})

        events = parse_sse(response.text)
        assert events == [("error", {"code": "INVALID_QUERY", "message": "Query must not be empty"})]


class TestHistoryEndpoints:
    """History routes."""

    def test_history_lists_newest_first(self, client: TestClient) -> None:
        client.post("/search", json={"query": "first"})
        client.post("/search", json={"query": "second"})

        body = client.get("/search/history").json()

        assert body["total"] == 2
        assert [a["query"] for a in body["answers"]] == ["second", "first"]

    def test_history_item_by_request_id(self, client: TestClient) -> None:
        client.post("/search", json={"query": "first"})

        assert client.get("/search/history/1").json()["query"] == "first"
        assert client.get("/search/history/99").status_code == 404

    def test_clear_history(self, client: TestClient) -> None:
        client.post("/search", json={"query": "first"})

        assert client.delete("/search/history").status_code == 204
        assert client.get("/search/history").json() == {"answers": [], "total": 0}


class TestConcurrentRequests:
    """Requests overlapping a search that is still streaming."""

    @pytest.mark.asyncio
    async def test_second_search_conflicts_while_first_runs(
        self, search_session: SearchSession
    ) -> None:
        stream = GatedAnswerStream([make_chunk(text="slow answer")])
        app = build_app(SearchService(stream, search_session), search_session)

        async with async_client(app) as http:
            first = asyncio.create_task(http.post("/search", json={"query": "one"}))
            await stream.started.wait()
            conflict = await http.post("/search", json={"query": "two"})
            streamed = await http.post("/search/stream", json={"query": "three"})
            stream.gate.set()
            completed = await first

        assert conflict.status_code == 409
        assert conflict.json()["detail"] == "Request 1 is still in progress"
        assert parse_sse(streamed.text) == [
            ("error", {"code": "REQUEST_IN_PROGRESS", "message": "Request 1 is still in progress"})
        ]
        assert completed.status_code == 200
        assert completed.json()["answer"]["status"] == "completed"

    @pytest.mark.asyncio
    async def test_clearing_history_does_not_break_running_search(
        self, search_session: SearchSession
    ) -> None:
        stream = GatedAnswerStream([make_chunk(text="kept")])
        app = build_app(SearchService(stream, search_session), search_session)

        async with async_client(app) as http:
            running = asyncio.create_task(http.post("/search", json={"query": "q"}))
            await stream.started.wait()
            cleared = await http.delete("/search/history")
            stream.gate.set()
            response = await running
            history = (await http.get("/search/history")).json()

        assert cleared.status_code == 204
        assert response.status_code == 200
        assert response.json()["answer"]["status"] == "completed"
        assert history["total"] == 1
        assert history["answers"][0]["request_id"] == 1
