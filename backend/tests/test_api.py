"""Tests for the HTTP contract (no model or network calls)."""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests
from fastapi.testclient import TestClient

from chronos.config import get_settings
from chronos.errors import UpstreamError
from chronos.main import app, get_aggregator, get_requester
from chronos.phases.phase1.reconstruction import ReconstructionRequester
from chronos.phases.phase2.aggregator import SourceAggregator


@pytest.fixture
def client(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def use_llm(settings, mock_llm_client):
    def _install(content):
        llm = mock_llm_client(content)
        app.dependency_overrides[get_requester] = lambda: ReconstructionRequester(settings, client=llm)
        return llm

    return _install


@pytest.fixture
def use_session(settings, mock_session):
    def _install(payload=None, exc=None):
        session = mock_session(payload, exc)
        app.dependency_overrides[get_aggregator] = lambda: SourceAggregator(settings, session=session)
        return session

    return _install


class TestHealth:
    def test_ok(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestReconstructEndpoint:
    def test_success(self, client, use_llm, llm_response_json):
        use_llm(llm_response_json)
        resp = client.post("/api/reconstruct", json={"text": "lol ur so lame. asl?"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["originalText"] == "lol ur so lame. asl?"
        assert body["data"]["era"] == "2000s"
        assert body["data"]["keyTerms"][0]["original"] == "lol"

    @pytest.mark.parametrize("payload", [{"text": ""}, {"text": "   "}, {}])
    def test_missing_text(self, client, payload):
        resp = client.post("/api/reconstruct", json=payload)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Text input is required"}

    def test_missing_key(self, client, settings_without_key):
        app.dependency_overrides[get_settings] = lambda: settings_without_key
        resp = client.post("/api/reconstruct", json={"text": "lol"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Gemini API key not configured"}

    def test_parse_failure(self, client, use_llm):
        use_llm("definitely not json")
        resp = client.post("/api/reconstruct", json={"text": "lol"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to parse AI response", "rawResponse": "definitely not json"}

    def test_upstream_failure(self, client):
        requester = MagicMock()
        requester.reconstruct.side_effect = UpstreamError("quota exceeded", service="gemini")
        app.dependency_overrides[get_requester] = lambda: requester
        resp = client.post("/api/reconstruct", json={"text": "lol"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to reconstruct text", "details": "quota exceeded"}

    def test_error_body_does_not_leak_key(self, client, use_llm):
        use_llm("oops")
        resp = client.post("/api/reconstruct", json={"text": "lol"})
        assert "test-key" not in resp.text


class TestSearchEndpoint:
    def test_success(self, client, use_session, ddg_payload):
        use_session(ddg_payload)
        resp = client.post("/api/search", json={"query": "internet slang"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["query"] == "internet slang"
        assert body["searchType"] == "main"
        assert [s["credibility"] for s in body["sources"]] == [5, 3, 2]
        assert "relevanceReason" in body["sources"][0]
        assert "T" in body["timestamp"]

    def test_search_type_echoed(self, client, use_session):
        use_session({})
        resp = client.post("/api/search", json={"query": "omg", "searchType": "slang"})
        assert resp.json()["searchType"] == "slang"

    @pytest.mark.parametrize("payload", [{"query": ""}, {"query": "  "}, {}])
    def test_missing_query(self, client, payload):
        resp = client.post("/api/search", json=payload)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Search query is required"}

    def test_unexpected_failure(self, client):
        aggregator = MagicMock()
        aggregator.aggregate.side_effect = RuntimeError("boom")
        app.dependency_overrides[get_aggregator] = lambda: aggregator
        resp = client.post("/api/search", json={"query": "lol"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to search", "details": "boom"}


class TestPipelineEndpoint:
    def test_success(self, client, use_llm, use_session, llm_response_json):
        use_llm(llm_response_json)
        use_session(exc=requests.exceptions.ConnectionError("offline"))
        resp = client.post("/api/pipeline", json={"text": "lol ur so lame. asl?"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["state"] == "done"
        assert body["data"]["mostLikely"] == json.loads(llm_response_json)["mostLikely"]
        assert 1 <= len(body["sources"]) <= 5
        assert body["elapsedMs"] >= 0

    def test_parse_failure(self, client, use_llm, use_session):
        use_llm("nope")
        session = use_session({})
        resp = client.post("/api/pipeline", json={"text": "lol"})

        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "Failed to parse AI response"
        assert body["rawResponse"] == "nope"
        session.get.assert_not_called()

    def test_missing_text(self, client):
        resp = client.post("/api/pipeline", json={"text": ""})
        assert resp.status_code == 400
        assert resp.json()["error"] == "Text input is required"


class TestMalformedRequests:
    def test_invalid_json_reconstruct(self, client):
        resp = client.post("/api/reconstruct", content="{not json", headers={"Content-Type": "application/json"})
        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "Failed to reconstruct text"
        assert body["details"]

    def test_mistyped_query(self, client):
        resp = client.post("/api/search", json={"query": 42})
        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "Failed to search"
        assert "query" in body["details"]

    def test_mistyped_pipeline_text(self, client):
        resp = client.post("/api/pipeline", json={"text": 42})
        assert resp.status_code == 500
        assert resp.json()["error"] == "Failed to reconstruct text"

    @pytest.mark.parametrize(
        "path, message",
        [
            ("/api/reconstruct", "Text input is required"),
            ("/api/pipeline", "Text input is required"),
            ("/api/search", "Search query is required"),
        ],
    )
    def test_no_body(self, client, path, message):
        resp = client.post(path)
        assert resp.status_code == 400
        assert resp.json() == {"error": message}

    def test_never_returns_422(self, client):
        for path in ("/api/reconstruct", "/api/search", "/api/pipeline"):
            assert client.post(path, json=["not", "an", "object"]).status_code != 422


class TestSearchSessionLifecycle:
    def test_session_closed_after_request(self, client, mock_session):
        session = mock_session({})
        with patch("chronos.phases.phase2.aggregator.requests.Session", return_value=session):
            resp = client.post("/api/search", json={"query": "brb"})
        assert resp.status_code == 200
        session.get.assert_called_once()
        session.close.assert_called_once()

    def test_session_closed_when_search_fails(self, client, mock_session):
        session = mock_session({})
        with patch("chronos.phases.phase2.aggregator.requests.Session", return_value=session), patch(
            "chronos.phases.phase2.aggregator.generate_curated_sources", side_effect=RuntimeError("boom")
        ):
            resp = client.post("/api/search", json={"query": "brb"})
        assert resp.status_code == 500
        session.close.assert_called_once()
