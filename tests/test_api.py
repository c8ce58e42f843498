import json

import pytest
from fastapi.testclient import TestClient

from app.apis.deps import get_pipeline
from app.modules.generation.errors import ExhaustedRetries, TransportError
from app.modules.generation.pipeline import GenerationPipeline
from main import create_app


@pytest.fixture
def api(make_client):
    """Return (TestClient, fake model client factory installer)."""
    app = create_app()

    def install(replies):
        client = make_client(replies)
        app.dependency_overrides[get_pipeline] = lambda: GenerationPipeline(client)
        return client

    return TestClient(app), install


def test_flashcards_returns_validated_items(api):
    http, install = api
    reply = json.dumps([{"question": "Q", "answer": "A"}])
    install([reply])

    resp = http.post("/api/flashcards", json={"topic": "Python"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["items"] == [{"question": "Q", "answer": "A"}]
    assert body["response"] == reply
    assert body["warning"] is None
    assert body["fallback"] is False


def test_quiz_items_keep_camel_case_keys(api):
    http, install = api
    install(
        [
            json.dumps(
                [
                    {
                        "question": "Capital of France?",
                        "options": ["Paris", "Rome", "Berlin", "Madrid"],
                        "correctAnswer": "Paris",
                        "explanation": "Paris is the capital.",
                    }
                ]
            )
        ]
    )

    resp = http.post("/api/quiz", json={"topic": "Geography"})

    assert resp.status_code == 200
    assert resp.json()["items"][0]["correctAnswer"] == "Paris"


def test_unvalidated_quiz_is_flagged_and_uses_fallback_items(api):
    http, install = api
    client = install(["not json", "still not json"])

    resp = http.post("/api/quiz", json={"topic": "Geography"})

    assert resp.status_code == 200
    body = resp.json()
    assert client.calls == 2
    assert body["warning"] == "AI output could not be validated; returned raw text."
    assert body["response"] == "still not json"
    assert body["fallback"] is True
    assert body["items"][0]["correctAnswer"] == "Concept A"


@pytest.mark.parametrize("payload", [{}, {"topic": ""}, {"topic": "   "}])
def test_missing_topic_is_rejected(api, payload):
    http, install = api
    client = install([])

    resp = http.post("/api/company-questions", json=payload)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Topic is required"}
    assert client.calls == 0


def test_exhausted_retries_become_server_error(api):
    http, install = api
    install([ExhaustedRetries(TransportError("Gemini API error: 503"), attempts=4)])

    resp = http.post("/api/flashcards", json={"topic": "Python"})

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Failed to generate flashcards"
    assert "503" in body["details"]


def test_ask_returns_free_text(api):
    http, install = api
    install(["Gravity pulls masses together."])

    resp = http.post("/api/ask", json={"prompt": "What is gravity?"})

    assert resp.status_code == 200
    assert resp.json() == {"response": "Gravity pulls masses together.", "warning": None}


def test_ask_requires_prompt(api):
    http, install = api
    install([])

    resp = http.post("/api/ask", json={})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Prompt is required"}


def test_ask_failure_is_reported(api):
    http, install = api
    install([ExhaustedRetries(TransportError("down"), attempts=4)])

    resp = http.post("/api/ask", json={"prompt": "What is gravity?"})

    assert resp.status_code == 500
    assert resp.json()["error"] == "Failed to get AI response"


def test_health_reports_configuration(api):
    http, _ = api

    resp = http.get("/api/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "OK"
    assert isinstance(body["geminiApiConfigured"], bool)
    assert body["timestamp"]
