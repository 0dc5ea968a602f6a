import pytest
from conftest import PYTHON_TEMPLATE, question_block
from fastapi.testclient import TestClient

from app import main
from app.catalog import TOPICS
from app.services.gemini_client import GenerationError
from app.services.sheets_exporter import ExportError, SheetsExporter


@pytest.fixture
def client(monkeypatch, offline_settings):
    monkeypatch.setattr(main, "exporter", SheetsExporter(offline_settings))
    with TestClient(main.app) as test_client:
        yield test_client


def generation_payload(**overrides):
    payload = {
        "role": "Software Engineer",
        "languages": ["python"],
        "mode": "template",
        "difficulty": "easy",
        "topic": "Arrays",
    }
    payload.update(overrides)
    return payload


def test_generate_returns_parsed_questions(client, monkeypatch):
    monkeypatch.setattr(main.generator, "complete", lambda prompt: question_block(1, sections=f"PYTHON_TEMPLATE:\n{PYTHON_TEMPLATE}\n"))

    response = client.post("/api/generate", json=generation_payload())

    assert response.status_code == 200
    questions = response.json()["questions"]
    assert len(questions) == 5
    assert questions[0]["title"] == "Pair With Target Sum"
    assert questions[0]["implementation"] == PYTHON_TEMPLATE.strip()
    assert questions[0]["problemStatement"].startswith("Given an array")
    assert questions[0]["baseId"]


def test_generate_reports_upstream_failure(client, monkeypatch):
    def failing(prompt):
        raise GenerationError("rate limited")

    monkeypatch.setattr(main.generator, "complete", failing)

    response = client.post("/api/generate", json=generation_payload(languages=["python", "java"]))

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate questions"}


def test_generate_reports_unexpected_failure_as_json(client, monkeypatch):
    def broken(request):
        raise KeyError("boom")

    monkeypatch.setattr(main.generator, "generate_questions", broken)

    response = client.post("/api/generate", json=generation_payload())

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate questions"}


def test_generate_rejects_invalid_input(client):
    assert client.post("/api/generate", json=generation_payload(languages=[])).status_code == 422
    assert client.post("/api/generate", json=generation_payload(topic="Astrology")).status_code == 422
    assert client.post("/api/generate", json=generation_payload(difficulty="extreme")).status_code == 422


def test_export_without_credentials_is_a_dry_run(client, monkeypatch):
    monkeypatch.setattr(main.generator, "complete", lambda prompt: question_block(1))
    questions = client.post("/api/generate", json=generation_payload(mode="problem", languages=["python", "go"])).json()["questions"]

    def no_network(self):
        raise AssertionError("network access attempted")

    monkeypatch.setattr(SheetsExporter, "_service", no_network)
    response = client.post("/api/sheets", json={"questions": questions[:3], "inputParameters": generation_payload(mode="problem", languages=["python", "go"])})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert "3" in body["message"]
    assert body["updatedRows"] == 0
    assert body["questionSummary"]["Pair With Target Sum"] == ["PYTHON", "GO"]


def test_export_requires_questions(client):
    response = client.post("/api/sheets", json={"questions": [], "inputParameters": generation_payload()})
    assert response.status_code == 400
    assert response.json() == {"error": "No questions provided"}


def test_export_failure_body(client, monkeypatch):
    def failing_export(questions, request):
        raise ExportError("permission denied")

    monkeypatch.setattr(main.exporter, "export", failing_export)
    question = {
        "id": "q-1-python",
        "baseId": "q-1",
        "title": "t",
        "problemStatement": "p",
        "inputFormat": "i",
        "outputFormat": "o",
        "constraints": "c",
        "sampleInput": "si",
        "sampleOutput": "so",
        "language": "python",
    }

    response = client.post("/api/sheets", json={"questions": [question], "inputParameters": generation_payload()})

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Failed to connect to Google Sheets"
    assert body["details"] == "permission denied"


def test_options_lists_form_choices(client):
    body = client.get("/api/options").json()
    assert body["topics"] == list(TOPICS)
    assert {"id": "cpp", "name": "C++"} in body["languages"]
    assert body["modes"] == ["implementation", "template", "problem"]
    assert body["difficulties"] == ["easy", "medium", "hard"]
    assert "Software Engineer" in body["roles"]


def test_debug_prompt(client):
    response = client.post("/api/debug/prompt", json=generation_payload(languages=["rust"]))
    assert response.status_code == 200
    assert "RUST_TEMPLATE:" in response.json()["prompt"]


def test_health(client):
    body = client.get("/api/health").json()
    assert body["status"] == "ok"
    assert body["sheetsConfigured"] is False
