"""Tests for the HTTP API."""

import json

import pytest


@pytest.mark.unit
class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json() == {"status": "ok"}


@pytest.mark.unit
class TestValidation:
    @pytest.mark.parametrize(
        "path,payload",
        [
            ("/query", {"query": ""}),
            ("/analyze", {"queryString": ""}),
            ("/explain", {"code": "x = 1"}),
            ("/refactor", {"code": "print('hi')"}),
            ("/debug", {"errorLog": "oops"}),
            ("/debug", {}),
        ],
    )
    def test_short_input_never_reaches_model(self, client, no_llm, path, payload):
        r = client.post(path, json=payload)
        assert r.status_code == 422


@pytest.mark.unit
class TestFlows:
    def test_query(self, client, fake_llm):
        fake_llm(
            json.dumps(
                {
                    "insight": "Focus on AuthService.",
                    "databaseQuery": "SELECT * FROM runs WHERE status = 'failed' AND week = 'last week'",
                }
            )
        )
        r = client.post("/query", json={"query": "failed tests last week"})
        assert r.status_code == 200
        body = r.json()
        assert body["insight"] == "Focus on AuthService."
        assert body["databaseQuery"] == "SELECT * FROM runs WHERE status = 'failed' AND week = 'last week'"
        assert body["queryResult"]["columns"][0] == "TestCaseID"
        assert len(body["queryResult"]["rows"]) == 4

    def test_query_without_result(self, client, fake_llm):
        fake_llm(json.dumps({"insight": "Nothing to run.", "databaseQuery": ""}))
        r = client.post("/query", json={"query": "hi"})
        assert r.status_code == 200
        assert r.json()["queryResult"] is None

    def test_query_records(self, client, fake_llm):
        fake_llm(json.dumps({"insight": "i", "databaseQuery": "SELECT * FROM api_logs WHERE level = 'error'"}))
        r = client.post("/query/records", json={"query": "api errors"})
        assert r.status_code == 200
        body = r.json()
        assert body["count"] == 3
        assert body["answer"] == "Found 3 row(s). Showing top 3."
        assert body["records"][0]["ServiceName"] == "OrderAPI"

    def test_analyze(self, client, fake_llm):
        fake_llm(json.dumps({"summary": "s", "anomalies": "a", "patterns": "p"}))
        r = client.post("/analyze", json={"queryString": "SELECT 1"})
        assert r.status_code == 200
        assert r.json() == {"summary": "s", "anomalies": "a", "patterns": "p"}

    def test_explain(self, client, fake_llm):
        fake_llm(json.dumps({"explanation": "Prints a greeting."}))
        r = client.post("/explain", json={"code": "print('hello world')", "language": "python"})
        assert r.status_code == 200
        assert r.json() == {"explanation": "Prints a greeting."}

    def test_refactor(self, client, fake_llm):
        fake_llm(json.dumps({"suggestions": "Return the comparison directly."}))
        code = "function f(u) { if (u.admin) { return true; } else { return false; } }"
        r = client.post("/refactor", json={"code": code})
        assert r.status_code == 200
        assert r.json()["suggestions"] == "Return the comparison directly."

    def test_debug(self, client, fake_llm):
        fake_llm(json.dumps({"potentialCauses": "c", "suggestions": "s"}))
        r = client.post("/debug", json={"errorLog": "IndexError: list index out of range"})
        assert r.status_code == 200
        assert r.json() == {
            "potentialCauses": "c",
            "suggestions": "s",
            "suggestedFixes": None,
            "relevantResources": None,
        }

    def test_model_failure_is_502(self, client, fake_llm):
        fake_llm("not json at all")
        r = client.post("/explain", json={"code": "print('hello world')"})
        assert r.status_code == 502
        assert r.json() == {"detail": "Failed to get explanation from the AI model."}


@pytest.mark.unit
class TestExecute:
    def test_execute(self, client):
        r = client.post("/execute", json={"queryString": "performance of login"})
        assert r.status_code == 200
        assert r.json()["columns"][2] == "ExecutionTime(ms)"

    def test_execute_default(self, client):
        r = client.post("/execute", json={"queryString": "nothing in particular"})
        assert len(r.json()["rows"]) == 5
