import asyncio

import pytest

from code_scorer import server


class FixedEvaluator:
    def __init__(self, reply):
        self.reply = reply

    async def __call__(self, api_key, prompt):
        return self.reply


@pytest.fixture
def active_server(monkeypatch):
    monkeypatch.setenv("CODE_SCORER_API_KEY", "sk-test")
    monkeypatch.setattr(server.extension, "evaluator", FixedEvaluator("83"))
    return server


def _with_lifespan(coro_fn):
    async def go():
        async with server.lifespan(server.mcp):
            return await coro_fn()

    return asyncio.run(go())


def test_lifespan_activates_and_deactivates():
    async def inside():
        return await server.code_score_status()

    status = _with_lifespan(inside)
    assert status["active"] is True
    assert status["text"] == "Code Score: N/A"
    assert status["summary"] == "Code Score: N/A"
    assert server.extension.active is False


def test_score_code_tool(active_server):
    result = _with_lifespan(lambda: server.score_code("def f():\n    return 1\n"))
    assert result["state"] == "displayed"
    assert result["score"] == 83
    assert result["status"] == "Code Score: 83/100 👍"
    assert result["summary"] == "Code Score: 83/100 👍"


def test_score_file_tool(active_server, tmp_path):
    target = tmp_path / "mod.py"
    target.write_text("import os\n", encoding="utf-8")

    result = _with_lifespan(lambda: server.score_file(str(target)))
    assert result["document_path"] == str(target)
    assert result["score"] == 83


def test_score_file_rejects_missing_path(active_server, tmp_path):
    with pytest.raises(ValueError, match="Not a file"):
        _with_lifespan(lambda: server.score_file(str(tmp_path / "nope.py")))


def test_failed_score_is_reported(monkeypatch):
    monkeypatch.setattr(server.extension, "evaluator", FixedEvaluator("85 - nice"))
    monkeypatch.setenv("CODE_SCORER_API_KEY", "sk-test")

    async def inside():
        result = await server.score_code("x = 1")
        status = await server.code_score_status()
        return result, status

    result, status = _with_lifespan(inside)
    assert result["state"] == "failed"
    assert result["failure"] == "malformed_response"
    assert result["summary"] == "Error: Invalid response format from OpenAI."
    assert status["text"] == "Code Score: N/A"
    assert status["last_error"] == "Error: Invalid response format from OpenAI."
