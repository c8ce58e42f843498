import json

import pytest

from app.modules.generation import cli
from app.modules.generation.errors import ExhaustedRetries, TransportError
from app.modules.generation.pipeline import GenerationPipeline


@pytest.fixture
def install(monkeypatch, make_client):
    def _install(replies):
        client = make_client(replies)
        monkeypatch.setattr(cli, "build_pipeline", lambda _settings: GenerationPipeline(client))
        return client

    return _install


def test_flashcards_command_prints_items(install, capsys):
    install([json.dumps([{"question": "Q", "answer": "A"}])])

    assert cli.main(["flashcards", "Python"]) == 0

    out = json.loads(capsys.readouterr().out)
    assert out["items"] == [{"question": "Q", "answer": "A"}]
    assert out["warning"] is None


def test_fallback_flag_adds_placeholder_items(install, capsys):
    install(["nope", "still nope"])

    assert cli.main(["quiz", "Algebra", "--fallback"]) == 0

    out = json.loads(capsys.readouterr().out)
    assert out["fallback"] is True
    assert out["response"] == "still nope"
    assert out["items"][0]["correctAnswer"] == "Concept A"


def test_ask_reads_question_from_file(install, capsys, tmp_path):
    client = install(["Because of Rayleigh scattering."])
    question = tmp_path / "q.txt"
    question.write_text("Why is the sky blue?", encoding="utf-8")

    assert cli.main(["ask", "--file", str(question)]) == 0

    assert "Question: Why is the sky blue?" in client.prompts[0]
    assert json.loads(capsys.readouterr().out)["response"] == "Because of Rayleigh scattering."


def test_exhaustion_exits_non_zero(install, capsys):
    install([ExhaustedRetries(TransportError("down"), attempts=4)])

    assert cli.main(["company", "Acme"]) == 1

    out = json.loads(capsys.readouterr().out)
    assert out["error"] == "Failed to get AI response"


def test_missing_text_is_an_error(install):
    install([])
    with pytest.raises(SystemExit):
        cli.main(["flashcards"])
