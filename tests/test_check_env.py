from scripts.check_env import ENV_TEMPLATE, ensure_env_file


def test_template_written_only_when_missing(tmp_path):
    env_path = tmp_path / ".env"

    assert ensure_env_file(env_path) is True
    assert env_path.read_text() == ENV_TEMPLATE
    assert "GEMINI_API_KEY=your-gemini-api-key-here" in ENV_TEMPLATE

    env_path.write_text("GEMINI_API_KEY=real\n")
    assert ensure_env_file(env_path) is False
    assert env_path.read_text() == "GEMINI_API_KEY=real\n"
