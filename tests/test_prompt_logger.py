"""
Tests for the prompt logger.
"""

import pytest

from recipe_quality.config import settings
from recipe_quality.llm import prompt_logger


@pytest.fixture(autouse=True)
def log_dir(tmp_path, monkeypatch):
    monkeypatch.delenv("RECIPE_QUALITY_LOG_PROMPTS", raising=False)
    monkeypatch.setattr(prompt_logger, "LOG_DIR", tmp_path / "prompt_logs")
    prompt_logger.reset_session()
    settings.reset()
    yield tmp_path / "prompt_logs"
    prompt_logger.reset_session()


def _log(**overrides):
    kwargs = dict(
        node="enhance",
        model="gpt-4o",
        system_prompt="You rewrite recipe instructions.",
        user_prompt="Recipe: Lemon Dill Salmon",
        response_model="ImprovedInstructions",
        response={"instructions": ["Roast the salmon for 12 minutes."]},
    )
    kwargs.update(overrides)
    return prompt_logger.log_prompt(**kwargs)


class TestPromptLogger:

    def test_off_by_default(self, log_dir):
        assert _log() is None
        assert prompt_logger.get_session_log_dir() is None
        assert not log_dir.exists()

    @pytest.mark.parametrize("value", ["true", "1", "yes"])
    def test_enabled_through_settings(self, monkeypatch, log_dir, value):
        monkeypatch.setenv("RECIPE_QUALITY_LOG_PROMPTS", value)
        settings.reset()

        path = _log()

        assert path is not None
        assert path.parent.parent == log_dir
        assert path.name == "01_enhance.md"
        content = path.read_text(encoding="utf-8")
        assert content.startswith("# enhance call 1")
        assert "Roast the salmon for 12 minutes." in content

    def test_override_beats_settings(self, monkeypatch):
        monkeypatch.setenv("RECIPE_QUALITY_LOG_PROMPTS", "true")
        settings.reset()
        prompt_logger.enable_prompt_logging(False)
        assert _log() is None

        prompt_logger.enable_prompt_logging(True)
        assert _log() is not None

    def test_error_is_recorded_and_counter_advances(self):
        prompt_logger.enable_prompt_logging(True)
        _log()
        path = _log(response=None, error="rate limited")

        assert path.name == "02_enhance.md"
        assert "**ERROR:** rate limited" in path.read_text(encoding="utf-8")
        assert prompt_logger.get_session_log_dir() == path.parent
