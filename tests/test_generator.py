"""
Tests for the OpenAI instruction generator (LLM calls mocked).
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from recipe_quality.llm import client as llm_client
from recipe_quality.llm.client import GenerationError, call_llm, get_client
from recipe_quality.llm.generator import (
    ImprovedInstructions,
    OpenAIInstructionGenerator,
    build_user_prompt,
)
from recipe_quality.validation import InstructionQualityValidator, RecipeContext


@pytest.fixture(autouse=True)
def reset_llm_client():
    llm_client.reset_client()
    yield
    llm_client.reset_client()


class TestBuildUserPrompt:
    """The rewrite request carries context, steps and issues."""

    def test_includes_everything(self):
        context = RecipeContext(name="Mystery Stew", ingredients=["1 lb beef", "2 carrots"], type="dinner")
        prompt = build_user_prompt(
            ["Cook until done.", "Serve hot."],
            ['Step 1 contains banned phrase: "cook until done"'],
            context,
        )

        assert "Recipe: Mystery Stew" in prompt
        assert "Type: dinner" in prompt
        assert "- 1 lb beef" in prompt
        assert "1. Cook until done." in prompt
        assert "2. Serve hot." in prompt
        assert '- Step 1 contains banned phrase: "cook until done"' in prompt

    def test_without_context(self):
        prompt = build_user_prompt([], [], None)
        assert "Current instructions:\n(none)" in prompt
        assert "Recipe:" not in prompt


class TestOpenAIInstructionGenerator:
    """Generator output is cleaned and checked before it is returned."""

    def test_returns_stripped_steps(self, good_instructions):
        response = ImprovedInstructions(instructions=["  " + good_instructions[0] + "  ", ""] + good_instructions[1:])
        with patch("recipe_quality.llm.generator.call_llm", new=AsyncMock(return_value=response)) as mock_call:
            generator = OpenAIInstructionGenerator(model="gpt-4o-mini")
            steps = asyncio.run(generator(["Cook until done."], ["issue"], RecipeContext(name="Salmon")))

        assert steps == good_instructions
        kwargs = mock_call.call_args.kwargs
        assert kwargs["response_model"] is ImprovedInstructions
        assert kwargs["model"] == "gpt-4o-mini"
        assert "Recipe: Salmon" in kwargs["user_prompt"]

    def test_too_few_steps_raises(self):
        response = ImprovedInstructions(instructions=["Whisk the eggs.", " ", "Fold in the cheese."])
        with patch("recipe_quality.llm.generator.call_llm", new=AsyncMock(return_value=response)):
            with pytest.raises(GenerationError):
                asyncio.run(OpenAIInstructionGenerator()(["Cook until done."], ["issue"]))

    def test_plugs_into_validator(self, generic_instructions, good_instructions):
        response = ImprovedInstructions(instructions=good_instructions)
        with patch("recipe_quality.llm.generator.call_llm", new=AsyncMock(return_value=response)):
            validator = InstructionQualityValidator("strict", generator=OpenAIInstructionGenerator())
            result = asyncio.run(validator.enhance_async(generic_instructions))

        assert result == good_instructions
        assert validator.validate(result).is_valid


class TestClient:
    """Client construction and structured calls."""

    def test_missing_api_key_raises(self, monkeypatch):
        from recipe_quality.config import settings

        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        settings.reset()
        with pytest.raises(GenerationError):
            get_client()

    def test_call_llm_uses_settings_defaults(self, monkeypatch):
        expected = ImprovedInstructions(instructions=["Whisk the eggs for 2 minutes."])
        fake_client = MagicMock()
        fake_client.chat.completions.create = AsyncMock(return_value=expected)
        monkeypatch.setattr(llm_client, "_client", fake_client)

        result = asyncio.run(call_llm(
            response_model=ImprovedInstructions,
            system_prompt="system",
            user_prompt="user",
        ))

        assert result is expected
        kwargs = fake_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["temperature"] == 0.7
        assert kwargs["response_model"] is ImprovedInstructions
        assert kwargs["messages"][0] == {"role": "system", "content": "system"}

    def test_call_llm_reraises_errors(self, monkeypatch):
        fake_client = MagicMock()
        fake_client.chat.completions.create = AsyncMock(side_effect=RuntimeError("boom"))
        monkeypatch.setattr(llm_client, "_client", fake_client)

        with pytest.raises(RuntimeError, match="boom"):
            asyncio.run(call_llm(
                response_model=ImprovedInstructions,
                system_prompt="system",
                user_prompt="user",
            ))
