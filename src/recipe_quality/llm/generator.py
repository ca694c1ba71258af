"""
Recipe Quality - OpenAI instruction generator.

The enhancement backend: rewrites failing instructions using the
validation issues as guidance. Plug an instance into
InstructionQualityValidator(generator=...) and call enhance_async().
"""

import logging

from pydantic import BaseModel, Field

from recipe_quality.llm.client import GenerationError, call_llm
from recipe_quality.validation.context import RecipeContext

logger = logging.getLogger(__name__)

MIN_GENERATED_STEPS = 5

SYSTEM_PROMPT = """You are an expert culinary writer specializing in clear, detailed recipe instructions. Rewrite ONLY the instructions of the recipe you are given so they meet professional standards.

INSTRUCTION QUALITY STANDARDS:
1. Write 10-12 detailed instruction steps.
2. Begin each step with a strong, specific action verb. Never start with "prepare", "add", "combine", "mix", "cook", "make", "serve", "follow" or "enjoy".
3. Give exact numeric times and temperatures in every cooking step (e.g. "Bake at 375°F for 25 minutes").
4. Give internal temperatures for proteins where relevant (165°F for chicken, 145°F for fish).
5. Include sensory cues for doneness (color, texture, aroma).
6. Never use generic phrases like "cook until done", "to taste", "prepare ingredients", "as needed" or "standard procedure".
7. Each step must be at least 15 words long.
8. Keep the recipe name and ingredients unchanged.

Return the improved steps in the `instructions` field, one step per item, without numbering."""


class ImprovedInstructions(BaseModel):
    """Structured response for an instruction rewrite."""

    instructions: list[str] = Field(description="Rewritten instruction steps, in order")


def build_user_prompt(
    instructions: list[str],
    issues: list[str],
    context: RecipeContext | None = None,
) -> str:
    """Assemble the rewrite request from the current steps and their issues."""
    parts = []
    if context is not None:
        described = context.describe()
        if described:
            parts.append(described)

    steps = "\n".join(f"{i}. {step}" for i, step in enumerate(instructions, start=1))
    parts.append(f"Current instructions:\n{steps or '(none)'}")

    if issues:
        problems = "\n".join(f"- {issue}" for issue in issues)
        parts.append(f"Problems found by the quality check:\n{problems}")

    parts.append("Rewrite the instructions so that every problem above is fixed.")
    return "\n\n".join(parts)


class OpenAIInstructionGenerator:
    """Async generator callback backed by an Instructor/OpenAI call."""

    def __init__(
        self,
        *,
        model: str | None = None,
        temperature: float | None = None,
        min_steps: int = MIN_GENERATED_STEPS,
    ):
        self.model = model
        self.temperature = temperature
        self.min_steps = min_steps

    async def __call__(
        self,
        instructions: list[str],
        issues: list[str],
        context: RecipeContext | None = None,
    ) -> list[str]:
        name = context.name if context and context.name else "recipe"
        logger.info(f"[RECIPE IMPROVER] Requesting improved instructions for '{name}' ({len(issues)} issues)")

        result = await call_llm(
            response_model=ImprovedInstructions,
            system_prompt=SYSTEM_PROMPT,
            user_prompt=build_user_prompt(instructions, issues, context),
            model=self.model,
            temperature=self.temperature,
        )

        steps = [step.strip() for step in result.instructions if isinstance(step, str) and step.strip()]
        if len(steps) < self.min_steps:
            raise GenerationError(
                f"Not enough valid instructions ({len(steps)}, minimum {self.min_steps})"
            )

        logger.info(f"[RECIPE IMPROVER] Received {len(steps)} steps for '{name}'")
        return steps
