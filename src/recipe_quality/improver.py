"""
Recipe Quality - Instruction improvement loop.

Caller-side collaborator that owns the retry budget the validator itself
deliberately lacks: validate, ask the generator for a rewrite, re-validate,
and give up after `max_attempts` with the best instructions seen.
"""

import logging
from dataclasses import dataclass

from recipe_quality.validation import (
    InstructionGenerator,
    InstructionQualityValidator,
    RecipeContext,
    ValidationVerdict,
    get_validator,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3


@dataclass
class ImprovementResult:
    """Outcome of an improvement run."""

    instructions: list[str]
    verdict: ValidationVerdict
    attempts: int
    improved: bool


async def improve_instructions(
    instructions: list[str],
    generator: InstructionGenerator,
    *,
    context: RecipeContext | None = None,
    validator: InstructionQualityValidator | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> ImprovementResult:
    """
    Regenerate instructions until they pass or attempts run out.

    Args:
        instructions: Current instruction steps
        generator: Backend called with (instructions, issues, context)
        context: Optional recipe context for the generator
        validator: Validator to judge with (configured policy if omitted)
        max_attempts: Generation calls allowed before accepting as-is

    Returns:
        ImprovementResult with the accepted instructions and their verdict
    """
    if max_attempts < 0:
        raise ValueError("max_attempts must be >= 0")

    base = validator or get_validator()
    verdict = base.validate(instructions)
    if verdict.is_valid:
        return ImprovementResult(instructions, verdict, attempts=0, improved=False)

    enhancer = InstructionQualityValidator(base.criteria, generator=generator)
    name = context.name if context and context.name else "recipe"

    best, best_verdict = instructions, verdict
    attempts = 0
    while attempts < max_attempts:
        attempts += 1
        try:
            candidate = await enhancer.enhance_async(instructions, context)
        except Exception as e:
            logger.warning(f"[RECIPE IMPROVER] Attempt {attempts} for '{name}' failed: {e}")
            continue

        if not isinstance(candidate, (list, tuple)):
            logger.warning(f"[RECIPE IMPROVER] Attempt {attempts} for '{name}' returned no instruction list")
            continue

        candidate_verdict = enhancer.validate(candidate)
        best, best_verdict = candidate, candidate_verdict
        if candidate_verdict.is_valid:
            logger.info(f"[RECIPE IMPROVER] Improved instructions for '{name}' after {attempts} attempt(s)")
            return ImprovementResult(candidate, candidate_verdict, attempts, improved=True)

        logger.info(
            f"[RECIPE IMPROVER] Attempt {attempts} for '{name}' still has "
            f"{len(candidate_verdict.issues)} issues"
        )

    logger.info(f"[RECIPE IMPROVER] Accepting '{name}' as-is after {attempts} attempt(s)")
    return ImprovementResult(best, best_verdict, attempts, improved=list(best) != list(instructions))
