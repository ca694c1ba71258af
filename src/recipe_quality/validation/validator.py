"""
Recipe Quality - Instruction Quality Validator.

Decides whether generated recipe instructions are good enough to show,
or need to be regenerated.

validate() never raises for bad content: every problem becomes an issue
string so callers can choose to block, regenerate, or accept with a flag.
enhance() is the hook callers use when a verdict fails; without an
injected generator it returns the instructions untouched.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from recipe_quality.validation.context import RecipeContext
from recipe_quality.validation.criteria import (
    COOKING_VERB_PATTERN,
    TEMPERATURE_OR_TIME_PATTERN,
    Policy,
    QualityCriteria,
    get_criteria,
)
from recipe_quality.validation.verdict import ValidationVerdict

logger = logging.getLogger(__name__)

MISSING_INSTRUCTIONS_ISSUE = "Missing or invalid instructions"

# (instructions, issues, context) -> replacement instructions
InstructionGenerator = Callable[
    [list[str], list[str], RecipeContext | None],
    list[str] | Awaitable[list[str]],
]


def _is_instruction_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _first_word(step: str) -> str:
    words = step.split()
    return words[0].lower() if words else ""


class InstructionQualityValidator:
    """
    Stateless quality gate for recipe instruction steps.

    Safe to share between threads and tasks: nothing is mutated after
    construction.
    """

    def __init__(
        self,
        criteria: QualityCriteria | Policy | str = "strict",
        generator: InstructionGenerator | None = None,
    ):
        if isinstance(criteria, str):
            criteria = get_criteria(criteria)
        elif not isinstance(criteria, QualityCriteria):
            raise TypeError(
                f"criteria must be a QualityCriteria or policy name, got {type(criteria).__name__}"
            )
        self.criteria = criteria
        self.generator = generator

    @property
    def policy(self) -> str:
        return self.criteria.policy

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self, instructions: Any) -> ValidationVerdict:
        """
        Check instruction steps against the active criteria.

        All checks run and all issues are reported together, in this order:
        step count, short steps (aggregate), per-step issues in step order,
        timing tally (aggregate).

        Args:
            instructions: Ordered list of instruction strings

        Returns:
            A fresh ValidationVerdict
        """
        if not _is_instruction_sequence(instructions):
            return ValidationVerdict(is_valid=False, issues=[MISSING_INSTRUCTIONS_ISSUE])

        criteria = self.criteria
        issues: list[str] = []

        if len(instructions) < criteria.min_steps:
            issues.append(
                f"Too few instruction steps ({len(instructions)}, "
                f"minimum required: {criteria.min_steps})."
            )

        if criteria.min_words_per_step is not None:
            short_steps = [
                step for step in instructions
                if isinstance(step, str) and len(step.split()) < criteria.min_words_per_step
            ]
            if short_steps:
                issues.append(
                    f"Found {len(short_steps)} instructions with fewer than "
                    f"{criteria.min_words_per_step} words."
                )

        timed_steps = 0
        for number, step in enumerate(instructions, start=1):
            # whitespace-only steps count as empty too, not just "" and None
            if not isinstance(step, str) or not step.strip():
                issues.append(f"Step {number} is invalid or empty.")
                continue

            step_lower = step.lower()

            for phrase in criteria.banned_phrases:
                if phrase.lower() in step_lower:
                    issues.append(f'Step {number} contains banned phrase: "{phrase}"')
                    break

            if criteria.check_weak_verbs:
                first_word = _first_word(step)
                if first_word in criteria.weak_verbs:
                    issues.append(f'Step {number} starts with weak verb: "{first_word}"')

            has_timing = TEMPERATURE_OR_TIME_PATTERN.search(step_lower) is not None

            if criteria.check_cooking_specificity:
                if COOKING_VERB_PATTERN.search(step_lower) and not has_timing:
                    issues.append(
                        f"Step {number} mentions cooking but lacks specific time or temperature."
                    )

            if has_timing:
                timed_steps += 1

        if criteria.min_timed_steps is not None and timed_steps < criteria.min_timed_steps:
            issues.append(
                f"Only {timed_steps} steps include specific temperature or timing "
                f"(minimum required: {criteria.min_timed_steps})."
            )

        return ValidationVerdict.from_issues(issues)

    # -------------------------------------------------------------------------
    # Enhancement
    # -------------------------------------------------------------------------

    def _needs_enhancement(self, instructions: Any) -> ValidationVerdict | None:
        verdict = self.validate(instructions)
        if verdict.is_valid:
            return None

        logger.info(
            f"[RECIPE VALIDATION] Enhancing recipe instructions with "
            f"{len(verdict.issues)} issues: {verdict.issues}"
        )
        return verdict

    def enhance(
        self,
        instructions: list[str],
        context: RecipeContext | None = None,
    ) -> list[str]:
        """
        Return improved instructions, or the input unchanged.

        Valid instructions are returned as-is. Invalid ones are handed to
        the injected generator once; with no generator they are returned
        as-is and a downstream regeneration step is expected to replace them.

        Raises:
            TypeError: If the generator is async (use enhance_async)
        """
        verdict = self._needs_enhancement(instructions)
        if verdict is None or self.generator is None:
            return instructions

        result = self.generator(list(instructions), verdict.issues, context)
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            raise TypeError("Generator is asynchronous; call enhance_async() instead")
        return result

    async def enhance_async(
        self,
        instructions: list[str],
        context: RecipeContext | None = None,
    ) -> list[str]:
        """Same contract as enhance(), awaiting the generator if needed."""
        verdict = self._needs_enhancement(instructions)
        if verdict is None or self.generator is None:
            return instructions

        result = self.generator(list(instructions), verdict.issues, context)
        if inspect.isawaitable(result):
            result = await result
        return result


# =============================================================================
# Module-level helpers
# =============================================================================


def get_validator(
    policy: Policy | str | None = None,
    generator: InstructionGenerator | None = None,
) -> InstructionQualityValidator:
    """Build a validator for `policy`, defaulting to the configured one."""
    if policy is None:
        from recipe_quality.config import settings

        policy = settings.quality_policy
    return InstructionQualityValidator(policy, generator=generator)


def validate_instructions(
    instructions: Any,
    policy: Policy | str | None = None,
) -> ValidationVerdict:
    """Validate with the configured (or given) policy."""
    return get_validator(policy).validate(instructions)


def enhance_instructions(
    instructions: list[str],
    context: RecipeContext | None = None,
    policy: Policy | str | None = None,
) -> list[str]:
    """Passthrough enhancement with the configured (or given) policy."""
    return get_validator(policy).enhance(instructions, context)
