"""
Recipe Quality - Meal-level quality report.

Wraps the instruction verdict with the meal-shape checks the meal plan
generator runs before showing a meal: name, description, ingredient
count and measurements.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from recipe_quality.validation import (
    InstructionQualityValidator,
    ValidationVerdict,
    get_validator,
)

logger = logging.getLogger(__name__)

MIN_INGREDIENTS = 8

# Share of ingredients allowed to lack a quantity + unit
MAX_UNMEASURED_RATIO = 0.2

MEASUREMENT_PATTERN = re.compile(
    r"\d+\.?\d*\s*(cup|tbsp|tsp|tablespoon|teaspoon|oz|ounce|lb|pound|g|gram|ml|liter|l|"
    r"bunch|clove|pinch|dash|slice|piece|can|package|pkg|bottle)",
    re.IGNORECASE,
)


@dataclass
class MealQualityReport:
    """Quality report for a whole meal."""

    is_valid: bool
    issues: list[str] = field(default_factory=list)
    instruction_verdict: ValidationVerdict | None = None

    @property
    def needs_regeneration(self) -> bool:
        return not self.is_valid

    def to_dict(self) -> dict[str, Any]:
        """Flags in the shape the meal plan client reads."""
        return {
            "_qualityIssues": list(self.issues),
            "_needsRegeneration": self.needs_regeneration,
        }


def first_present(data: Mapping[str, Any], *keys: str) -> Any:
    """
    Value of the first key that is set and not None.

    An empty list still counts as present, so `"instructions": []` is
    reported as too few steps rather than falling back to `directions`.
    """
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def has_measurement(ingredient: Any) -> bool:
    """True if the ingredient string states a quantity with a unit."""
    return isinstance(ingredient, str) and MEASUREMENT_PATTERN.search(ingredient) is not None


def _check_ingredients(ingredients: Any) -> list[str]:
    if not isinstance(ingredients, list):
        return ["Ingredients must be an array"]

    issues = []
    if len(ingredients) < MIN_INGREDIENTS:
        issues.append(
            f"Insufficient ingredients: found {len(ingredients)}, minimum {MIN_INGREDIENTS} required"
        )

    unmeasured = [ing for ing in ingredients if not has_measurement(ing)]
    if len(unmeasured) > len(ingredients) * MAX_UNMEASURED_RATIO:
        issues.append(
            f"Too many ingredients ({len(unmeasured)}) lack specific measurements - "
            f"specify amounts for at least {round((1 - MAX_UNMEASURED_RATIO) * 100)}% of ingredients"
        )
    return issues


def validate_meal(
    meal: Any,
    validator: InstructionQualityValidator | None = None,
) -> MealQualityReport:
    """
    Check a meal JSON object and its instructions.

    Args:
        meal: Meal mapping with name, description, ingredients, instructions
        validator: Instruction validator (configured policy if omitted)

    Returns:
        MealQualityReport; instruction issues are appended after meal issues
    """
    if not isinstance(meal, Mapping):
        return MealQualityReport(is_valid=False, issues=["Meal object is missing or null"])

    issues: list[str] = []
    if not meal.get("name"):
        issues.append("Meal name is missing")
    if not meal.get("description"):
        issues.append("Meal description is missing")

    ingredients = first_present(meal, "ingredients", "mainIngredients")
    if ingredients is None:
        ingredients = []
    issues.extend(_check_ingredients(ingredients))

    instructions = first_present(meal, "instructions", "directions")
    verdict = (validator or get_validator()).validate(instructions)
    issues.extend(verdict.issues)

    report = MealQualityReport(is_valid=not issues, issues=issues, instruction_verdict=verdict)
    if report.is_valid:
        logger.debug(f"[MEAL QUALITY] Meal '{meal.get('name')}' passed quality validation")
    else:
        logger.warning(f"[MEAL QUALITY] Quality validation failed for meal '{meal.get('name')}': {issues}")
    return report
