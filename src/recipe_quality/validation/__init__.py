"""
Recipe Quality - Instruction validation.

The quality gate that decides whether generated recipe instructions are
acceptable or must be regenerated.
"""

from recipe_quality.validation.context import RecipeContext
from recipe_quality.validation.criteria import (
    RELAXED_CRITERIA,
    STRICT_CRITERIA,
    QualityCriteria,
    get_criteria,
)
from recipe_quality.validation.validator import (
    MISSING_INSTRUCTIONS_ISSUE,
    InstructionGenerator,
    InstructionQualityValidator,
    enhance_instructions,
    get_validator,
    validate_instructions,
)
from recipe_quality.validation.verdict import ValidationVerdict

__all__ = [
    "InstructionGenerator",
    "InstructionQualityValidator",
    "MISSING_INSTRUCTIONS_ISSUE",
    "QualityCriteria",
    "RELAXED_CRITERIA",
    "RecipeContext",
    "STRICT_CRITERIA",
    "ValidationVerdict",
    "enhance_instructions",
    "get_criteria",
    "get_validator",
    "validate_instructions",
]
