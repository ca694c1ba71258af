"""
Recipe Quality - Instruction quality gate for generated recipes.

Decides whether machine-generated recipe instructions are acceptable or
must be regenerated, and offers an injectable hook for regenerating them.
"""

__version__ = "1.0.0"

from recipe_quality.validation import (
    InstructionQualityValidator,
    RecipeContext,
    ValidationVerdict,
    enhance_instructions,
    validate_instructions,
)

__all__ = [
    "InstructionQualityValidator",
    "RecipeContext",
    "ValidationVerdict",
    "__version__",
    "enhance_instructions",
    "validate_instructions",
]
