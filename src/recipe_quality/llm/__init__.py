"""
Recipe Quality - LLM Client.

Provides structured LLM calls via Instructor, and the OpenAI-backed
instruction generator used for enhancement.
"""

from recipe_quality.llm.client import GenerationError, call_llm, get_client
from recipe_quality.llm.generator import ImprovedInstructions, OpenAIInstructionGenerator

__all__ = [
    "GenerationError",
    "ImprovedInstructions",
    "OpenAIInstructionGenerator",
    "call_llm",
    "get_client",
]
