"""
Recipe Quality - LLM Client.

Wraps OpenAI with Instructor for guaranteed structured outputs.
Used only by the optional instruction generator; validation never
touches the network.
"""

from typing import TypeVar

import instructor
from openai import AsyncOpenAI
from pydantic import BaseModel

from recipe_quality.config import settings
from recipe_quality.llm.prompt_logger import log_prompt

# Type variable for generic structured output
T = TypeVar("T", bound=BaseModel)


class GenerationError(RuntimeError):
    """The generation backend could not produce usable instructions."""


# Singleton client instance
_client: instructor.AsyncInstructor | None = None


def get_client() -> instructor.AsyncInstructor:
    """
    Get the Instructor-wrapped async OpenAI client.

    Uses singleton pattern to reuse connection.

    Raises:
        GenerationError: If no OpenAI API key is configured
    """
    global _client

    if _client is None:
        if not settings.openai_api_key:
            raise GenerationError("OPENAI_API_KEY is not configured")
        openai_client = AsyncOpenAI(api_key=settings.openai_api_key)
        _client = instructor.from_openai(openai_client)

    return _client


def reset_client() -> None:
    """Forget the cached client (tests, key rotation)."""
    global _client
    _client = None


async def call_llm(
    *,
    response_model: type[T],
    system_prompt: str,
    user_prompt: str,
    node: str = "enhance",
    model: str | None = None,
    temperature: float | None = None,
    max_retries: int = 2,
) -> T:
    """
    Make a structured LLM call with guaranteed schema compliance.

    Args:
        response_model: Pydantic model class for the response
        system_prompt: System message setting context
        user_prompt: User message with the actual request
        node: Label used in prompt logs
        model: Override for settings.enhance_model
        temperature: Override for settings.enhance_temperature
        max_retries: Number of retries if response doesn't match schema

    Returns:
        Instance of response_model with validated data
    """
    client = get_client()

    model = model or settings.enhance_model
    if temperature is None:
        temperature = settings.enhance_temperature

    messages = [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]

    try:
        response = await client.chat.completions.create(
            model=model,
            messages=messages,
            response_model=response_model,
            max_retries=max_retries,
            temperature=temperature,
        )

        log_prompt(
            node=node,
            model=model,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            response_model=response_model.__name__,
            response=response,
        )

        return response

    except Exception as e:
        log_prompt(
            node=node,
            model=model,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            response_model=response_model.__name__,
            error=str(e),
        )
        raise
