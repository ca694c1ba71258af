"""
Pytest configuration and fixtures for recipe quality tests.
"""

import os

import pytest

# Set test environment before importing recipe_quality modules
os.environ.pop("OPENAI_API_KEY", None)

from recipe_quality.config import settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Every test starts from the default (strict) policy."""
    monkeypatch.delenv("QUALITY_POLICY", raising=False)
    settings.reset()
    yield
    settings.reset()


@pytest.fixture
def good_instructions():
    """Seven detailed steps that pass both policies."""
    return [
        "Preheat the oven to 400°F and line a large baking sheet with parchment paper.",
        "Pat the salmon fillets dry with paper towels and place them skin side down.",
        "Whisk the olive oil, lemon juice, garlic, and dill together in a small bowl.",
        "Brush the marinade evenly over each fillet, covering the tops and the sides well.",
        "Roast the salmon on the middle rack for 12 minutes until it flakes easily.",
        "Toss the asparagus with olive oil and roast alongside the fish for 10 minutes.",
        "Rest the salmon for 3 minutes, then garnish with fresh dill and lemon slices.",
    ]


@pytest.fixture
def seared_chicken_instructions():
    """Seared chicken recipe with one short step and a stovetop step without numbers."""
    return [
        "Preheat the oven to 375°F before starting.",
        "Season the chicken breasts generously with salt and pepper on both sides.",
        "Heat a tablespoon of olive oil in a large skillet over medium-high heat.",
        "Sear the chicken for 5 minutes per side until golden brown.",
        "Transfer the skillet to the oven and bake for 15 minutes.",
        "Check that internal temperature reaches 165°F with a meat thermometer.",
        "Let the chicken rest for 5 minutes before slicing and serving.",
    ]


@pytest.fixture
def generic_instructions():
    """The placeholder output the generator sometimes falls back to."""
    return ["Cook until done.", "Serve hot."]


@pytest.fixture
def sample_meal(good_instructions):
    """Meal JSON as stored by the meal plan generator."""
    return {
        "name": "Lemon Dill Salmon",
        "description": "Roasted salmon with asparagus and a bright lemon dill marinade",
        "type": "dinner",
        "ingredients": [
            "4 salmon fillets (6 oz each)",
            "1 lb asparagus, trimmed",
            "3 tbsp olive oil",
            "2 tbsp lemon juice",
            "2 cloves garlic, minced",
            "1 tbsp fresh dill, chopped",
            "1 tsp kosher salt",
            "1 lemon, sliced",
        ],
        "instructions": good_instructions,
    }
