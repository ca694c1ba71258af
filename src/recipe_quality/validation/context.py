"""Optional recipe context passed along to instruction enhancement."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class RecipeContext:
    """What the generator may know about the recipe besides its steps."""

    name: str | None = None
    ingredients: list[str] = field(default_factory=list)
    type: str | None = None

    @classmethod
    def from_meal(cls, meal: Mapping[str, Any]) -> "RecipeContext":
        """
        Build context from a meal/recipe JSON object.

        Accepts either `ingredients` or the older `mainIngredients` key,
        and `type` or `mealType` for the type tag.
        """
        ingredients = meal.get("ingredients") or meal.get("mainIngredients") or []
        return cls(
            name=meal.get("name"),
            ingredients=[str(i) for i in ingredients] if isinstance(ingredients, list) else [],
            type=meal.get("type") or meal.get("mealType"),
        )

    def describe(self) -> str:
        """Render the context as prompt text."""
        lines = []
        if self.name:
            lines.append(f"Recipe: {self.name}")
        if self.type:
            lines.append(f"Type: {self.type}")
        if self.ingredients:
            lines.append("Ingredients:")
            lines.extend(f"- {ing}" for ing in self.ingredients)
        return "\n".join(lines)
