"""
Recipe Quality - Validation criteria.

Two policies exist because the strict client/server checks and the
lighter server-side checks drifted apart over time:

- strict: 7+ steps, 10+ words per step, no weak leading verbs,
  every cooking step carries a time or temperature
- relaxed: 5+ steps, at least 2 steps anywhere mention a time or temperature

Which one is active is a deployment choice (QUALITY_POLICY), never mixed.
"""

import re
from dataclasses import dataclass
from typing import Literal

Policy = Literal["strict", "relaxed"]

COOKING_VERB_PATTERN = re.compile(
    r"\b(bake|roast|simmer|boil|cook|heat|fry|saute|sauté|grill|broil|toast|microwave)\b",
    re.IGNORECASE,
)

TEMPERATURE_OR_TIME_PATTERN = re.compile(
    r"(\d+\s*°[fc]|\d+\s*(minutes?|mins?|hours?|hrs?|seconds?|secs?))",
    re.IGNORECASE,
)

STRICT_BANNED_PHRASES: tuple[str, ...] = (
    "cook until done",
    "as needed",
    "to taste",
    "follow package directions",
    "cook according to instructions",
    "standard procedure",
    "prepare ingredients",
    "wash, chop, and measure everything before starting",
    "preheat your oven or stovetop as needed for this recipe",
    "combine the ingredients according to the main ingredients list",
    "cook following standard procedures",
    "serve hot and enjoy",
    "enjoy with your family",
    "ingredients list",
    "according to the ingredient",
    "as needed for this recipe",
    "with your family",
    "following standard procedures",
)

RELAXED_BANNED_PHRASES: tuple[str, ...] = (
    "standard procedure",
    "cook until done",
    "cook as usual",
    "cook according to",
    "package directions",
    "follow instructions",
    "following instructions",
    "standard method",
    "according to the main",
    "for this type of dish",
    "as needed for this recipe",
    "usual practice",
    "as directed",
    "prepare ingredients",
    "until done",
    "enjoy with family",
    "serve and enjoy",
    "prepare as usual",
    "as preferred",
    "cook accordingly",
)

# "add" is only weak as a bare leading word; "Additional ..." is fine
WEAK_VERBS: tuple[str, ...] = (
    "prepare",
    "combine",
    "cook",
    "follow",
    "make",
    "serve",
    "add",
    "mix",
    "enjoy",
)


@dataclass(frozen=True)
class QualityCriteria:
    """Static thresholds and reference lists for one validation policy."""

    policy: Policy
    banned_phrases: tuple[str, ...]
    weak_verbs: tuple[str, ...] = ()
    min_steps: int = 7
    min_words_per_step: int | None = None
    check_weak_verbs: bool = False
    check_cooking_specificity: bool = False
    min_timed_steps: int | None = None


STRICT_CRITERIA = QualityCriteria(
    policy="strict",
    banned_phrases=STRICT_BANNED_PHRASES,
    weak_verbs=WEAK_VERBS,
    min_steps=7,
    min_words_per_step=10,
    check_weak_verbs=True,
    check_cooking_specificity=True,
)

RELAXED_CRITERIA = QualityCriteria(
    policy="relaxed",
    banned_phrases=RELAXED_BANNED_PHRASES,
    min_steps=5,
    min_timed_steps=2,
)

CRITERIA_BY_POLICY: dict[str, QualityCriteria] = {
    "strict": STRICT_CRITERIA,
    "relaxed": RELAXED_CRITERIA,
}


def get_criteria(policy: Policy | str) -> QualityCriteria:
    """
    Look up the preset criteria for a policy name.

    Raises:
        ValueError: If the policy is not "strict" or "relaxed"
    """
    try:
        return CRITERIA_BY_POLICY[policy]
    except KeyError:
        raise ValueError(
            f"Unknown quality policy {policy!r}, expected one of {sorted(CRITERIA_BY_POLICY)}"
        ) from None
