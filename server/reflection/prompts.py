from __future__ import annotations

import random
from typing import Optional, Sequence

from .rules import DEFAULT_PROMPT, REFLECTION_PROMPTS


def pick_prompt(
    excluding: Optional[str] = None,
    rng: Optional[random.Random] = None,
    prompts: Sequence[str] = REFLECTION_PROMPTS,
) -> str:
    """Pick the reflection question of the day, avoiding ``excluding`` when possible."""
    if not prompts:
        return DEFAULT_PROMPT
    chooser = rng or random
    if excluding is not None and len(prompts) > 1:
        candidates = [p for p in prompts if p != excluding]
        if candidates:
            return chooser.choice(candidates)
    return chooser.choice(list(prompts))
