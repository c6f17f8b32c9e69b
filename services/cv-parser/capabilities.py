"""Model capability profiles: which request options each model family accepts.

Reasoning models take ``reasoning_effort`` and ``verbosity``; everything else
gets a fixed low temperature for deterministic extraction.
"""

from dataclasses import dataclass
from typing import Any

from models import ReasoningEffort, Verbosity

EXTRACTION_TEMPERATURE = 0.2


@dataclass(frozen=True)
class ModelProfile:
    family: str
    supports_reasoning: bool = False
    temperature: float | None = None
    default_reasoning_effort: ReasoningEffort = ReasoningEffort.MEDIUM
    default_verbosity: Verbosity = Verbosity.MEDIUM

    def request_options(
        self,
        reasoning_effort: ReasoningEffort | None = None,
        verbosity: Verbosity | None = None,
    ) -> dict[str, Any]:
        if self.supports_reasoning:
            return {
                "reasoning_effort": (reasoning_effort or self.default_reasoning_effort).value,
                "verbosity": (verbosity or self.default_verbosity).value,
            }
        if self.temperature is not None:
            return {"temperature": self.temperature}
        return {}


REASONING = ModelProfile(family="reasoning", supports_reasoning=True)
SAMPLING = ModelProfile(family="sampling", temperature=EXTRACTION_TEMPERATURE)

# Prefix -> profile. Longest matching prefix wins.
PROFILES: dict[str, ModelProfile] = {
    "gpt-5": REASONING,
    "o1": REASONING,
    "o3": REASONING,
    "o4": REASONING,
    "gpt-4": SAMPLING,
}


def profile_for(model_id: str) -> ModelProfile:
    matches = [prefix for prefix in PROFILES if model_id.startswith(prefix)]
    if not matches:
        return SAMPLING
    return PROFILES[max(matches, key=len)]
