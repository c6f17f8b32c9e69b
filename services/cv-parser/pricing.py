"""Per-model token pricing (USD per token)."""

from dataclasses import dataclass
from types import MappingProxyType

from errors import UnknownModelError


@dataclass(frozen=True)
class PricingEntry:
    model_id: str
    input: float
    output: float

    @property
    def input_per_million(self) -> float:
        return self.input * 1e6

    @property
    def output_per_million(self) -> float:
        return self.output * 1e6


_ENTRIES = (
    PricingEntry("gpt-5-mini", input=0.125e-6, output=1e-6),
    PricingEntry("gpt-5", input=0.625e-6, output=5e-6),
    PricingEntry("gpt-4o-mini", input=0.075e-6, output=0.3e-6),
    PricingEntry("gpt-4o", input=0.125e-6, output=5e-6),
    PricingEntry("gpt-4.1", input=1e-6, output=4e-6),
    PricingEntry("gpt-4.1-mini", input=0.2e-6, output=0.8e-6),
)

PRICING: MappingProxyType[str, PricingEntry] = MappingProxyType(
    {entry.model_id: entry for entry in _ENTRIES}
)


def price_of(model_id: str) -> PricingEntry:
    """Look up pricing by exact model identifier.

    Raises UnknownModelError when the identifier is not in the table.
    Falling back to a default model is the caller's decision.
    """
    try:
        return PRICING[model_id]
    except KeyError:
        raise UnknownModelError(model_id) from None


def compute_cost(entry: PricingEntry, input_tokens: int, output_tokens: int) -> float:
    return input_tokens * entry.input + output_tokens * entry.output
