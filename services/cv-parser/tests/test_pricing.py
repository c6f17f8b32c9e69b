"""Tests for the pricing table and model capability profiles."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from capabilities import EXTRACTION_TEMPERATURE, REASONING, SAMPLING, profile_for
from errors import ConfigurationError, UnknownModelError
from models import ReasoningEffort, Verbosity
from pricing import PRICING, compute_cost, price_of


class TestPriceOf:
    @pytest.mark.parametrize("model_id", list(PRICING))
    def test_total_over_configured_models(self, model_id: str):
        entry = price_of(model_id)
        assert entry.model_id == model_id
        assert entry.input > 0
        assert entry.output > 0

    def test_unknown_model_raises(self):
        with pytest.raises(UnknownModelError, match="unknown-model-x"):
            price_of("unknown-model-x")

    def test_unknown_model_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            price_of("gpt-4.1-mini-2099")

    def test_no_prefix_matching(self):
        with pytest.raises(UnknownModelError):
            price_of("gpt-5-")

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            PRICING["free-model"] = PRICING["gpt-5"]  # type: ignore[index]


class TestComputeCost:
    def test_gpt_41_mini_example(self):
        entry = price_of("gpt-4.1-mini")
        assert entry.input == 0.2e-6
        assert entry.output == 0.8e-6
        assert compute_cost(entry, 1000, 200) == pytest.approx(0.00036)

    def test_matches_formula_exactly(self):
        entry = price_of("gpt-5")
        assert compute_cost(entry, 12345, 678) == 12345 * entry.input + 678 * entry.output

    def test_zero_tokens_zero_cost(self):
        assert compute_cost(price_of("gpt-4o"), 0, 0) == 0

    def test_per_million_display(self):
        entry = price_of("gpt-4.1")
        assert entry.input_per_million == pytest.approx(1.0)
        assert entry.output_per_million == pytest.approx(4.0)


class TestProfileFor:
    @pytest.mark.parametrize("model_id", ["gpt-5", "gpt-5-mini", "o3-mini"])
    def test_reasoning_family(self, model_id: str):
        assert profile_for(model_id) is REASONING

    @pytest.mark.parametrize("model_id", ["gpt-4.1", "gpt-4.1-mini", "gpt-4o", "gpt-4o-mini", "other"])
    def test_sampling_family(self, model_id: str):
        assert profile_for(model_id) is SAMPLING

    def test_reasoning_options_use_defaults(self):
        assert REASONING.request_options() == {"reasoning_effort": "medium", "verbosity": "medium"}

    def test_reasoning_options_pass_through(self):
        options = REASONING.request_options(ReasoningEffort.HIGH, Verbosity.LOW)
        assert options == {"reasoning_effort": "high", "verbosity": "low"}

    def test_sampling_ignores_reasoning_options(self):
        options = SAMPLING.request_options(ReasoningEffort.HIGH, Verbosity.HIGH)
        assert options == {"temperature": EXTRACTION_TEMPERATURE}
