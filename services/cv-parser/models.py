"""Pydantic models for extraction requests and results."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ReasoningEffort(str, Enum):
    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Verbosity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SchemaMode(str, Enum):
    COMPLETE = "complete"
    SEPARATE = "separate"


class ExtractionRequest(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_id: str | None = None
    document_data: str
    reasoning_effort: ReasoningEffort | None = None
    verbosity: Verbosity | None = None
    target_schema: dict[str, Any] | None = None
    cache_key: str | None = None
    debug: bool = False


class TokenUsage(BaseModel):
    input_tokens: int = Field(default=0, ge=0)
    output_tokens: int = Field(default=0, ge=0)


class Completion(BaseModel):
    """Normalized output of a single remote completion."""

    raw_text: str
    parsed_record: dict[str, Any] | None = None
    usage: TokenUsage = Field(default_factory=TokenUsage)


class ExtractionResult(BaseModel):
    """Result of one extraction, or the composite of a partitioned run.

    ``parsed_record`` is None when the model's text was not valid JSON;
    ``raw_text`` then holds the unparsed response.
    """

    raw_text: str
    parsed_record: dict[str, Any] | None = None
    input_tokens: int = Field(default=0, ge=0)
    output_tokens: int = Field(default=0, ge=0)
    total_cost: float = Field(default=0.0, ge=0)
    unit_price_input: float
    unit_price_output: float

    @property
    def input_price_per_million(self) -> float:
        return self.unit_price_input * 1e6

    @property
    def output_price_per_million(self) -> float:
        return self.unit_price_output * 1e6
