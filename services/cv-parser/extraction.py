"""Extraction orchestrator: single-schema calls and partitioned runs.

A partitioned run issues one call per partial schema, sequentially, sharing
a prompt cache key, and splices each later partial result into the first
one. Any failed call aborts the whole run.
"""

import json
import logging
import uuid
from typing import Any, Iterable, Sequence

from config import settings
from encoding import is_document_usable
from errors import ConfigurationError, DocumentUnusableError
from models import ExtractionRequest, ExtractionResult
from openai_client import CompletionClient
from pricing import compute_cost, price_of
from prompts import build_messages
from resume_schema import PARTIAL_SCHEMAS, PartialSchema

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "cv-parsing"


def to_json(record: dict[str, Any]) -> str:
    return json.dumps(record, indent=2, ensure_ascii=False)


def new_cache_key() -> str:
    return f"{CACHE_KEY_PREFIX}-{uuid.uuid4().hex}"


async def extract_one(client: CompletionClient, request: ExtractionRequest) -> ExtractionResult:
    """Extract one structured record under ``request.target_schema``.

    Configuration problems (missing schema, unknown model) and an empty
    document are raised before any remote call is made.
    """
    if request.target_schema is None:
        raise ConfigurationError("Schema is required")

    model = request.model_id or settings.DEFAULT_MODEL
    pricing = price_of(model)

    if not is_document_usable(request.document_data):
        raise DocumentUnusableError("Document payload is empty")

    completion = await client.complete(request, build_messages(request.document_data))

    raw_text = completion.raw_text
    if completion.parsed_record is not None:
        raw_text = to_json(completion.parsed_record)

    input_tokens = completion.usage.input_tokens
    output_tokens = completion.usage.output_tokens
    total_cost = compute_cost(pricing, input_tokens, output_tokens)

    logger.info(
        "Extraction completed: model=%s parsed=%s input_tokens=%d output_tokens=%d cost=$%.6f",
        model,
        completion.parsed_record is not None,
        input_tokens,
        output_tokens,
        total_cost,
    )

    return ExtractionResult(
        raw_text=raw_text,
        parsed_record=completion.parsed_record,
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        total_cost=total_cost,
        unit_price_input=pricing.input,
        unit_price_output=pricing.output,
    )


def merge_fields(base: dict[str, Any], partial: dict[str, Any], fields: Iterable[str]) -> list[str]:
    """Copy ``fields`` present in ``partial`` into ``base``. Returns the names copied."""
    copied = []
    for name in sorted(fields):
        if name in partial:
            base[name] = partial[name]
            copied.append(name)
    return copied


def merge_partial(composite: ExtractionResult, result: ExtractionResult, partial: PartialSchema) -> bool:
    """Splice one partial result into the composite in place.

    Skipped when either side lacks a parsed record, or lacks the partial's
    section as an object. Returns True when the merge was applied.
    """
    if composite.parsed_record is None or result.parsed_record is None:
        logger.warning("Skipping merge of %s: no parsed record", partial.name)
        return False

    base = composite.parsed_record
    incoming = result.parsed_record
    if partial.section is not None:
        base = base.get(partial.section)
        incoming = incoming.get(partial.section)
        if not isinstance(base, dict) or not isinstance(incoming, dict):
            logger.warning("Skipping merge of %s: section %s missing", partial.name, partial.section)
            return False

    copied = merge_fields(base, incoming, partial.fields)
    composite.raw_text = to_json(composite.parsed_record)
    logger.debug("Merged %d fields from %s", len(copied), partial.name)
    return True


async def extract_partitioned(
    client: CompletionClient,
    request: ExtractionRequest,
    partials: Sequence[PartialSchema] = PARTIAL_SCHEMAS,
) -> ExtractionResult:
    """Extract with one call per partial schema and merge into a composite record.

    The first result is the base; each later result overwrites only the
    fields its schema declares. Tokens and cost are summed; unit prices are
    those of the first call.
    """
    if not partials:
        raise ConfigurationError("At least one partial schema is required")

    cache_key = new_cache_key()
    logger.info("Starting partitioned extraction: %d parts, cache_key=%s", len(partials), cache_key)

    composite: ExtractionResult | None = None
    for partial in partials:
        result = await extract_one(
            client,
            request.model_copy(update={"target_schema": partial.json_schema, "cache_key": cache_key}),
        )

        if composite is None:
            composite = result
            continue

        composite.input_tokens += result.input_tokens
        composite.output_tokens += result.output_tokens
        composite.total_cost += result.total_cost
        merge_partial(composite, result, partial)

    return composite
