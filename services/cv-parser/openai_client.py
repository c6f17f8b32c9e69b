"""Async client for schema-constrained OpenAI chat completions.

Sends one PDF attachment plus instruction per call, in strict JSON-schema
mode, with a long per-call timeout. Transient errors (rate limit, timeout,
connection, 5xx) can be retried with tenacity; retries are off unless
OPENAI_RETRY_ATTEMPTS > 1. All other SDK errors propagate unchanged.
"""

import json
import logging
import re
from typing import Any

import httpx
import openai
from openai import AsyncOpenAI
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from capabilities import profile_for
from config import settings
from errors import ConfigurationError
from models import Completion, ExtractionRequest, TokenUsage

logger = logging.getLogger(__name__)

SCHEMA_NAME = "resume"

TRANSIENT_ERRORS = (
    openai.RateLimitError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.InternalServerError,
)

_FENCE = re.compile(r"^```(?:json)?\s*\n?(.*?)\n?```$", re.DOTALL)


def build_request_options(
    request: ExtractionRequest,
    messages: list[dict[str, Any]],
) -> dict[str, Any]:
    """Build chat.completions.create kwargs for one extraction request."""
    if request.target_schema is None:
        raise ConfigurationError("Schema is required")

    model = request.model_id or settings.DEFAULT_MODEL
    options: dict[str, Any] = {
        "model": model,
        "messages": messages,
        "response_format": {
            "type": "json_schema",
            "json_schema": {
                "name": SCHEMA_NAME,
                "schema": request.target_schema,
                "strict": True,
            },
        },
    }

    if request.cache_key:
        options["prompt_cache_key"] = request.cache_key

    options.update(profile_for(model).request_options(request.reasoning_effort, request.verbosity))
    return options


def try_parse_json(raw: str) -> dict | None:
    """Parse the model output as a JSON object.

    Strict mode returns bare JSON; a single surrounding markdown fence is
    tolerated. Returns None when the text is not a JSON object.
    """
    if not raw:
        return None

    cleaned = raw.strip()
    match = _FENCE.match(cleaned)
    if match:
        cleaned = match.group(1).strip()

    try:
        result = json.loads(cleaned)
    except json.JSONDecodeError as e:
        # Never log the content itself, it holds personal data
        logger.warning("Could not parse JSON from model response (%d chars): %s", len(raw), e)
        return None

    if not isinstance(result, dict):
        logger.warning("Model response is JSON but not an object: %s", type(result).__name__)
        return None
    return result


class CompletionClient:
    """OpenAI completion client with a long timeout and optional retry."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: int | None = None,
        connect_timeout: int | None = None,
        retry_attempts: int | None = None,
        retry_delay: float | None = None,
        retry_backoff: float | None = None,
        client: AsyncOpenAI | None = None,
    ):
        self._retry_attempts = retry_attempts if retry_attempts is not None else settings.OPENAI_RETRY_ATTEMPTS
        self._retry_delay = retry_delay if retry_delay is not None else settings.OPENAI_RETRY_DELAY
        self._retry_backoff = retry_backoff if retry_backoff is not None else settings.OPENAI_RETRY_BACKOFF

        read_timeout = timeout if timeout is not None else settings.OPENAI_TIMEOUT_SECONDS
        conn_timeout = connect_timeout if connect_timeout is not None else settings.OPENAI_CONNECT_TIMEOUT
        self._timeout = httpx.Timeout(float(read_timeout), connect=float(conn_timeout))

        if client is None:
            client = AsyncOpenAI(
                api_key=api_key or settings.OPENAI_API_KEY,
                base_url=base_url or settings.OPENAI_BASE_URL or None,
                timeout=self._timeout,
                # Retries are handled (or not) by tenacity below
                max_retries=0,
            )
        self._client = client

    async def close(self):
        await self._client.close()

    async def complete(self, request: ExtractionRequest, messages: list[dict[str, Any]]) -> Completion:
        """Run one structured-extraction completion.

        Returns the raw text, the parsed record (None when the text is not a
        JSON object) and token usage. Remote errors are not caught here.
        """
        options = build_request_options(request, messages)
        logger.info(
            "Requesting completion: model=%s options=%s cache_key=%s",
            options["model"],
            sorted(k for k in options if k not in ("model", "messages", "response_format")),
            request.cache_key,
        )

        response = await self._create_with_retry(options)

        if request.debug:
            logger.info("Response: %s", response.model_dump_json(indent=2))

        raw_text = response.choices[0].message.content or ""
        usage = response.usage
        token_usage = TokenUsage(
            input_tokens=(usage.prompt_tokens or 0) if usage is not None else 0,
            output_tokens=(usage.completion_tokens or 0) if usage is not None else 0,
        )

        if request.debug:
            logger.info("Usage: %s", token_usage)

        return Completion(
            raw_text=raw_text,
            parsed_record=try_parse_json(raw_text),
            usage=token_usage,
        )

    async def _create_with_retry(self, options: dict[str, Any]):
        """Retry wrapper, configured from the client's retry settings."""

        @retry(
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            stop=stop_after_attempt(max(self._retry_attempts, 1)),
            wait=wait_exponential(
                multiplier=self._retry_delay,
                exp_base=self._retry_backoff,
                max=120,
            ),
            reraise=True,
            before_sleep=lambda state: logger.warning(
                "OpenAI request failed (%s), retrying in %.1fs (attempt %d/%d)",
                type(state.outcome.exception()).__name__,  # type: ignore[union-attr]
                state.next_action.sleep,  # type: ignore[union-attr]
                state.attempt_number,
                self._retry_attempts,
            ),
        )
        async def _do_create():
            return await self._client.chat.completions.create(**options, timeout=self._timeout)

        return await _do_create()
