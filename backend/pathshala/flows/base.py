"""
Flow wrapper: input validation, output validation and bounded retry.

Every flow is an ``async def body(client, data)`` that renders a prompt, calls
Gemini and returns a dict (or model). ``@flow`` turns it into
``async def invoke(client, payload) -> OutputModel``:

    Validating -> Attempting(n) -> Success | Attempting(n + 1) | Failed

Input errors fail before any model call. Output errors and transient Gemini
errors consume an attempt. Anything else is not ours to retry and propagates.
"""
from __future__ import annotations

import asyncio
import functools
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..errors import FlowFailedError, FlowInputError, FlowOutputError, GeminiError
from .retry import DEFAULT_RETRY_POLICY, RetryPolicy, RetryState

logger = logging.getLogger(__name__)

T = TypeVar("T")
InModel = TypeVar("InModel", bound=BaseModel)
OutModel = TypeVar("OutModel", bound=BaseModel)

# Backoff sleep; replaced in tests to record delays instead of waiting
_sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

RETRYABLE_ERRORS = (GeminiError, FlowOutputError, httpx.HTTPError)


def _error_summary(err: ValidationError) -> List[Dict[str, Any]]:
    return [{"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]} for e in err.errors()]


def validate_input(name: str, model: Type[InModel], payload: Any) -> InModel:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump()
    try:
        return model.model_validate(payload)
    except ValidationError as err:
        raise FlowInputError(name, _error_summary(err)) from err


def validate_output(name: str, model: Type[OutModel], raw: Any) -> OutModel:
    if raw is None:
        raise FlowOutputError(f"{name}: model returned no output")
    if isinstance(raw, BaseModel):
        raw = raw.model_dump()
    try:
        return model.model_validate(raw)
    except ValidationError as err:
        raise FlowOutputError(f"{name}: output does not match schema ({err.error_count()} error(s))") from err


def flow(
    name: str,
    *,
    input_model: Type[InModel],
    output_model: Type[OutModel],
    retry: RetryPolicy = DEFAULT_RETRY_POLICY,
) -> Callable[[Callable[[Any, InModel], Awaitable[Any]]], Callable[[Any, Any], Awaitable[OutModel]]]:
    def decorator(body: Callable[[Any, InModel], Awaitable[Any]]) -> Callable[[Any, Any], Awaitable[OutModel]]:
        @functools.wraps(body)
        async def invoke(client: Any, payload: Any) -> OutModel:
            data = validate_input(name, input_model, payload)
            state = RetryState(retry)
            while True:
                attempt = state.begin_attempt()
                try:
                    result = validate_output(name, output_model, await body(client, data))
                except RETRYABLE_ERRORS as err:
                    if state.exhausted:
                        logger.error("%s failed after %s attempt(s): %s", name, attempt, err)
                        raise FlowFailedError(name, attempt, err) from err
                    delay_ms = state.next_delay_ms()
                    logger.warning(
                        "%s attempt %s/%s failed (%s). Retrying in %.1fs.",
                        name,
                        attempt,
                        retry.max_attempts,
                        err,
                        delay_ms / 1000,
                    )
                    await _sleep(delay_ms / 1000)
                    continue
                if attempt > 1:
                    logger.info("%s succeeded on attempt %s/%s", name, attempt, retry.max_attempts)
                return result

        invoke.flow_name = name  # type: ignore[attr-defined]
        invoke.input_model = input_model  # type: ignore[attr-defined]
        invoke.output_model = output_model  # type: ignore[attr-defined]
        invoke.retry_policy = retry  # type: ignore[attr-defined]
        return invoke

    return decorator


@dataclass
class Enrichment(Generic[T]):
    """Outcome of an optional step: a value, or a warning explaining its absence."""

    value: Optional[T] = None
    warning: Optional[str] = None


async def best_effort(label: str, call: Callable[[], Awaitable[T]]) -> Enrichment[T]:
    """Run an optional enrichment call once. Failure is logged and reported as a warning."""
    try:
        return Enrichment(value=await call())
    except Exception as err:
        logger.warning("Optional step %r failed, returning primary result only: %s", label, err, exc_info=True)
        return Enrichment(warning=f"{label} could not be generated")
