"""
Shared plumbing for LLM-driven course generation.

`GenerationRunner` owns the backend, the caller's rate limiter, the diagnostic
sink and the event callback. Subclasses implement `run(text)` and return one
generator JSON document (`{"courseTitle": ..., "modules": [...]}`).
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Protocol

from agents.core.llm import LLM, BackendError
from agents.core.rate_limiter import RetriesExhaustedError, SlidingWindowRateLimiter, call_with_backoff
from agents.course_agent.errors import (
    BackendFailureError,
    CourseGenerationError,
    CourseTooLargeError,
    JsonExtractionError,
    RateLimitExhaustedError,
)
from agents.course_agent.prompts import FACT_CHECK_PROMPT, VERIFICATION_PROMPT

logger = logging.getLogger(__name__)

EventCallback = Callable[[str, Dict[str, Any]], None]


class DiagnosticSink(Protocol):
    def save_initial_response(self, text: str) -> Any: ...

    def save_error(self, step: str, prompt: str, response: str, error: BaseException) -> Any: ...


@dataclass(frozen=True)
class GenerationConfig:
    token_limit: int = 150_000
    max_chunk_tokens: int = 99_000
    model_context_tokens: int = 200_000
    prompt_reserve_tokens: int = 5_000
    max_retries: int = 5
    initial_backoff_seconds: float = 1.0
    chunk_delay_seconds: float = 0.0
    max_modules: int = 75
    verify_json: bool = False
    fact_check: bool = False


def extract_json_span(text: str) -> Optional[str]:
    """Slice from the first '{' to the last '}', dropping prose or markdown fences around it."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        return None
    return text[start:end + 1]


def parse_json_object(text: str, *, chunk_index: int) -> Dict[str, Any]:
    """
    Parse the object span of a model response. A span that starts at '{'
    either decodes to an object or fails, so array-wrapped output yields its
    outermost object.
    """
    span = extract_json_span(text or "")
    if span is None:
        raise JsonExtractionError(
            f"No JSON object found in model response for chunk {chunk_index}",
            chunk_index=chunk_index,
            response=text,
        )
    try:
        return json.loads(span)
    except json.JSONDecodeError as e:
        raise JsonExtractionError(
            f"Model response was not valid JSON for chunk {chunk_index}: {e}",
            chunk_index=chunk_index,
            response=text,
        ) from e


class GenerationRunner(ABC):
    """Rate-limited model calls, optional review passes and the module-count guard."""

    def __init__(
        self,
        *,
        llm: LLM,
        limiter: SlidingWindowRateLimiter,
        config: Optional[GenerationConfig] = None,
        sink: Optional[DiagnosticSink] = None,
        event_callback: Optional[EventCallback] = None,
    ):
        self.llm = llm
        self.limiter = limiter
        self.config = config or GenerationConfig()
        self.sink = sink
        self.emit = event_callback or (lambda _t, _d: None)

    @abstractmethod
    async def run(self, text: str) -> Dict[str, Any]:
        """Turn source text into one generator JSON document."""

    def _check_module_count(self, count: int) -> None:
        if count > self.config.max_modules:
            raise CourseTooLargeError(f"Generated {count} modules (max {self.config.max_modules}); aborting")

    def _save_error(self, step: str, prompt: str, response: str, error: BaseException) -> None:
        if self.sink is not None:
            self.sink.save_error(step, prompt, response, error)

    async def _generate(self, prompt: str) -> str:
        try:
            return await call_with_backoff(
                lambda: self.llm.agenerate(prompt),
                limiter=self.limiter,
                max_retries=self.config.max_retries,
                initial_backoff=self.config.initial_backoff_seconds,
            )
        except RetriesExhaustedError as e:
            raise RateLimitExhaustedError(str(e)) from e
        except BackendError as e:
            raise BackendFailureError(f"Generative backend call failed: {e}") from e

    async def _review(self, stage: str, instruction: str, document: Dict[str, Any]) -> Dict[str, Any]:
        """Ask the model to re-emit the document; keep the original on any failure."""
        prompt = f"{instruction}\n\n{json.dumps(document, ensure_ascii=False)}"
        try:
            response = await self._generate(prompt)
            reviewed = parse_json_object(response, chunk_index=-1)
        except CourseGenerationError as e:
            logger.warning("%s pass failed, keeping original document: %s", stage, e)
            return document
        logger.info("%s pass succeeded", stage)
        return reviewed

    async def _apply_reviews(self, document: Dict[str, Any]) -> Dict[str, Any]:
        if self.config.verify_json:
            document = await self._review("verification", VERIFICATION_PROMPT, document)
        if self.config.fact_check:
            document = await self._review("fact_check", FACT_CHECK_PROMPT, document)
        return document
