"""
Chunk reconciliation: turn a long source document into one course JSON document.

Flow:
1. Split the document into paragraph-aligned chunks within the token budget.
2. Send chunks strictly in order; every request after the first is seeded with
   the JSON accumulated so far and asks the model to extend it.
3. After each response, slice the first `{` .. last `}` span, parse it and make
   it the new accumulator. A chunk that yields no parseable object aborts the run.
4. Optionally run verification / fact-check passes over the final document.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from agents.core.token_utils import chunk_budget, chunk_text, estimate_tokens
from agents.course_agent.errors import JsonExtractionError
from agents.course_agent.generation import GenerationRunner, parse_json_object
from agents.course_agent.prompts import GENERATION_PROMPT, build_continuation_prompt, build_first_chunk_prompt

logger = logging.getLogger(__name__)


def empty_course_document() -> Dict[str, Any]:
    return {"courseTitle": "", "modules": []}


class CourseReconciler(GenerationRunner):
    """Sequential, rate-limited generation of a course document from source text."""

    def plan(self, text: str) -> List[str]:
        """Chunks to send, in order. Documents under the token limit go in one piece."""
        estimated = estimate_tokens(text)
        if estimated <= self.config.token_limit:
            return [text]
        budget = chunk_budget(
            prompt=GENERATION_PROMPT,
            max_chunk_tokens=self.config.max_chunk_tokens,
            model_context_tokens=self.config.model_context_tokens,
            reserve_tokens=self.config.prompt_reserve_tokens,
        )
        chunks = chunk_text(text, budget)
        logger.info(
            "estimated tokens %s exceed limit %s, split into %s chunks (budget=%s)",
            estimated,
            self.config.token_limit,
            len(chunks),
            budget,
        )
        return chunks

    async def run(self, text: str) -> Dict[str, Any]:
        return await self.reconcile(text)

    async def reconcile(self, text: str) -> Dict[str, Any]:
        chunks = self.plan(text)
        accumulated = empty_course_document()

        for index, chunk in enumerate(chunks):
            if index == 0:
                prompt = build_first_chunk_prompt(chunk)
            else:
                prompt = build_continuation_prompt(accumulated, chunk)

            self.emit("chunk_start", {"index": index, "total": len(chunks)})
            response = await self._generate(prompt)

            if index == 0 and self.sink is not None:
                self.sink.save_initial_response(response)

            try:
                accumulated = parse_json_object(response, chunk_index=index)
            except JsonExtractionError as e:
                logger.error("chunk %s/%s: %s", index + 1, len(chunks), e)
                self._save_error(f"chunk_{index}", prompt, response, e)
                raise

            self.emit("chunk_complete", {"index": index, "modules": len(accumulated.get("modules") or [])})
            if index < len(chunks) - 1:
                await self.limiter.sleep(self.config.chunk_delay_seconds)

        accumulated = await self._apply_reviews(accumulated)
        self._check_module_count(len(accumulated.get("modules") or []))
        return accumulated
