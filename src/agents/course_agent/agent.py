"""
Chapter agent: map a document to chapters, then build one module per chapter.

Flow:
1. Documents over the token limit are summarised chunk by chunk with the outline
   prompt; the summaries are joined and stand in for the source text.
2. One outline request returns `{"courseTitle", "modules": [{"title", "content"}]}`.
   A missing title or modules list aborts the run, as does an outline with more
   chapters than `max_modules`.
3. Each chapter gets its own module request (notes, flashcards, quiz). A chapter
   whose request fails becomes an empty module and the run continues.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

from agents.core.token_utils import chunk_budget, chunk_text, estimate_tokens
from agents.course_agent.errors import CourseGenerationError, CourseOutlineError
from agents.course_agent.generation import GenerationRunner, parse_json_object
from agents.course_agent.prompts import (
    OUTLINE_PROMPT,
    SUMMARY_SEPARATOR,
    VERIFICATION_PROMPT,
    build_module_prompt,
    build_outline_prompt,
)

logger = logging.getLogger(__name__)


def empty_module(title: str) -> Dict[str, Any]:
    return {"moduleTitle": title, "notes": "", "flashcards": [], "quiz": []}


class CourseAgentPipeline(GenerationRunner):
    """Outline-then-modules generation, sharing the limiter and sink with the reconciler."""

    def plan(self, text: str) -> List[str]:
        if estimate_tokens(text) <= self.config.token_limit:
            return [text]
        budget = chunk_budget(
            prompt=OUTLINE_PROMPT,
            max_chunk_tokens=self.config.max_chunk_tokens,
            model_context_tokens=self.config.model_context_tokens,
            reserve_tokens=self.config.prompt_reserve_tokens,
        )
        return chunk_text(text, budget)

    async def condense(self, text: str) -> str:
        chunks = self.plan(text)
        if len(chunks) == 1:
            return chunks[0]

        logger.info("document over token limit, summarising %s chunks", len(chunks))
        summaries = []
        for index, chunk in enumerate(chunks):
            self.emit("summary_start", {"index": index, "total": len(chunks)})
            summaries.append(await self._generate(build_outline_prompt(chunk)))
            if index < len(chunks) - 1:
                await self.limiter.sleep(self.config.chunk_delay_seconds)
        return SUMMARY_SEPARATOR.join(summaries)

    async def outline(self, text: str) -> Dict[str, Any]:
        prompt = build_outline_prompt(text)
        response = ""
        try:
            response = await self._generate(prompt)
            if self.sink is not None:
                self.sink.save_initial_response(response)
            outline = parse_json_object(response, chunk_index=0)
            if self.config.verify_json:
                outline = await self._review("verification", VERIFICATION_PROMPT, outline)
            chapters = outline.get("modules")
            if not outline.get("courseTitle") or not isinstance(chapters, list):
                raise CourseOutlineError("Invalid course structure: missing courseTitle or modules array")
            if not all(isinstance(chapter, Mapping) for chapter in chapters):
                raise CourseOutlineError("Invalid course structure: every module must be an object")
            self._check_module_count(len(chapters))
        except CourseGenerationError as e:
            logger.error("course outline failed: %s", e)
            self._save_error("chunking", prompt, response, e)
            raise
        return outline

    async def build_module(self, index: int, chapter: Mapping[str, Any]) -> Dict[str, Any]:
        title = str(chapter.get("title") or "")
        prompt = build_module_prompt(title, str(chapter.get("content") or ""))
        response = ""
        try:
            response = await self._generate(prompt)
            data = parse_json_object(response, chunk_index=index)
            data = await self._apply_reviews(data)
        except CourseGenerationError as e:
            logger.warning("module %s (%r) failed, leaving it empty: %s", index + 1, title, e)
            self._save_error(f"combined-{title}", prompt, response, e)
            self.emit("module_failed", {"index": index, "title": title, "error": str(e)})
            return empty_module(title)

        return {
            "moduleTitle": title,
            "notes": data.get("notes") or "",
            "flashcards": data.get("flashcards") or [],
            "quiz": data.get("quiz") or [],
        }

    async def run(self, text: str) -> Dict[str, Any]:
        source = await self.condense(text)
        outline = await self.outline(source)
        chapters = outline["modules"]
        self.emit("outline_complete", {"title": outline["courseTitle"], "modules": len(chapters)})

        modules = []
        for index, chapter in enumerate(chapters):
            self.emit("module_start", {"index": index, "total": len(chapters)})
            modules.append(await self.build_module(index, chapter))
            self.emit("module_complete", {"index": index})
        return {"courseTitle": outline["courseTitle"], "modules": modules}
