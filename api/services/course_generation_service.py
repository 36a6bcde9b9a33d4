"""
Course generation service: uploaded document -> canonical course text.

Pipeline: extract text -> generator (chunk reconciliation or the chapter agent)
-> generator JSON -> normalize -> serialize -> keep a copy under the generated-courses directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from agents.course_agent.errors import CourseGenerationError
from agents.course_agent.models import Course
from agents.course_agent.normalizer import normalize_ai_course
from agents.course_agent.generation import GenerationRunner
from agents.course_agent.serializer import serialize_course

from api.services.course_store import save_generated_course
from api.utils.logger import configure_logging, log_request
from api.utils.text_extractor import extract_text

logger = configure_logging()


class MalformedCourseDocumentError(CourseGenerationError):
    code = "malformed_course_json"


def document_to_course(document: Dict[str, Any]) -> Course:
    """Normalize a generated document, reporting shape errors as a generation failure."""
    try:
        return normalize_ai_course(document)
    except (KeyError, TypeError, AttributeError, IndexError) as e:
        raise MalformedCourseDocumentError(f"Generated course JSON has an unexpected shape: {e!r}") from e


class CourseGenerationService:
    def __init__(
        self,
        generator: GenerationRunner,
        *,
        generated_dir: Optional[str | Path] = None,
        operation: str = "generate_course",
    ):
        self.generator = generator
        self.operation = operation
        self.generated_dir = generated_dir

    async def generate_from_text(self, text: str) -> str:
        with log_request(logger, self.operation):
            document = await self.generator.run(text)
            course = document_to_course(document)
            markdown = serialize_course(course)
            logger.info("course generated title=%r modules=%s", course.title, len(course.modules))

        if self.generated_dir is not None:
            save_generated_course(self.generated_dir, markdown)
        return markdown

    async def generate_from_upload(self, data: bytes, mime_type: Optional[str]) -> str:
        text = extract_text(data, mime_type)
        logger.info("document text extracted mime=%s chars=%s", mime_type, len(text))
        return await self.generate_from_text(text)
