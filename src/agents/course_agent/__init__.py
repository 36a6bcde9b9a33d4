from agents.course_agent.agent import CourseAgentPipeline
from agents.course_agent.errors import (
    BackendFailureError,
    CourseGenerationError,
    CourseOutlineError,
    CourseTooLargeError,
    JsonExtractionError,
    RateLimitExhaustedError,
)
from agents.course_agent.generation import GenerationConfig, GenerationRunner, extract_json_span
from agents.course_agent.models import (
    Course,
    Flashcard,
    Module,
    QuizQuestion,
    index_to_letter,
    letter_to_index,
    new_id,
)
from agents.course_agent.normalizer import normalize_ai_course
from agents.course_agent.parser import parse_course_text
from agents.course_agent.reconciler import CourseReconciler
from agents.course_agent.serializer import serialize_course

__all__ = [
    "Course",
    "Module",
    "Flashcard",
    "QuizQuestion",
    "new_id",
    "letter_to_index",
    "index_to_letter",
    "parse_course_text",
    "normalize_ai_course",
    "serialize_course",
    "GenerationConfig",
    "GenerationRunner",
    "CourseReconciler",
    "CourseAgentPipeline",
    "extract_json_span",
    "CourseGenerationError",
    "JsonExtractionError",
    "RateLimitExhaustedError",
    "BackendFailureError",
    "CourseTooLargeError",
    "CourseOutlineError",
]
