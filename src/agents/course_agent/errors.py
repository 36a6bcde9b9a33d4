"""Failure modes of chunked course generation. Parsing itself never raises."""


class CourseGenerationError(Exception):
    """Base class; `code` is the stable identifier reported to HTTP callers."""

    code = "course_generation_failed"


class JsonExtractionError(CourseGenerationError):
    code = "invalid_model_json"

    def __init__(self, message: str, *, chunk_index: int, response: str = ""):
        super().__init__(message)
        self.chunk_index = chunk_index
        self.response = response


class RateLimitExhaustedError(CourseGenerationError):
    code = "rate_limited"


class BackendFailureError(CourseGenerationError):
    code = "backend_failure"


class CourseTooLargeError(CourseGenerationError):
    code = "too_many_modules"


class CourseOutlineError(CourseGenerationError):
    """The chapter outline lacks a course title or a modules list."""

    code = "invalid_course_outline"
