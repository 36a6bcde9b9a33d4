"""
API schemas package. Import from submodules or from this package.

Example:
    from api.schemas import CourseResponse
    from api.schemas.course_schemas import CourseResponse
"""

from api.schemas.course_schemas import (
    CourseResponse,
    ErrorResponse,
    FlashcardResponse,
    ModuleResponse,
    QuizQuestionResponse,
    SaveCourseResponse,
)

__all__ = [
    "CourseResponse",
    "ModuleResponse",
    "FlashcardResponse",
    "QuizQuestionResponse",
    "SaveCourseResponse",
    "ErrorResponse",
]
