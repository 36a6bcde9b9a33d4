"""
Course schemas served by the HTTP layer.

Field names follow the JSON the client already consumes (`correctAnswer`).
"""

from pydantic import BaseModel, ConfigDict, Field

from agents.course_agent.models import Course, Module


class FlashcardResponse(BaseModel):
    id: str
    question: str
    answer: str


class QuizQuestionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    question: str
    options: list[str]
    correct_answer: int = Field(alias="correctAnswer")


class ModuleResponse(BaseModel):
    id: str
    title: str
    notes: str
    flashcards: list[FlashcardResponse]
    quiz: list[QuizQuestionResponse]

    @classmethod
    def from_module(cls, module: Module) -> "ModuleResponse":
        return cls(
            id=module.id,
            title=module.title,
            notes=module.notes,
            flashcards=[FlashcardResponse(id=c.id, question=c.question, answer=c.answer) for c in module.flashcards],
            quiz=[
                QuizQuestionResponse(id=q.id, question=q.question, options=list(q.options), correct_answer=q.correct_answer)
                for q in module.quiz
            ],
        )


class CourseResponse(BaseModel):
    title: str
    modules: list[ModuleResponse]

    @classmethod
    def from_course(cls, course: Course) -> "CourseResponse":
        return cls(title=course.title, modules=[ModuleResponse.from_module(m) for m in course.modules])


class SaveCourseResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    file_name: str = Field(alias="fileName")


class ErrorResponse(BaseModel):
    error: str
    code: str
