"""
Reshape generator JSON (AIGeneratedCourse) into a Course.

The normalizer trusts its input: a missing `notes.summary` or a malformed
`correctAnswer` surfaces as KeyError / TypeError to the caller.
"""

from __future__ import annotations

from typing import Any, Mapping, Tuple

from agents.course_agent.models import (
    Course,
    Flashcard,
    IdFactory,
    Module,
    QuizQuestion,
    letter_to_index,
    new_id,
)


def _notes(raw: Any) -> str:
    # The agent pipeline emits notes as a flat string; keywords are not surfaced.
    if isinstance(raw, str):
        return raw
    return raw["summary"]


def _options(raw: Any) -> Tuple[str, ...]:
    if isinstance(raw, Mapping):
        return tuple(raw[key] for key in sorted(raw))
    return tuple(raw)


def _flashcard(raw: Mapping[str, Any], id_factory: IdFactory) -> Flashcard:
    if "question" in raw:
        return Flashcard(id=id_factory(), question=raw["question"], answer=raw["answer"])
    return Flashcard(id=id_factory(), question=raw["front"], answer=raw["back"])


def _correct_index(answer: Any, options: Tuple[str, ...]) -> int:
    # Chapter-agent output sometimes names the option text instead of its letter.
    if isinstance(answer, str) and len(answer.strip()) > 1 and answer in options:
        return options.index(answer)
    return letter_to_index(answer)


def _quiz_question(raw: Mapping[str, Any], id_factory: IdFactory) -> QuizQuestion:
    answer = raw["correctAnswer"] if "correctAnswer" in raw else raw["correct_answer"]
    options = _options(raw["options"])
    return QuizQuestion(
        id=id_factory(),
        question=raw["question"],
        options=options,
        correct_answer=_correct_index(answer, options),
    )


def normalize_module(raw: Mapping[str, Any], *, id_factory: IdFactory = new_id) -> Module:
    return Module(
        id=id_factory(),
        title=raw["moduleTitle"],
        notes=_notes(raw["notes"]),
        flashcards=[_flashcard(card, id_factory) for card in raw["flashcards"]],
        quiz=[_quiz_question(q, id_factory) for q in raw["quiz"]],
    )


def normalize_ai_course(raw: Mapping[str, Any], *, id_factory: IdFactory = new_id) -> Course:
    return Course(
        title=raw["courseTitle"],
        modules=[normalize_module(module, id_factory=id_factory) for module in raw["modules"]],
    )
