"""
Course domain model shared by the parser, normalizer and serializer.

Entities are frozen once built; sequence fields are stored as tuples so a built
course cannot change under a caller. Progress tracking lives in the application layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Tuple
from uuid import uuid4

IdFactory = Callable[[], str]


def new_id() -> str:
    """Random, content-independent identifier (UI keys / progress indexing only)."""
    return uuid4().hex[:12]


def letter_to_index(letter: str) -> int:
    """'A' -> 0, 'B' -> 1, ... Only the first character is considered."""
    return ord(letter[0]) - ord("A")


def index_to_letter(index: int) -> str:
    return chr(ord("A") + index)


def _freeze(instance: object, *names: str) -> None:
    # Accept any iterable at construction time, store a tuple.
    for name in names:
        object.__setattr__(instance, name, tuple(getattr(instance, name)))


@dataclass(frozen=True)
class Flashcard:
    id: str
    question: str
    answer: str


@dataclass(frozen=True)
class QuizQuestion:
    """Multiple-choice item. Options are positional: A=0, B=1, ..."""
    id: str
    question: str
    options: Tuple[str, ...]
    correct_answer: int

    def __post_init__(self) -> None:
        _freeze(self, "options")


@dataclass(frozen=True)
class Module:
    id: str
    title: str
    notes: str = ""
    flashcards: Tuple[Flashcard, ...] = ()
    quiz: Tuple[QuizQuestion, ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, "flashcards", "quiz")


@dataclass(frozen=True)
class Course:
    title: str = ""
    modules: Tuple[Module, ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, "modules")
