"""
Grammars for the content of `### flashcards` and `### quiz` sections.

Both parsers are lenient: incomplete entries are dropped (and logged at DEBUG),
never raised. Partial AI output should still yield a partially useful course.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

from agents.course_agent.models import Flashcard, IdFactory, QuizQuestion, letter_to_index, new_id

logger = logging.getLogger(__name__)

OPTION_PATTERN = re.compile(r"^[A-D]\)")


def _join(current: str, extra: str) -> str:
    return f"{current} {extra}" if current else extra


def parse_flashcards(lines: Iterable[str], *, id_factory: IdFactory = new_id) -> List[Flashcard]:
    """
    Q:/A: pairs. Unmarked lines continue the question until an answer starts,
    then continue the answer.
    """
    cards: List[Flashcard] = []
    question: Optional[str] = None
    answer: Optional[str] = None

    def emit() -> None:
        if question and answer:
            cards.append(Flashcard(id=id_factory(), question=question.strip(), answer=answer.strip()))
        elif question is not None:
            logger.debug("dropping flashcard without answer question=%r", question)

    for line in lines:
        if line.startswith("Q:"):
            emit()
            question = line[2:].strip()
            answer = None
        elif line.startswith("A:"):
            if question is None:
                continue
            answer = line[2:].strip()
        elif question is None:
            continue
        elif answer is None:
            question = _join(question, line.strip())
        else:
            answer = _join(answer, line.strip())

    emit()
    return cards


def parse_quiz(lines: Iterable[str], *, id_factory: IdFactory = new_id) -> List[QuizQuestion]:
    """
    Q: question, positional `A)`..`D)` options, `CORRECT: <letter>`.

    A question is kept only with text, at least one option and a correct index.
    """
    questions: List[QuizQuestion] = []
    text: Optional[str] = None
    options: List[str] = []
    correct: Optional[int] = None

    def emit() -> None:
        if text and options and correct is not None:
            questions.append(
                QuizQuestion(id=id_factory(), question=text.strip(), options=tuple(options), correct_answer=correct)
            )
        elif text is not None:
            logger.debug(
                "dropping incomplete quiz question question=%r options=%d correct=%s", text, len(options), correct
            )

    for line in lines:
        if line.startswith("Q:"):
            emit()
            text = line[2:].strip()
            options = []
            correct = None
        elif text is None:
            continue
        elif OPTION_PATTERN.match(line):
            # The letter is decorative; position decides the index.
            options.append(line[2:].strip())
        elif line.startswith("CORRECT:"):
            letter = line[len("CORRECT:"):].strip()
            correct = letter_to_index(letter) if letter else None
        elif not options and line.strip():
            text = _join(text, line.strip())

    emit()
    return questions
