"""
Course structure parser: classified lines -> Course.

States are NoModule and InModule(section). The open section is an explicit
variant (None | notes | flashcards | quiz) carrying its buffered lines; the only
way out of a section is `finalize()`, which hands the buffer to the matching
sub-parser.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from agents.course_agent.models import Course, Flashcard, IdFactory, Module, QuizQuestion, new_id
from agents.course_agent.sections import parse_flashcards, parse_quiz
from agents.course_agent.tokenizer import LineKind, tokenize

logger = logging.getLogger(__name__)


class SectionKind(str, Enum):
    NOTES = "notes"
    FLASHCARDS = "flashcards"
    QUIZ = "quiz"

    @classmethod
    def from_name(cls, name: Optional[str]) -> Optional["SectionKind"]:
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass
class OpenSection:
    kind: SectionKind
    buffer: List[str] = field(default_factory=list)


@dataclass
class ModuleDraft:
    """Mutable module record used only while its lines are being consumed."""
    id: str
    title: str
    notes: str = ""
    flashcards: List[Flashcard] = field(default_factory=list)
    quiz: List[QuizQuestion] = field(default_factory=list)
    section: Optional[OpenSection] = None

    def open(self, kind: Optional[SectionKind], inline: Optional[str], *, id_factory: IdFactory) -> None:
        self.finalize(id_factory=id_factory)
        if kind is None:
            return
        self.section = OpenSection(kind, [inline] if inline is not None else [])

    def finalize(self, *, id_factory: IdFactory) -> None:
        """Close the open section. Empty buffers leave the module untouched."""
        section, self.section = self.section, None
        if section is None or not section.buffer:
            return
        if section.kind is SectionKind.NOTES:
            self.notes = "\n".join(section.buffer).strip()
        elif section.kind is SectionKind.FLASHCARDS:
            self.flashcards = parse_flashcards(section.buffer, id_factory=id_factory)
        elif section.kind is SectionKind.QUIZ:
            self.quiz = parse_quiz(section.buffer, id_factory=id_factory)

    def build(self, *, id_factory: IdFactory) -> Module:
        self.finalize(id_factory=id_factory)
        return Module(
            id=self.id,
            title=self.title,
            notes=self.notes,
            flashcards=tuple(self.flashcards),
            quiz=tuple(self.quiz),
        )


def parse_course_text(text: str, *, id_factory: IdFactory = new_id) -> Course:
    """Parse canonical course text. Never raises on malformed content."""
    title = ""
    modules: List[Module] = []
    current: Optional[ModuleDraft] = None

    for line in tokenize(text):
        if line.kind is LineKind.TITLE:
            title = line.text
        elif line.kind is LineKind.MODULE:
            if current is not None:
                modules.append(current.build(id_factory=id_factory))
            current = ModuleDraft(id=id_factory(), title=line.text)
        elif line.kind is LineKind.SECTION:
            if current is None:
                logger.debug("section outside module ignored section=%r", line.section)
                continue
            kind = SectionKind.from_name(line.section)
            if kind is None:
                logger.debug("unknown section %r in module %r", line.section, current.title)
            current.open(kind, line.inline_content, id_factory=id_factory)
        elif line.kind is LineKind.CONTENT:
            if current is not None and current.section is not None:
                current.section.buffer.append(line.text)

    if current is not None:
        modules.append(current.build(id_factory=id_factory))

    return Course(title=title, modules=modules)
