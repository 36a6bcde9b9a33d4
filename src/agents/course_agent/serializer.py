from __future__ import annotations

from typing import List

from agents.course_agent.models import Course, Module, index_to_letter


def _module_lines(module: Module) -> List[str]:
    parts = [f"## {module.title}\n\n"]

    # Multi-line notes are emitted as-is; only single-line notes survive a re-parse intact.
    if module.notes:
        parts.append(f"### notes - {module.notes}\n\n")

    if module.flashcards:
        parts.append("### flashcards\n")
        for card in module.flashcards:
            parts.append(f"Q: {card.question}\nA: {card.answer}\n\n")

    if module.quiz:
        parts.append("### quiz\n")
        for question in module.quiz:
            parts.append(f"Q: {question.question}\n")
            for position, option in enumerate(question.options):
                parts.append(f"{index_to_letter(position)}) {option}\n")
            parts.append(f"CORRECT: {index_to_letter(question.correct_answer)}\n\n")

    return parts


def serialize_course(course: Course) -> str:
    """Render a Course in the canonical text form read by `parse_course_text`."""
    parts = [f"# {course.title}\n\n"]
    for module in course.modules:
        parts.extend(_module_lines(module))
    return "".join(parts)
