"""
Line classifier for the canonical course text format.

    # <Course Title>[ - <real title>]
    ## <Module Title>[ - <real title>]
    ### notes - <summary text>
    ### flashcards | ### quiz
    <content lines>
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

TITLE_SEPARATOR = " - "


class LineKind(str, Enum):
    TITLE = "title"
    MODULE = "module"
    SECTION = "section"
    CONTENT = "content"
    BLANK = "blank"
    # Lines like "#tag" or "#### x": never content, never structure.
    STRAY_HEADING = "stray_heading"


@dataclass(frozen=True)
class Line:
    kind: LineKind
    text: str = ""
    # Only set for SECTION lines.
    section: Optional[str] = None
    inline_content: Optional[str] = None


def heading_title(payload: str) -> str:
    """
    "Course Title - The Essentials of X" -> "The Essentials of X".

    Keeps the segment after the first separator (and before a second one, if any).
    """
    if TITLE_SEPARATOR in payload:
        return payload.split(TITLE_SEPARATOR)[1]
    return payload


def classify_line(raw: str) -> Line:
    line = raw.strip()
    if not line:
        return Line(LineKind.BLANK)

    if line.startswith("# "):
        return Line(LineKind.TITLE, heading_title(line[2:]))

    if line.startswith("## "):
        return Line(LineKind.MODULE, heading_title(line[3:]))

    if line.startswith("### "):
        payload = line[4:]
        parts = payload.split(TITLE_SEPARATOR)
        if len(parts) >= 2:
            return Line(
                LineKind.SECTION,
                payload,
                section=parts[0].lower(),
                inline_content=TITLE_SEPARATOR.join(parts[1:]),
            )
        return Line(LineKind.SECTION, payload, section=payload.lower())

    # "# " and "## " with an empty title are trimmed down to the bare marker.
    if line == "#":
        return Line(LineKind.TITLE, "")

    if line == "##":
        return Line(LineKind.MODULE, "")

    if line.startswith("#"):
        return Line(LineKind.STRAY_HEADING, line)

    return Line(LineKind.CONTENT, line)


def tokenize(text: str) -> Iterator[Line]:
    """Classify every line of `text`; blank lines are skipped."""
    for raw in text.split("\n"):
        line = classify_line(raw)
        if line.kind is LineKind.BLANK:
            continue
        yield line
