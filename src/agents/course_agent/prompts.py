"""
Prompts for course generation (chunk reconciliation and the chapter agent).
The JSON contract here is exactly what `normalize_ai_course` consumes.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

JSON_RULES = """Your output MUST be a single, complete, and valid JSON object.
- No introductory or concluding text, no markdown code fences.
- Close every object and array; escape double quotes inside string values.
- Do not truncate the response."""

COURSE_JSON_SHAPE = """{
  "courseTitle": "Example Course Title",
  "modules": [
    {
      "moduleTitle": "Module 1: Introduction",
      "notes": {"summary": "200-300 word summary of the module.", "keywords": ["keyword1", "keyword2"]},
      "flashcards": [{"question": "What is a flashcard?", "answer": "A question/answer study pair."}],
      "quiz": [
        {
          "question": "Which of the following is true?",
          "options": {"A": "Option A", "B": "Option B", "C": "Option C", "D": "Option D"},
          "correctAnswer": "A"
        }
      ]
    }
  ]
}"""

GENERATION_PROMPT = f"""You are an expert instructional designer. Analyze the provided document and synthesize it into learning materials: modules with a notes summary and keywords, 3-8 flashcards and 4-6 multiple-choice quiz questions each.

{JSON_RULES}

Quiz options must use exactly the keys "A", "B", "C", "D"; correctAnswer is one of those letters.

JSON structure:
{COURSE_JSON_SHAPE}
"""

CONTINUATION_INSTRUCTION = (
    "Continue generating course content based on the following new text, and integrate it into "
    "the provided JSON structure. Only output the complete, updated JSON object."
)

VERIFICATION_PROMPT = f"""You are a JSON syntax validator and corrector. Fix any syntax errors, missing brackets, stray commas or unescaped quotes in the following text so that it is one valid JSON object. If it is already valid, return it unchanged.

{JSON_RULES}

Here is the JSON to validate and correct:
"""

FACT_CHECK_PROMPT = f"""You are an expert fact-checker. Review the following course content for factual accuracy, clarity and completeness, and correct it where needed. Keep the JSON structure unchanged.

{JSON_RULES}

Here is the course content (JSON) to fact-check:
"""


def build_first_chunk_prompt(chunk: str) -> str:
    return f"{GENERATION_PROMPT}\n\n{chunk}"


def build_continuation_prompt(accumulated: Mapping[str, Any], chunk: str) -> str:
    return (
        f"{JSON_RULES}\n\n"
        f"{json.dumps(accumulated, indent=2, ensure_ascii=False)}\n\n"
        f"{CONTINUATION_INSTRUCTION}\n\n"
        f"{chunk}"
    )


# Chapter agent: outline first, then one module request per chapter.

OUTLINE_PROMPT = f"""You are a course creation agent. Analyze the provided textbook content and identify its chapters, sub-sections and core topics.

{JSON_RULES}

The root object has a "courseTitle" (string) and a "modules" array. Each module represents a chapter and has a "title" (string) and the chapter's "content" (string). If you cannot identify any chapters, return an empty "modules" array.
"""

MODULE_PROMPT = f"""Based on the content for the chapter "{{title}}", generate a complete learning module:
1. notes: detailed, easy-to-understand notes covering the key concepts, as one string.
2. flashcards: up to 20 flashcards, each with a "front" (question) and a "back" (answer).
3. quiz: up to 10 multiple-choice questions, each with a "question", an "options" array of 4 strings and a "correct_answer" letter ("A"-"D") matching the position of the correct option.

{JSON_RULES}

Return {{{{"notes": "...", "flashcards": [...], "quiz": [...]}}}}. Use an empty list for any part the text cannot support.
"""

SUMMARY_SEPARATOR = "\n\n---\n\n"


def build_outline_prompt(text: str) -> str:
    return f"{OUTLINE_PROMPT}\n\n{text}"


def build_module_prompt(title: str, content: str) -> str:
    return f"{MODULE_PROMPT.format(title=title)}\n\n{content}"
