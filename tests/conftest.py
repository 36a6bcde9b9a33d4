"""
Pytest configuration and shared fixtures for the test suite.
Ensures proper Python path and provides common fixtures for unit and integration tests.
"""
import itertools
import sys
from pathlib import Path

import pytest

# Add project root and src to Python path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
src_path = project_root / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


DEMO_COURSE_TEXT = """# Demo
## Mod1
### notes - hello world
### flashcards
Q: 2+2?
A: 4
### quiz
Q: Pick A
A) yes
B) no
CORRECT: A
"""


@pytest.fixture
def demo_course_text() -> str:
    return DEMO_COURSE_TEXT


@pytest.fixture
def sequential_ids():
    """Deterministic id factory: id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def ai_course_document() -> dict:
    return {
        "courseTitle": "AI Generated Course",
        "modules": [
            {
                "moduleTitle": "Main Module",
                "notes": {"summary": "This is a summary of AI concepts.", "keywords": ["AI", "concepts"]},
                "flashcards": [
                    {"question": "What is AI?", "answer": "Artificial Intelligence"},
                    {"question": "Who is Alan Turing?", "answer": "Father of AI"},
                ],
                "quiz": [
                    {
                        "question": "Which of these is an AI concept?",
                        "options": {"A": "Machine Learning", "B": "Cooking", "C": "Sleeping", "D": "Running"},
                        "correctAnswer": "A",
                    },
                    {
                        "question": "What does ML stand for?",
                        "options": {"A": "Mega Laptops", "B": "Machine Learning", "C": "Many Lights", "D": "My Life"},
                        "correctAnswer": "B",
                    },
                ],
            }
        ],
    }
