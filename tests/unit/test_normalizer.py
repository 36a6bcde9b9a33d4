"""Unit tests for the AI-output normalizer."""
import pytest

from agents.course_agent.normalizer import normalize_ai_course, normalize_module


@pytest.mark.unit
class TestNormalizeAICourse:
    def test_maps_course(self, ai_course_document):
        course = normalize_ai_course(ai_course_document)
        assert course.title == "AI Generated Course"
        assert len(course.modules) == 1
        module = course.modules[0]
        assert module.title == "Main Module"
        assert module.notes == "This is a summary of AI concepts."
        assert [(c.question, c.answer) for c in module.flashcards] == [
            ("What is AI?", "Artificial Intelligence"),
            ("Who is Alan Turing?", "Father of AI"),
        ]
        assert module.quiz[0].options == ("Machine Learning", "Cooking", "Sleeping", "Running")
        assert module.quiz[0].correct_answer == 0
        assert module.quiz[1].correct_answer == 1

    def test_option_mapping(self):
        module = normalize_module(
            {
                "moduleTitle": "M",
                "notes": {"summary": "", "keywords": []},
                "flashcards": [],
                "quiz": [{"question": "q", "options": {"A": "x", "B": "y", "C": "z", "D": "w"}, "correctAnswer": "C"}],
            }
        )
        assert module.quiz[0].options == ("x", "y", "z", "w")
        assert module.quiz[0].correct_answer == 2

    def test_options_sorted_by_letter(self):
        module = normalize_module(
            {
                "moduleTitle": "M",
                "notes": {"summary": "s"},
                "flashcards": [],
                "quiz": [{"question": "q", "options": {"C": "z", "A": "x", "D": "w", "B": "y"}, "correctAnswer": "A"}],
            }
        )
        assert module.quiz[0].options == ("x", "y", "z", "w")

    def test_empty_module(self):
        course = normalize_ai_course(
            {
                "courseTitle": "Empty Course",
                "modules": [{"moduleTitle": "Empty", "notes": {"summary": "", "keywords": []}, "flashcards": [], "quiz": []}],
            }
        )
        module = course.modules[0]
        assert module.notes == ""
        assert module.flashcards == ()
        assert module.quiz == ()

    def test_empty_title_copied_verbatim(self):
        assert normalize_ai_course({"courseTitle": "", "modules": []}).title == ""

    def test_agent_variant(self):
        module = normalize_module(
            {
                "moduleTitle": "M",
                "notes": "flat notes",
                "flashcards": [{"front": "Q1", "back": "A1"}],
                "quiz": [{"question": "q", "options": ["o1", "o2"], "correct_answer": "B"}],
            }
        )
        assert module.notes == "flat notes"
        assert (module.flashcards[0].question, module.flashcards[0].answer) == ("Q1", "A1")
        assert module.quiz[0].options == ("o1", "o2")
        assert module.quiz[0].correct_answer == 1

    @pytest.mark.parametrize(
        "answer, expected",
        [("Mitochondria", 1), ("C", 2), ("C) Ribosome", 2)],
    )
    def test_agent_answer_given_as_option_text(self, answer, expected):
        module = normalize_module(
            {
                "moduleTitle": "M",
                "notes": "",
                "flashcards": [],
                "quiz": [{"question": "Powerhouse?", "options": ["Nucleus", "Mitochondria", "Ribosome"], "correct_answer": answer}],
            }
        )
        assert module.quiz[0].correct_answer == expected

    def test_missing_summary_raises(self):
        with pytest.raises(KeyError):
            normalize_module({"moduleTitle": "M", "notes": {"keywords": []}, "flashcards": [], "quiz": []})

    def test_missing_notes_raises(self):
        with pytest.raises(TypeError):
            normalize_module({"moduleTitle": "M", "notes": None, "flashcards": [], "quiz": []})

    def test_fresh_ids(self, ai_course_document, sequential_ids):
        course = normalize_ai_course(ai_course_document, id_factory=sequential_ids)
        ids = [course.modules[0].id] + [c.id for c in course.modules[0].flashcards] + [q.id for q in course.modules[0].quiz]
        assert len(set(ids)) == 5
