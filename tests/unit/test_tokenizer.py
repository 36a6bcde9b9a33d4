"""Unit tests for the line classifier."""
import pytest

from agents.course_agent.tokenizer import Line, LineKind, classify_line, heading_title, tokenize


@pytest.mark.unit
class TestHeadingTitle:
    def test_plain_title(self):
        assert heading_title("Just A Title") == "Just A Title"

    def test_takes_text_after_separator(self):
        assert heading_title("Intro - The Real Title") == "The Real Title"

    def test_second_segment_only(self):
        assert heading_title("Course - Part One - Extra") == "Part One"

    def test_hyphen_without_spaces_is_not_a_separator(self):
        assert heading_title("Self-Study Guide") == "Self-Study Guide"


@pytest.mark.unit
class TestClassifyLine:
    def test_blank(self):
        assert classify_line("   ").kind is LineKind.BLANK

    def test_title(self):
        line = classify_line("  # Intro - The Real Title  ")
        assert line.kind is LineKind.TITLE
        assert line.text == "The Real Title"

    def test_module(self):
        line = classify_line("## Module 1 - Basics")
        assert line.kind is LineKind.MODULE
        assert line.text == "Basics"

    def test_section_without_inline_content(self):
        line = classify_line("### Flashcards")
        assert line.kind is LineKind.SECTION
        assert line.section == "flashcards"
        assert line.inline_content is None

    def test_section_with_inline_content(self):
        line = classify_line("### Notes - Variables hold values - and more")
        assert line.section == "notes"
        assert line.inline_content == "Variables hold values - and more"

    def test_content(self):
        line = classify_line("  Q: What is 2+2?  ")
        assert line.kind is LineKind.CONTENT
        assert line.text == "Q: What is 2+2?"

    def test_stray_heading(self):
        assert classify_line("#### deeper").kind is LineKind.STRAY_HEADING
        assert classify_line("#hashtag").kind is LineKind.STRAY_HEADING
        assert classify_line("###").kind is LineKind.STRAY_HEADING

    def test_bare_markers_are_empty_headings(self):
        assert classify_line("# ") == Line(LineKind.TITLE, "")
        assert classify_line("##") == Line(LineKind.MODULE, "")


@pytest.mark.unit
def test_tokenize_skips_blank_lines():
    kinds = [line.kind for line in tokenize("# T\n\n\n## M\n   \ntext\n")]
    assert kinds == [LineKind.TITLE, LineKind.MODULE, LineKind.CONTENT]
