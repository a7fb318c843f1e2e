"""Tests for rubric parsing and the template rubrics."""

import pytest

from src.constants import SUBJECTS, TEMPLATE_RUBRICS
from src.exceptions import ValidationError
from src.models.grading_models import Criterion
from src.parsing.parse_rubric import describe_subject, get_template_rubric, parse_rubric


class TestParseRubric:
    """Test cases for parse_rubric."""

    def test_parses_criteria_in_order(self):
        text = "Thesis and Argument (30%)\nGrammar and Mechanics (20%)"

        criteria = parse_rubric(text)

        assert criteria == [
            Criterion(name="Thesis and Argument", weight=30),
            Criterion(name="Grammar and Mechanics", weight=20),
        ]

    def test_ignores_lines_without_weight(self):
        text = "Essay rubric\n\nClarity (40%)\nTotal: 100 points\nStructure (60%)"

        criteria = parse_rubric(text)

        assert [c.name for c in criteria] == ["Clarity", "Structure"]

    def test_weights_are_not_normalised(self):
        criteria = parse_rubric("Accuracy (50%)\nSpeed (70%)")

        assert [c.weight for c in criteria] == [50, 70]

    def test_name_may_contain_parentheses(self):
        criteria = parse_rubric("Accuracy (units included) (20%)")

        assert criteria == [Criterion(name="Accuracy (units included)", weight=20)]

    def test_handles_missing_space_and_windows_line_endings(self):
        criteria = parse_rubric("Clarity(40%)\r\nStructure (60%)\r\n")

        assert criteria == [
            Criterion(name="Clarity", weight=40),
            Criterion(name="Structure", weight=60),
        ]

    def test_empty_text_has_no_criteria(self):
        assert parse_rubric("") == []
        assert parse_rubric("No weights here\nat all") == []


class TestTemplateRubrics:
    """Test cases for the built-in rubrics."""

    @pytest.mark.parametrize("subject", [value for value, _ in SUBJECTS])
    def test_every_subject_has_a_parsable_template(self, subject):
        criteria = parse_rubric(get_template_rubric(subject))

        assert len(criteria) == 4
        assert sum(c.weight for c in criteria) == 100

    def test_unknown_subject_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            get_template_rubric("astrology")

        assert exc_info.value.title == "Unknown subject"

    def test_templates_cover_exactly_the_offered_subjects(self):
        assert set(TEMPLATE_RUBRICS) == {value for value, _ in SUBJECTS}

    def test_describe_subject(self):
        assert describe_subject("math") == "Mathematics"
        assert describe_subject("Latin") == "Latin"
