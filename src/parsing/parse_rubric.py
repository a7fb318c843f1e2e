"""Rubric parsing.

A rubric is free text with one criterion per line written as
``<name> (<weight>%)``, for example::

    Thesis and Argument (30%)
    Grammar and Mechanics (20%)

Lines that do not carry a percentage are ignored. Weights are taken as given;
they are not required to add up to 100.
"""

import re
from typing import List

from src.constants import SUBJECT_NAMES, TEMPLATE_RUBRICS
from src.exceptions import ValidationError
from src.models.grading_models import Criterion

CRITERION_PATTERN = re.compile(r"(.*?)\s*\((\d+)%\)")


def parse_rubric(rubric_text: str) -> List[Criterion]:
    """Parse rubric text into weighted criteria, in rubric order."""
    criteria = []
    for line in rubric_text.split("\n"):
        match = CRITERION_PATTERN.search(line)
        if match:
            criteria.append(
                Criterion(name=match.group(1).strip(), weight=int(match.group(2)))
            )
    return criteria


def get_template_rubric(subject: str) -> str:
    """Return the built-in rubric text for a subject id."""
    try:
        return TEMPLATE_RUBRICS[subject]
    except KeyError:
        raise ValidationError(
            f"No template rubric for subject '{subject}'",
            title="Unknown subject",
            field="subject",
        )


def describe_subject(subject: str) -> str:
    return SUBJECT_NAMES.get(subject, subject)
