"""Grading pipeline: one AI call per (student file, rubric criterion) pair.

Files are graded one after another. For each file the criteria are graded
concurrently and the per-criterion scores are combined into a weighted
percentage. A failed criterion never fails the file: it receives a fallback
score of 70% of its maximum and a note asking for manual review.
"""

import math
import os
import re
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

from src.constants import FEEDBACK_BANDS, FEEDBACK_LOWEST
from src.exceptions import ValidationError
from src.models.grading_models import (
    CriterionResult,
    GradingResult,
    StudentFile,
    round_half_up,
)
from src.parsing.parse_rubric import describe_subject, parse_rubric
from src.services.llm_service import AIClient
from src.services.ocr_service import OCRService, ocr_service
from utils.logger import logger

SCORE_PATTERN = re.compile(r"SCORE:\s*(\d+)", re.IGNORECASE)
EXTENSION_PATTERN = re.compile(r"\.[^/.]+$")

STUDENT_FILE_EXTENSIONS = ("jpg", "jpeg", "png")
RUBRIC_FILE_EXTENSIONS = ("jpg", "jpeg", "png", "pdf", "docx", "txt")
MAX_STUDENT_FILES = 30


def _extension(filename: str) -> str:
    return os.path.splitext(filename)[1].lower().lstrip(".")


class GradingError(Exception):
    """Raised when an AI response cannot be turned into a score."""


def build_criterion_prompt(
    criterion_name: str,
    max_score: int,
    subject: str,
    answer_text: Optional[str] = None,
) -> str:
    """Build the grading instruction for one criterion."""
    subject_label = f"{subject} " if subject else ""
    if answer_text is None:
        answer_block = "The student's answer is provided in the attached file."
    else:
        answer_block = f"ANSWER:\n{answer_text}"

    return f"""You are an expert {subject_label}grader. Please evaluate the following exam answer based on the criterion: {criterion_name}

There is no problem when handwriting is unclear, just do your best to grade the answer.
Do not write "*", "**", or any other symbols in your response.
Feedback should be in bullet points (short sentences).

{answer_block}

Please provide a detailed evaluation in the following format:
SCORE: [number between 0 and {max_score}]

STRENGTHS: [List key strengths]
WEAKNESSES: [List key weaknesses]
DETAILED ANALYSIS: [Analyse the {subject_label}exam performance on this criterion]
SUGGESTIONS:
Immediate Improvements: [List specific, actionable improvements]
Long-term Development: [List broader development areas]

Return a score between 0 and {max_score}.
"""


def extract_score(response_text: str, max_score: int) -> int:
    """Read the ``SCORE: <n>`` line of an AI response.

    Raises:
        GradingError: If no score is present or it lies outside [0, max_score]
    """
    match = SCORE_PATTERN.search(response_text)
    if not match:
        logger.error(f"Could not find score in AI response: {response_text[:200]}")
        raise GradingError("AI response did not contain a valid score")

    score = int(match.group(1))
    if score < 0 or score > max_score:
        logger.error(f"Invalid score in AI response: {score} (max {max_score})")
        raise GradingError("AI response contained an invalid score")
    return score


def overall_feedback(total_score: int) -> str:
    for threshold, message in FEEDBACK_BANDS:
        if total_score >= threshold:
            return message
    return FEEDBACK_LOWEST


def student_name(filename: str) -> str:
    """Filename without its last extension."""
    return EXTENSION_PATTERN.sub("", filename)


def weighted_total(criteria_results: Sequence[CriterionResult]) -> int:
    """Sum of scores over sum of maxima as a rounded percentage."""
    max_total = sum(c.max_score for c in criteria_results)
    if max_total == 0:
        return 0
    return round_half_up(sum(c.score for c in criteria_results) / max_total * 100)


def validate_grading_request(
    subject: Optional[str],
    student_files: Sequence[StudentFile],
    rubric_filename: Optional[str],
    use_template: bool,
    max_files: int = MAX_STUDENT_FILES,
    student_extensions: Sequence[str] = STUDENT_FILE_EXTENSIONS,
    rubric_extensions: Sequence[str] = RUBRIC_FILE_EXTENSIONS,
) -> None:
    """Check a grading submission before any work is started.

    Checks run in the order the form presents them; the first failure wins.

    Raises:
        ValidationError: carrying the notification title and description
    """
    if not subject:
        raise ValidationError(
            "Please select a subject for grading",
            title="Subject required",
            field="subject",
        )

    if len(student_files) == 0:
        raise ValidationError(
            "Please upload at least one student answer file",
            title="Student files required",
            field="student_files",
        )

    if len(student_files) > max_files:
        raise ValidationError(
            f"Please upload at most {max_files} student answer files",
            title="Too many files",
            field="student_files",
        )

    for student_file in student_files:
        if _extension(student_file.filename) not in student_extensions:
            raise ValidationError(
                f"{student_file.filename} is not a JPG or PNG image",
                title="Unsupported file",
                field="student_files",
            )

    if use_template:
        return

    if not rubric_filename:
        raise ValidationError(
            "Please either upload a rubric or use a template",
            title="Rubric required",
            field="rubric",
        )

    if _extension(rubric_filename) not in rubric_extensions:
        raise ValidationError(
            f"{rubric_filename} is not a supported rubric format",
            title="Unsupported rubric file",
            field="rubric_file",
        )


class GradingService:
    """Grades student answer files against a rubric."""

    def __init__(
        self,
        ai_client: Optional[AIClient] = None,
        ocr: Optional[OCRService] = None,
        use_ocr: bool = False,
        fallback_ratio: float = 0.7,
    ):
        self.ai_client = ai_client or AIClient()
        self.ocr = ocr or ocr_service
        self.use_ocr = use_ocr
        self.fallback_ratio = fallback_ratio

    def fallback_score(self, max_score: int) -> int:
        return math.floor(max_score * self.fallback_ratio)

    def grade_criterion(
        self,
        answer: StudentFile,
        criterion_name: str,
        max_score: int,
        subject: str,
        answer_text: Optional[str] = None,
    ) -> Tuple[int, str]:
        """Grade one answer on one criterion.

        Returns:
            Tuple of (score, feedback). On any failure the fallback score and an
            explanatory message are returned instead of raising.
        """
        try:
            if answer_text is not None:
                prompt = build_criterion_prompt(
                    criterion_name, max_score, subject, answer_text
                )
                response = self.ai_client.call_ai_api(prompt)
            else:
                prompt = build_criterion_prompt(criterion_name, max_score, subject)
                response = self.ai_client.call_ai_api_with_file(
                    answer.content, answer.mime_type, prompt
                )

            return extract_score(response, max_score), response

        except Exception as e:
            logger.error(
                f"AI grading error for {answer.filename} / {criterion_name}: {e}"
            )
            return (
                self.fallback_score(max_score),
                f"Unable to perform AI grading: {e}. Please review manually.",
            )

    def _answer_text(self, answer: StudentFile) -> Optional[str]:
        """OCR the answer when OCR mode is on; None means send the file itself."""
        if not self.use_ocr:
            return None
        return self.ocr.process_image(answer.content, source=answer.filename)

    def grade_file(
        self, answer: StudentFile, criteria, subject: str
    ) -> GradingResult:
        """Grade every criterion of one file concurrently and aggregate."""
        answer_text = None
        try:
            answer_text = self._answer_text(answer)
        except Exception as e:
            logger.warning(
                f"OCR failed for {answer.filename}, sending the image instead: {e}"
            )

        def grade(criterion) -> CriterionResult:
            score, feedback = self.grade_criterion(
                answer, criterion.name, criterion.weight, subject, answer_text
            )
            return CriterionResult(
                name=criterion.name,
                score=score,
                max_score=criterion.weight,
                feedback=feedback,
            )

        with ThreadPoolExecutor(max_workers=max(len(criteria), 1)) as executor:
            criteria_results = list(executor.map(grade, criteria))

        total_score = weighted_total(criteria_results)
        result = GradingResult(
            id=GradingResult.new_id(),
            name=student_name(answer.filename),
            score=total_score,
            feedback=overall_feedback(total_score),
            criteria=criteria_results,
        )
        logger.log_grading_operation(result.name, total_score)
        return result

    def process_student_answers(
        self,
        student_files: Sequence[StudentFile],
        rubric_text: str,
        subject: str = "",
    ) -> List[GradingResult]:
        """Grade each student file against the rubric.

        Args:
            student_files: Uploaded answers, graded in the given order
            rubric_text: Rubric lines in ``<name> (<weight>%)`` form
            subject: Subject id or name used in the prompt

        Returns:
            List[GradingResult]: One result per file

        Raises:
            ValidationError: If the rubric contains no criteria
        """
        criteria = parse_rubric(rubric_text)
        if not criteria:
            raise ValidationError(
                "No criteria found in the rubric. Write each criterion as "
                "'Name (weight%)' on its own line.",
                title="Empty rubric",
                field="rubric",
            )

        subject_label = describe_subject(subject) if subject else ""
        logger.info(
            f"Grading {len(student_files)} file(s) on {len(criteria)} criteria"
        )

        results = []
        for student_file in student_files:
            results.append(self.grade_file(student_file, criteria, subject_label))
        return results
