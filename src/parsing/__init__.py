"""
Parsing package for FairGrade.

- parse_rubric: turns rubric text into weighted criteria
- parse_document: extracts rubric text from uploaded files (txt, pdf, docx, images)
"""

from .parse_document import DocumentParser, extract_rubric_text
from .parse_rubric import get_template_rubric, parse_rubric

__all__ = ["DocumentParser", "extract_rubric_text", "get_template_rubric", "parse_rubric"]
