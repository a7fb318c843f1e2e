"""
FairGrade - AI-assisted grading of scanned exam answers.

This package provides functionality for:
- Parsing weighted grading rubrics
- Extracting text from scanned answers and rubrics using OCR
- Scoring answers per criterion through a generative-AI API
"""

__version__ = "0.1.0"
__author__ = "FairGrade Team"
__license__ = "MIT"
