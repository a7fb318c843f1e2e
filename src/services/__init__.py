"""
Services package for FairGrade.

Contains the OCR engine wrapper, the AI API client, the grading pipeline,
placeholder authentication and the transient results store.
"""
