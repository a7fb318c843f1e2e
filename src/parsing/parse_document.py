"""
Document text extraction for uploaded rubrics.

Rubrics may be uploaded as plain text, PDF, Word documents or scanned images.
Text documents are read directly; images are passed through the OCR service.
"""

import io
import mimetypes
from pathlib import Path
from typing import Optional

import fitz  # PyMuPDF
from docx import Document

from src.exceptions import ProcessingError, ValidationError
from src.services.ocr_service import OCRService, ocr_service
from utils.logger import logger

DOCX_MIME_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)


class DocumentParser:
    """Stateless helpers that turn uploaded files into text."""

    @staticmethod
    def get_file_type(filename: str) -> str:
        """
        Determine the MIME type of a file from its name.

        Args:
            filename: Name or path of the file

        Returns:
            str: MIME type of the file (e.g., 'application/pdf', 'image/jpeg')

        Note:
            Falls back to extension-based detection if mimetypes fails to identify the file.
            Returns 'application/octet-stream' if type cannot be determined.
        """
        mime_type, _ = mimetypes.guess_type(filename)
        if mime_type is None:
            ext = Path(filename).suffix.lower()
            if ext == ".pdf":
                return "application/pdf"
            elif ext == ".docx":
                return DOCX_MIME_TYPE
            elif ext in [".jpg", ".jpeg"]:
                return "image/jpeg"
            elif ext == ".png":
                return "image/png"
            elif ext == ".txt":
                return "text/plain"
        return mime_type or "application/octet-stream"

    @staticmethod
    def extract_text_from_txt(content: bytes) -> str:
        text = content.decode("utf-8", errors="replace")
        logger.debug(f"Read {len(text)} characters from text file")
        return text

    @staticmethod
    def extract_text_from_pdf(content: bytes) -> str:
        """Extract the embedded text layer of every page of a PDF."""
        with fitz.open(stream=content, filetype="pdf") as doc:
            text = "\n".join(page.get_text() for page in doc)
        logger.debug(f"Extracted {len(text)} characters from PDF")
        return text

    @staticmethod
    def extract_text_from_docx(content: bytes) -> str:
        doc = Document(io.BytesIO(content))
        text = "\n".join([paragraph.text for paragraph in doc.paragraphs])
        logger.debug(f"Extracted {len(text)} characters from DOCX")
        return text

    @staticmethod
    def extract_text_from_image(
        content: bytes, filename: str, ocr: Optional[OCRService] = None
    ) -> str:
        return (ocr or ocr_service).process_image(content, source=filename)


def extract_rubric_text(
    filename: str, content: bytes, ocr: Optional[OCRService] = None
) -> str:
    """Extract the text of an uploaded rubric file.

    Args:
        filename: Original name of the upload, used to pick the extractor
        content: Raw file bytes
        ocr: OCR service for image rubrics (defaults to the shared one)

    Returns:
        str: Rubric text

    Raises:
        ValidationError: If the file type is not supported
        ProcessingError: If a PDF or Word rubric is corrupt
        OCRServiceError: If an image rubric cannot be recognised
    """
    mime_type = DocumentParser.get_file_type(filename)
    logger.info(f"Extracting rubric text from {filename} ({mime_type})")

    if mime_type == "text/plain":
        return DocumentParser.extract_text_from_txt(content)
    if mime_type in ("image/jpeg", "image/png"):
        return DocumentParser.extract_text_from_image(content, filename, ocr)

    extractors = {
        "application/pdf": DocumentParser.extract_text_from_pdf,
        DOCX_MIME_TYPE: DocumentParser.extract_text_from_docx,
    }
    if mime_type not in extractors:
        raise ValidationError(
            f"Unsupported rubric file type: {mime_type}",
            title="Unsupported rubric file",
            field="rubric_file",
        )

    try:
        return extractors[mime_type](content)
    except Exception as e:
        logger.error(f"Failed to extract text from {filename}: {e}")
        raise ProcessingError(
            f"Could not extract text from {filename}",
            operation="extract_rubric_text",
            user_message=f"{filename} could not be read. Please check the file and try again.",
            original_error=e,
        )
