"""OCR service backed by the Tesseract engine.

The engine is initialised once, on first use, and shared by every request in
the process.
"""

import io
import threading
from typing import Optional

import pytesseract
from PIL import Image

from src.config.unified_config import config
from src.services.base_service import BaseService, ServiceStatus
from utils.logger import logger


class OCRServiceError(Exception):
    """Exception raised for errors in the OCR service."""

    def __init__(
        self, message: str, error_code: str = None, original_error: Exception = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.original_error = original_error

    def __str__(self):
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class OCRService(BaseService):
    """Extract text from scanned answer and rubric images."""

    def __init__(self, language: str = "eng"):
        super().__init__("ocr_service")
        self.language = language
        self.engine_version = None
        self._init_lock = threading.Lock()

    def initialize(self) -> bool:
        """Locate the Tesseract binary and load the configured language."""
        try:
            self.engine_version = str(pytesseract.get_tesseract_version())
            languages = pytesseract.get_languages(config="")
        except (pytesseract.TesseractNotFoundError, OSError) as e:
            logger.error(f"Tesseract is not available: {e}")
            self.metrics.status = ServiceStatus.UNHEALTHY
            return False

        if self.language not in languages:
            logger.error(f"Tesseract language '{self.language}' is not installed")
            self.metrics.status = ServiceStatus.UNHEALTHY
            return False

        logger.info(
            f"OCR engine ready (tesseract {self.engine_version}, lang={self.language})"
        )
        self.metrics.status = ServiceStatus.HEALTHY
        self._initialized = True
        return True

    def initialize_ocr(self) -> None:
        """Initialise the engine once; raise if it cannot be used."""
        if self._initialized:
            return
        with self._init_lock:
            if not self._initialized and not self.initialize():
                raise OCRServiceError(
                    "OCR engine is not available", error_code="OCR_UNAVAILABLE"
                )

    def health_check(self) -> bool:
        if self._initialized:
            return True
        try:
            self.initialize_ocr()
        except OCRServiceError:
            return False
        return True

    def process_image(self, content: bytes, source: Optional[str] = None) -> str:
        """Recognise the text in an image.

        Args:
            content: Raw image bytes (JPEG, PNG, ...)
            source: Name used in log messages

        Returns:
            str: The recognised text

        Raises:
            OCRServiceError: If the image cannot be read or recognition fails
        """
        self.initialize_ocr()
        source = source or "image"

        with self.track_request("process_image"):
            try:
                with Image.open(io.BytesIO(content)) as image:
                    text = pytesseract.image_to_string(image, lang=self.language)
            except (OSError, pytesseract.TesseractError) as e:
                logger.log_ocr_operation(source, success=False)
                raise OCRServiceError(
                    f"Failed to extract text from {source}: {e}",
                    error_code="OCR_FAILED",
                    original_error=e,
                )

        logger.log_ocr_operation(source)
        return text


ocr_service = OCRService(language=config.grading.ocr_language)
