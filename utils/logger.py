"""
Logging configuration for the FairGrade application.

This module provides a single configured logger shared by the services and
the web layer, writing to the console and to a rotating file under logs/.
"""

import logging
import os
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setup_logger(name: str, log_file: Optional[str] = None) -> logging.Logger:
    """
    Set up a logger with console and rotating file handlers.

    Args:
        name: Name of the logger
        log_file: Optional log file path. If not provided, logs to logs/app.log

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        if log_level not in VALID_LEVELS:
            log_level = "INFO"

        logger.setLevel(getattr(logging, log_level))

        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        console_formatter = logging.Formatter("%(levelname)s - %(message)s")

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

        if log_file is None:
            log_dir = Path(os.getenv("LOG_DIR", "logs"))
            log_dir.mkdir(exist_ok=True)
            log_file = log_dir / "app.log"

        file_handler = RotatingFileHandler(
            str(log_file),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            delay=True,
            encoding="utf-8",
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

        logger.propagate = False

    return logger


class Logger:
    """Application logger with operation counters."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if getattr(self, "_initialized", False):
            return

        self.logger = setup_logger("fairgrade", None)

        self.metrics = {
            "start_time": datetime.now(),
            "api_calls": 0,
            "grading_operations": 0,
            "ocr_operations": 0,
            "errors": 0,
            "warnings": 0,
        }

        self._initialized = True

    def debug(self, message: str, *args, **kwargs) -> None:
        self.logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs) -> None:
        self.logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        self.log_metric("warnings")
        self.logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        self.log_metric("errors")
        self.logger.error(message, *args, **kwargs)

    def critical(self, message: str, *args, **kwargs) -> None:
        self.log_metric("errors")
        self.logger.critical(message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs) -> None:
        self.log_metric("errors")
        self.logger.exception(message, *args, **kwargs)

    def log_metric(self, metric_name: str, value: Any = 1) -> None:
        """Increment a counter."""
        if metric_name in self.metrics and isinstance(self.metrics[metric_name], int):
            self.metrics[metric_name] += value

    def get_counters(self) -> Dict[str, int]:
        """Operation counters, without the start time."""
        return {k: v for k, v in self.metrics.items() if isinstance(v, int)}

    def log_api_call(
        self, endpoint: str, method: str, status_code: int, duration: float
    ) -> None:
        """Log API call details.

        Args:
            endpoint: API endpoint (without credentials)
            method: HTTP method
            status_code: Response status code
            duration: Call duration in seconds
        """
        self.log_metric("api_calls")
        self.logger.info(
            f"API Call: {method} {endpoint} - Status: {status_code} - Duration: {duration:.2f}s"
        )

    def log_ocr_operation(self, source: str, success: bool = True) -> None:
        """Log OCR operation details.

        Args:
            source: Name of the processed image
            success: Whether OCR was successful
        """
        self.log_metric("ocr_operations")
        if success:
            self.logger.info(f"OCR successful on {source}")
        else:
            self.log_metric("errors")
            self.logger.error(f"OCR failed on {source}")

    def log_grading_operation(self, student: str, score: int) -> None:
        """Log a finished per-student grading."""
        self.log_metric("grading_operations")
        self.logger.info(f"Graded {student}: {score}%")


logger = Logger()
