"""
Custom exceptions for feature2docx.

Parsing never raises; these cover rendering, upload validation and configuration.
"""

from typing import Any, Dict, Optional

from feature2docx.utils.helpers import format_megabytes


class Feature2DocxError(Exception):
    """Base exception for all feature2docx errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class NoScenariosError(Feature2DocxError):
    """Extraction produced no scenario records to render"""

    def __init__(self, message: str = "No scenarios found in the feature file."):
        super().__init__(message)


class InvalidFeatureFileError(Feature2DocxError):
    """Uploaded file is not a readable .feature file"""
    pass


class FileTooLargeError(Feature2DocxError):
    """Uploaded file exceeds the configured size limit"""

    def __init__(self, size: int, max_size: int, filename: str = ""):
        message = f"File too large. Maximum size is {format_megabytes(max_size)} MB."
        super().__init__(message, {"size": size, "max_size": max_size, "filename": filename})


class ConfigurationError(Feature2DocxError):
    """Configuration file could not be loaded"""
    pass
