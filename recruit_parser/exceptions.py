"""Custom exceptions for recruit parser."""


class DocumentParserError(Exception):
    """Base exception for document parsing errors."""

    pass


class FileValidationError(DocumentParserError):
    """Raised when an upload is rejected before parsing (size or type)."""

    pass


class UnsupportedTypeError(FileValidationError):
    """Raised when the document type cannot be resolved to a supported one."""

    pass


class FormatParseError(DocumentParserError):
    """Raised when a loader cannot extract usable text."""

    def __init__(self, message: str, file_type: str = "") -> None:
        super().__init__(message)
        self.file_type = file_type


class ContentQualityError(DocumentParserError):
    """Raised when extracted text fails plausibility checks."""

    pass
