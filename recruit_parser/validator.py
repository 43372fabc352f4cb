"""Upload validation performed before any parsing work."""

from typing import Optional

from recruit_parser.config import ParserConfig
from recruit_parser.detector import FileTypeDetector
from recruit_parser.exceptions import FileValidationError, UnsupportedTypeError
from recruit_parser.logger import get_logger
from recruit_parser.models import UploadedFile, ValidationResult

logger = get_logger(__name__)

UNSUPPORTED_TYPE_MESSAGE = "Unsupported file type. Please upload PDF, DOC, DOCX, or TXT files."


class FileValidator:
    """Checks size and type constraints of an upload. Has no side effects.

    The type is accepted when the detector can resolve it from the declared
    MIME type, the extension or the content signature.
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        detector: Optional[FileTypeDetector] = None,
    ) -> None:
        self.config = config or ParserConfig()
        self.detector = detector or FileTypeDetector()

    def validate(self, file: UploadedFile) -> ValidationResult:
        if file.size > self.config.max_file_size_bytes:
            return ValidationResult(
                is_valid=False,
                error=f"File size exceeds {self.config.max_file_size_mb}MB limit",
            )

        try:
            file_type = self.detector.detect(file)
        except UnsupportedTypeError:
            return ValidationResult(is_valid=False, error=UNSUPPORTED_TYPE_MESSAGE)

        if file_type not in self.config.supported_extensions:
            return ValidationResult(is_valid=False, error=UNSUPPORTED_TYPE_MESSAGE)

        return ValidationResult(is_valid=True)

    def validate_or_raise(self, file: UploadedFile) -> None:
        """Raise FileValidationError with the human-readable reason on failure."""
        result = self.validate(file)
        if not result.is_valid:
            logger.warning(
                "Upload rejected by validation",
                extra_data={
                    "file_name": file.name,
                    "file_size_bytes": file.size,
                    "declared_mime_type": file.type,
                    "reason": result.error,
                },
            )
            raise FileValidationError(result.error)
