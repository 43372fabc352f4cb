"""Document text extraction for resumes and contract templates."""

from recruit_parser.aggregator import aggregate, clean_text, count_words
from recruit_parser.config import DEFAULT_PDF_STRATEGIES, ParserConfig, ParseStrategy
from recruit_parser.contracts import basic_placeholder_replacement, clean_markdown_from_response
from recruit_parser.detector import FileTypeDetector
from recruit_parser.exceptions import (
    ContentQualityError,
    DocumentParserError,
    FileValidationError,
    FormatParseError,
    UnsupportedTypeError,
)
from recruit_parser.handler import DocumentHandler
from recruit_parser.loaders import DocxLoader, LegacyDocLoader, PDFLoader, TextLoader
from recruit_parser.models import (
    DocumentMetadata,
    LoadResult,
    ParsedDocument,
    UploadedFile,
    ValidationResult,
)
from recruit_parser.parser import parse_document
from recruit_parser.pdf_fallback import PDFFallbackController, attempt_with_timeout
from recruit_parser.validator import FileValidator

__version__ = "0.1.0"

__all__ = [
    # High-level API
    "parse_document",
    # Pipeline components
    "DocumentHandler",
    "FileValidator",
    "FileTypeDetector",
    "PDFFallbackController",
    "attempt_with_timeout",
    "PDFLoader",
    "DocxLoader",
    "LegacyDocLoader",
    "TextLoader",
    "aggregate",
    "clean_text",
    "count_words",
    "basic_placeholder_replacement",
    "clean_markdown_from_response",
    # Data models
    "UploadedFile",
    "ValidationResult",
    "LoadResult",
    "DocumentMetadata",
    "ParsedDocument",
    # Configuration
    "ParserConfig",
    "ParseStrategy",
    "DEFAULT_PDF_STRATEGIES",
    # Exceptions
    "DocumentParserError",
    "FileValidationError",
    "UnsupportedTypeError",
    "FormatParseError",
    "ContentQualityError",
]
