"""High-level API for document parsing."""

import mimetypes
from pathlib import Path
from typing import Optional

from recruit_parser.config import ParserConfig
from recruit_parser.handler import DocumentHandler
from recruit_parser.models import ParsedDocument, UploadedFile


def parse_document(
    file_path: Optional[str] = None,
    file_bytes: Optional[bytes] = None,
    file_name: Optional[str] = None,
    mime_type: Optional[str] = None,
    config: Optional[ParserConfig] = None,
) -> ParsedDocument:
    """Parse a document and extract its text content.

    Accepts either a file path or raw bytes with a file name.

    Args:
        file_path: Path to document file (alternative to file_bytes)
        file_bytes: Raw document bytes (alternative to file_path)
        file_name: Original filename (required if using file_bytes)
        mime_type: Declared MIME type (optional, guessed from the name for paths)
        config: Parser configuration (optional, uses defaults if not provided)

    Returns:
        ParsedDocument with extracted text and metadata

    Raises:
        ValueError: If neither or both of file_path and file_bytes are given,
            or if file_bytes is given without file_name
        FileValidationError: If the file is too large or unsupported
        FormatParseError: If text extraction fails
        ContentQualityError: If the extracted text is too short

    Examples:
        >>> result = parse_document(file_path="resume.pdf")
        >>> print(result.metadata.word_count)

        >>> with open("offer.docx", "rb") as f:
        ...     result = parse_document(file_bytes=f.read(), file_name="offer.docx")
    """
    if file_path and file_bytes is not None:
        raise ValueError("Provide either file_path or file_bytes, not both")

    if not file_path and file_bytes is None:
        raise ValueError("Must provide either file_path or file_bytes")

    if file_path:
        path = Path(file_path)
        if not path.exists():
            raise ValueError(f"File not found: {file_path}")

        file_bytes = path.read_bytes()
        file_name = path.name

        if not mime_type:
            guessed_type, _ = mimetypes.guess_type(str(path))
            mime_type = guessed_type

    if not file_name:
        raise ValueError("file_name is required when using file_bytes")

    upload = UploadedFile(name=file_name, content=file_bytes, type=mime_type or "")
    return DocumentHandler(config=config).parse(upload)
