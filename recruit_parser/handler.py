"""Document handler orchestration."""

from typing import Optional

from recruit_parser.aggregator import aggregate
from recruit_parser.config import ParserConfig
from recruit_parser.detector import FileTypeDetector
from recruit_parser.exceptions import (
    ContentQualityError,
    DocumentParserError,
    FormatParseError,
)
from recruit_parser.loaders import DocxLoader, LegacyDocLoader, TextLoader
from recruit_parser.logger import Timer, get_logger
from recruit_parser.models import LoadResult, ParsedDocument, UploadedFile
from recruit_parser.pdf_fallback import PDFFallbackController
from recruit_parser.quality import has_minimum_words
from recruit_parser.validator import FileValidator

logger = get_logger(__name__)

MIN_RESUME_CHARS = 50


class DocumentHandler:
    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        validator: Optional[FileValidator] = None,
        detector: Optional[FileTypeDetector] = None,
        pdf_controller: Optional[PDFFallbackController] = None,
        docx_loader: Optional[DocxLoader] = None,
        doc_loader: Optional[LegacyDocLoader] = None,
        text_loader: Optional[TextLoader] = None,
    ) -> None:
        """Initialize document handler.

        Args:
            config: Parser configuration. If None, uses defaults.
            validator: Upload validator. If None, creates default with config.
            detector: File type detector. If None, creates default.
            pdf_controller: PDF fallback controller. If None, creates default with config.
            docx_loader: DOCX loader. If None, creates default.
            doc_loader: Legacy DOC loader. If None, wraps docx_loader.
            text_loader: Plain text loader. If None, creates default.
        """
        self.config = config or ParserConfig()
        self.detector = detector or FileTypeDetector()
        self.validator = validator or FileValidator(self.config, self.detector)
        self.pdf_controller = pdf_controller or PDFFallbackController(config=self.config)
        self.docx_loader = docx_loader or DocxLoader()
        self.doc_loader = doc_loader or LegacyDocLoader(
            self.docx_loader, min_chars=self.config.min_doc_text_chars
        )
        self.text_loader = text_loader or TextLoader()

    def parse(self, file: UploadedFile) -> ParsedDocument:
        """Validate, extract and aggregate the text of an upload.

        Args:
            file: Uploaded file with name, size, declared MIME type and content

        Returns:
            ParsedDocument with cleaned text and metadata

        Raises:
            FileValidationError: If the file is too large or of an unsupported type
            FormatParseError: If the loader for the detected type fails
            ContentQualityError: If the extracted text has too few words
        """
        self.validator.validate_or_raise(file)
        file_type = self.detector.detect(file)

        with Timer("extraction") as extract_timer:
            try:
                result = self._load(file_type, file)
            except Exception as exc:
                logger.error(
                    "Document extraction failed",
                    extra_data={
                        "file_name": file.name,
                        "file_type": file_type,
                        "error_type": type(exc).__name__,
                        "error": str(exc),
                        "extraction_time_ms": extract_timer.get_elapsed_ms(),
                    },
                )
                raise FormatParseError(
                    f"Failed to parse {file_type} file: {exc}", file_type=file_type
                ) from exc

        document = aggregate(
            result.fragments,
            file_type=file_type,
            file_name=file.name,
            file_size=file.size,
            pages=result.pages,
        )

        if not has_minimum_words(document.text, self.config.min_alpha_words):
            logger.warning(
                "Parsed document has too little text",
                extra_data={
                    "file_name": file.name,
                    "file_type": file_type,
                    "word_count": document.metadata.word_count,
                },
            )
            raise ContentQualityError(
                f"The {file_type} file contains too little readable text"
            )

        logger.info(
            "Document parsed",
            extra_data={
                "file_name": file.name,
                "file_type": file_type,
                "pages": document.metadata.pages,
                "word_count": document.metadata.word_count,
                "extraction_time_ms": extract_timer.get_elapsed_ms(),
            },
        )
        return document

    def parse_resume(self, file: UploadedFile) -> str:
        """Parse a resume upload and return its text.

        Raises:
            DocumentParserError: On validation, parsing or content failures
        """
        document = self.parse(file)

        if len(document.text) < MIN_RESUME_CHARS:
            raise ContentQualityError(
                "The uploaded file appears to be empty or contains insufficient text content."
            )
        if document.metadata.word_count < self.config.min_alpha_words:
            raise ContentQualityError(
                "The resume appears to have very little content. "
                "Please ensure the file is readable."
            )
        return document.text

    def _load(self, file_type: str, file: UploadedFile) -> LoadResult:
        if file_type == "pdf":
            return self.pdf_controller.run(file.content, file.name)
        if file_type == "docx":
            return self.docx_loader.load(file.content, file.name)
        if file_type == "doc":
            return self.doc_loader.load(file.content, file.name)
        if file_type == "txt":
            return self.text_loader.load(file.content, file.name)
        raise DocumentParserError(f"No loader registered for {file_type}")
