"""Format-specific text loaders.

Each loader turns raw content into an ordered list of text fragments (one
per page or section). PDF goes through PyMuPDF and needs a filesystem path,
DOCX goes through python-docx, legacy DOC reuses the DOCX loader with a raw
decode fallback and plain text is decoded as UTF-8.
"""

import io
import re
from typing import Optional

import fitz  # PyMuPDF
from docx import Document

from recruit_parser.exceptions import FormatParseError
from recruit_parser.logger import Timer, get_logger
from recruit_parser.models import LoadResult

logger = get_logger(__name__)

# Control characters other than tab/newline, plus the UTF-8 replacement char
_NOISE_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f\ufffd]+")
_SPACES_RE = re.compile(r"\s+")

TEXT_BLOCK = 0


class PDFLoader:
    """Extracts text from a PDF on disk using PyMuPDF."""

    def __init__(self, default_separator: str = "\n") -> None:
        self.default_separator = default_separator

    def load(
        self,
        pdf_path: str,
        split_pages: bool = True,
        separator: Optional[str] = None,
    ) -> LoadResult:
        """Extract text blocks from every page.

        Args:
            pdf_path: Path to the PDF file
            split_pages: One fragment per page when True, a single fragment otherwise
            separator: Joins the text blocks of a page. None uses the default.

        Raises:
            FormatParseError: If the document is encrypted or cannot be opened
        """
        if separator is None:
            separator = self.default_separator

        try:
            pdf_document = fitz.open(pdf_path)
        except Exception as exc:
            raise FormatParseError(f"Unable to open PDF: {exc}", file_type="pdf") from exc

        try:
            if pdf_document.needs_pass:
                raise FormatParseError("PDF is password-protected", file_type="pdf")

            pages = []
            for page in pdf_document:
                blocks = page.get_text("blocks", sort=True)
                pages.append(
                    separator.join(
                        block[4].strip()
                        for block in blocks
                        if block[6] == TEXT_BLOCK and block[4].strip()
                    )
                )
            page_count = len(pdf_document)
        finally:
            pdf_document.close()

        fragments = pages if split_pages else ["\n\n".join(pages)]
        return LoadResult(fragments=fragments, pages=page_count)


class DocxLoader:
    """Extracts paragraphs and tables from OOXML documents using python-docx."""

    def load(self, file_bytes: bytes, file_name: str = "unknown.docx") -> LoadResult:
        try:
            with Timer("docx_extraction") as timer:
                doc = Document(io.BytesIO(file_bytes))

                fragments = [p.text.strip() for p in doc.paragraphs if p.text.strip()]
                table_count = 0
                for table in doc.tables:
                    rows = []
                    for row in table.rows:
                        cells = [cell.text.strip() for cell in row.cells]
                        if any(cells):
                            rows.append(" | ".join(cells))
                    if rows:
                        fragments.append("\n".join(rows))
                        table_count += 1
        except Exception as exc:
            raise FormatParseError(
                f"The file may be corrupted or is not a Word document ({exc})",
                file_type="docx",
            ) from exc

        logger.debug(
            "DOCX extraction completed",
            extra_data={
                "file_name": file_name,
                "fragment_count": len(fragments),
                "table_count": table_count,
                "extraction_time_ms": timer.get_elapsed_ms(),
            },
        )
        return LoadResult(fragments=fragments)


class LegacyDocLoader:
    """Loads .doc uploads.

    Many .doc uploads are OOXML files with the old extension, so the DOCX
    loader is tried first. Otherwise the bytes are decoded as UTF-8 and kept
    only if enough readable text survives.
    """

    def __init__(
        self,
        docx_loader: Optional[DocxLoader] = None,
        min_chars: int = 10,
        min_letter_ratio: float = 0.5,
    ) -> None:
        self.docx_loader = docx_loader or DocxLoader()
        self.min_chars = min_chars
        self.min_letter_ratio = min_letter_ratio

    def load(self, file_bytes: bytes, file_name: str = "unknown.doc") -> LoadResult:
        try:
            return self.docx_loader.load(file_bytes, file_name)
        except FormatParseError as exc:
            logger.info(
                "DOC is not OOXML compatible, falling back to raw decoding",
                extra_data={"file_name": file_name, "error": str(exc)},
            )

        return LoadResult(fragments=[self.decode_raw(file_bytes, file_name)])

    def decode_raw(self, file_bytes: bytes, file_name: str = "unknown.doc") -> str:
        """Decode bytes as UTF-8, dropping control and undecodable characters."""
        decoded = file_bytes.decode("utf-8", errors="replace")
        text = _SPACES_RE.sub(" ", _NOISE_RE.sub(" ", decoded)).strip()

        letters = sum(1 for ch in text if ch.isalpha() or ch == " ")
        ratio = letters / len(text) if text else 0.0

        logger.debug(
            "Raw DOC decode completed",
            extra_data={
                "file_name": file_name,
                "characters_decoded": len(text),
                "letter_ratio": round(ratio, 2),
            },
        )

        if len(text) < self.min_chars or ratio < self.min_letter_ratio:
            raise FormatParseError(
                "Legacy Word document could not be read. Please save it as DOCX or PDF.",
                file_type="doc",
            )
        return text


class TextLoader:
    """Decodes plain text uploads as UTF-8."""

    def load(self, file_bytes: bytes, file_name: str = "unknown.txt") -> LoadResult:
        try:
            text = file_bytes.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            logger.error(
                "Failed to decode plain text file as UTF-8",
                extra_data={"file_name": file_name, "file_size_bytes": len(file_bytes)},
            )
            raise FormatParseError(
                "The file encoding is not supported (expected UTF-8)",
                file_type="txt",
            ) from exc
        return LoadResult(fragments=[text])
