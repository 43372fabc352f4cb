"""Document type resolution."""

from recruit_parser.exceptions import UnsupportedTypeError
from recruit_parser.logger import get_logger
from recruit_parser.models import UploadedFile

logger = get_logger(__name__)


MIME_TYPES: dict[str, str] = {
    "application/pdf": "pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "application/msword": "doc",
    "text/plain": "txt",
}

PDF_SIGNATURE = b"%PDF"
ZIP_SIGNATURE = b"PK\x03\x04"
OLE_SIGNATURE = b"\xd0\xcf\x11\xe0"  # Legacy Office container

SUPPORTED_TYPES = frozenset(MIME_TYPES.values())


class FileTypeDetector:
    """Resolves an upload to one of pdf, docx, doc or txt.

    The declared MIME type wins, then the file extension, then the leading
    signature bytes of the content.
    """

    def detect(self, file: UploadedFile) -> str:
        mime_type = (file.type or "").lower()

        file_type = MIME_TYPES.get(mime_type)
        source = "mime_type"
        if file_type is None and file.extension in SUPPORTED_TYPES:
            file_type = file.extension
            source = "extension"
        if file_type is None:
            file_type = self._sniff_type(file.content)
            source = "signature"

        if file_type is None:
            logger.debug(
                "Unable to resolve document type",
                extra_data={
                    "file_name": file.name,
                    "declared_mime_type": mime_type,
                    "extension": file.extension,
                },
            )
            raise UnsupportedTypeError(f"Unsupported file type: {file.type or file.name}")

        logger.debug(
            "Document type resolved",
            extra_data={
                "file_name": file.name,
                "file_type": file_type,
                "resolved_from": source,
            },
        )
        return file_type

    @staticmethod
    def _sniff_type(file_bytes: bytes) -> str | None:
        """Detect type from file signature/magic bytes."""
        head = file_bytes[:4]
        if head.startswith(PDF_SIGNATURE):
            return "pdf"
        if head.startswith(ZIP_SIGNATURE):
            # DOCX files are ZIP archives
            return "docx"
        if head.startswith(OLE_SIGNATURE):
            return "doc"
        return None
