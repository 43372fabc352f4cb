"""Data models for recruit parser."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class UploadedFile:
    """An uploaded file as received from the HTTP layer."""

    name: str
    content: bytes
    type: str = ""  # declared MIME type, may be empty
    size: Optional[int] = None

    def __post_init__(self) -> None:
        if self.size is None:
            self.size = len(self.content)

    @property
    def extension(self) -> str:
        if "." not in self.name:
            return ""
        return self.name.rsplit(".", 1)[1].lower()


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class LoadResult:
    """Ordered text fragments produced by a loader."""

    fragments: list[str] = field(default_factory=list)
    pages: Optional[int] = None

    @property
    def text_length(self) -> int:
        return len("".join(self.fragments).strip())


@dataclass(frozen=True)
class DocumentMetadata:
    word_count: int
    file_type: str
    file_name: str
    file_size: int
    pages: Optional[int] = None


@dataclass(frozen=True)
class ParsedDocument:
    """Result of parsing a single document."""

    text: str
    metadata: DocumentMetadata

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable representation with camelCase metadata keys."""
        metadata: dict[str, Any] = {
            "wordCount": self.metadata.word_count,
            "fileType": self.metadata.file_type,
            "fileName": self.metadata.file_name,
            "fileSize": self.metadata.file_size,
        }
        if self.metadata.pages is not None:
            metadata["pages"] = self.metadata.pages
        return {"text": self.text, "metadata": metadata}
