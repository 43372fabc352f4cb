"""Configuration classes for recruit parser."""

from dataclasses import dataclass, field
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

MEGABYTE = 1024 * 1024


@dataclass(frozen=True)
class ParseStrategy:
    """One PDF parsing configuration tried by the fallback controller.

    Strategies carry no identity beyond their name and only live for the
    duration of a single parse call.
    """

    name: str
    split_pages: bool = True
    separator: Optional[str] = None
    """Separator between text blocks of a page. None uses the loader default."""


DEFAULT_PDF_STRATEGIES: tuple[ParseStrategy, ...] = (
    ParseStrategy(name="default", split_pages=True, separator=None),
    ParseStrategy(name="no_page_split", split_pages=False, separator=None),
    ParseStrategy(name="empty_separator", split_pages=True, separator=""),
)


@dataclass
class ParserConfig:
    """Configuration for the document parsing pipeline.

    Examples:
        >>> # Defaults: 10MB ceiling, 30s per PDF attempt
        >>> config = ParserConfig()

        >>> # Tighter limits for the public resume upload form
        >>> config = ParserConfig(max_file_size_bytes=5 * MEGABYTE)
    """

    max_file_size_bytes: int = 10 * MEGABYTE
    """Uploads larger than this are rejected before any loader runs."""

    supported_extensions: tuple[str, ...] = ("pdf", "docx", "doc", "txt")

    pdf_attempt_timeout_seconds: float = 30.0
    """Upper bound for a single PDF strategy attempt."""

    pdf_strategies: tuple[ParseStrategy, ...] = field(
        default_factory=lambda: DEFAULT_PDF_STRATEGIES
    )

    pdf_default_separator: str = "\n"
    """Separator used between text blocks when a strategy leaves it unset."""

    min_pdf_text_chars: int = 10
    """A PDF attempt must yield more than this many characters to succeed."""

    min_doc_text_chars: int = 10
    """Minimum plausible characters the raw .doc decode must produce."""

    min_alpha_words: int = 10
    """Minimum alphabetic words a parsed document must contain."""

    @property
    def max_file_size_mb(self) -> int:
        return self.max_file_size_bytes // MEGABYTE


class ApiSettings(BaseSettings):
    """Environment settings for the HTTP service."""

    log_level: str = "INFO"
    max_file_size_mb: int = 10
    pdf_attempt_timeout_seconds: float = 30.0

    model_config = SettingsConfigDict(
        env_prefix="RECRUIT_PARSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def to_parser_config(self) -> ParserConfig:
        return ParserConfig(
            max_file_size_bytes=self.max_file_size_mb * MEGABYTE,
            pdf_attempt_timeout_seconds=self.pdf_attempt_timeout_seconds,
        )
