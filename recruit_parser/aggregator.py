"""Fragment aggregation into a ParsedDocument."""

import re
from typing import Iterable, Optional

from recruit_parser.models import DocumentMetadata, ParsedDocument

FRAGMENT_SEPARATOR = "\n\n"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")
_INLINE_SPACE_RE = re.compile(r"[ \u00a0]+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")


def clean_text(text: str) -> str:
    """Normalize line endings and whitespace while keeping line structure."""
    if not text:
        return ""
    text = text.replace("\r\n", "\n").replace("\r", "\n").replace("\t", " ")
    text = _CONTROL_RE.sub(" ", text)
    text = _INLINE_SPACE_RE.sub(" ", text)
    lines = [line.strip() for line in text.split("\n")]
    return _BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip()


def count_words(text: str) -> int:
    return len(text.split())


def aggregate(
    fragments: Iterable[str],
    file_type: str,
    file_name: str,
    file_size: int,
    pages: Optional[int] = None,
) -> ParsedDocument:
    """Join cleaned, non-empty fragments and compute metadata."""
    cleaned = (clean_text(fragment) for fragment in fragments)
    text = FRAGMENT_SEPARATOR.join(fragment for fragment in cleaned if fragment)
    return ParsedDocument(
        text=text,
        metadata=DocumentMetadata(
            word_count=count_words(text),
            file_type=file_type,
            file_name=file_name,
            file_size=file_size,
            pages=pages,
        ),
    )
