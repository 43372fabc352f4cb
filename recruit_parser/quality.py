"""Plausibility checks for extracted text."""

import re

from recruit_parser.exceptions import ContentQualityError

_ALLOWED_CHARS_RE = re.compile(r"[^a-zA-Z0-9\s.,;:!?\-()\[\]{}\"']")
_MEANINGFUL_WORD_RE = re.compile(r"\b[a-zA-Z]{3,}\b")
_ALPHA_RUN_RE = re.compile(r"[^\W\d_]+")
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

MAX_SPECIAL_CHAR_RATIO = 0.3
MIN_MEANINGFUL_WORDS = 10


def count_alpha_words(text: str) -> int:
    """Count runs of letters, in any script."""
    return len(_ALPHA_RUN_RE.findall(text))


def has_minimum_words(text: str, minimum: int) -> bool:
    return bool(text.strip()) and count_alpha_words(text) >= minimum


def validate_and_clean_content(content: str) -> str:
    """Reject garbled or near-empty text and return it whitespace-normalized.

    Raises:
        ContentQualityError: If the content is empty, malformed or too short
    """
    if not content or not content.strip():
        raise ContentQualityError("No content extracted")

    special_ratio = len(_ALLOWED_CHARS_RE.findall(content)) / len(content)
    if special_ratio > MAX_SPECIAL_CHAR_RATIO:
        raise ContentQualityError("Content appears to be malformed or corrupted")

    if len(_MEANINGFUL_WORD_RE.findall(content)) < MIN_MEANINGFUL_WORDS:
        raise ContentQualityError(
            "Extracted content is too short or contains insufficient text"
        )

    return _CONTROL_RE.sub("", re.sub(r"\s+", " ", content)).strip()
