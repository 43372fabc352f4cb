import io
from typing import Callable, Optional

import fitz
import pytest
from docx import Document

from recruit_parser.models import LoadResult

VOCABULARY = (
    "candidate engineer python backend service design review team project "
    "delivery testing cloud platform mentoring roadmap interview recruiter "
    "hiring contract salary"
).split()


def make_words(count: int, offset: int = 0) -> str:
    return " ".join(VOCABULARY[(offset + i) % len(VOCABULARY)] for i in range(count))


def build_pdf(pages: list[str], **save_options) -> bytes:
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        if text:
            rect = fitz.Rect(50, 50, page.rect.width - 50, page.rect.height - 50)
            page.insert_textbox(rect, text, fontsize=10)
    data = doc.tobytes(**save_options)
    doc.close()
    return data


def build_docx(paragraphs: list[str], table: Optional[list[list[str]]] = None) -> bytes:
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    if table:
        grid = doc.add_table(rows=len(table), cols=len(table[0]))
        for r, row in enumerate(table):
            for c, value in enumerate(row):
                grid.cell(r, c).text = value
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def words() -> Callable[..., str]:
    return make_words


@pytest.fixture
def two_page_pdf() -> bytes:
    return build_pdf([make_words(250), make_words(250, offset=7)])


@pytest.fixture
def blank_pdf() -> bytes:
    return build_pdf(["", ""])


@pytest.fixture
def encrypted_pdf() -> bytes:
    return build_pdf(
        [make_words(60)],
        encryption=fitz.PDF_ENCRYPT_AES_256,
        owner_pw="owner-secret",
        user_pw="user-secret",
    )


@pytest.fixture
def resume_docx() -> bytes:
    return build_docx(
        [
            "Jane Candidate",
            "Senior backend engineer with eight years of Python experience.",
            "Led the hiring platform team and mentored four engineers.",
        ],
        table=[["Skill", "Years"], ["Python", "8"], ["PostgreSQL", "6"]],
    )


class RecordingLoader:
    """Loader double that records calls and returns a fixed result."""

    def __init__(self, result: Optional[LoadResult] = None, error: Optional[Exception] = None):
        self.result = result or LoadResult(fragments=[make_words(20)])
        self.error = error
        self.calls: list[tuple] = []

    def load(self, *args, **kwargs) -> LoadResult:
        self.calls.append((args, kwargs))
        if self.error is not None:
            raise self.error
        return self.result


class RecordingController:
    def __init__(self, result: Optional[LoadResult] = None):
        self.result = result or LoadResult(fragments=[make_words(20)], pages=1)
        self.calls: list[tuple] = []

    def run(self, file_bytes: bytes, file_name: str = "unknown.pdf") -> LoadResult:
        self.calls.append((file_bytes, file_name))
        return self.result
