import logging

import pytest
from conftest import RecordingController, make_words
from fastapi.testclient import TestClient

from recruit_parser.api import create_app
from recruit_parser.config import MEGABYTE, ApiSettings
from recruit_parser.handler import DocumentHandler
from recruit_parser.models import LoadResult

CONTRACT_TEXT = (
    "This employment agreement is made between the company and the candidate. "
    "The candidate will start work on the agreed start date and receive the "
    "salary described in this contract."
)


def make_client(handler=None, enhancer=None, settings=None) -> TestClient:
    app = create_app(handler=handler, settings=settings or ApiSettings(), enhancer=enhancer)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def client() -> TestClient:
    return make_client()


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_parse_document(client, two_page_pdf):
    response = client.post(
        "/api/documents/parse",
        files={"file": ("resume.pdf", two_page_pdf, "application/pdf")},
        data={"useAiEnhancement": "true"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["metadata"]["pages"] == 2
    assert body["metadata"]["fileType"] == "pdf"
    assert body["metadata"]["wordCount"] == len(body["text"].split())
    assert "x-request-id" in response.headers


def test_request_id_is_echoed(client, words):
    response = client.post(
        "/api/documents/parse",
        files={"file": ("notes.txt", words(20).encode(), "text/plain")},
        headers={"x-request-id": "req-123"},
    )
    assert response.headers["x-request-id"] == "req-123"


def test_unsupported_file_is_400(client):
    response = client.post(
        "/api/documents/parse",
        files={"file": ("photo.png", b"\x89PNG", "image/png")},
    )
    assert response.status_code == 400
    assert response.json() == {
        "error": "Unsupported file type. Please upload PDF, DOC, DOCX, or TXT files."
    }


def test_parse_failure_is_400(client, blank_pdf):
    response = client.post(
        "/api/documents/parse",
        files={"file": ("scan.pdf", blank_pdf, "application/pdf")},
    )
    assert response.status_code == 400
    assert "corrupted" in response.json()["error"]


def test_unhandled_exception_is_500():
    class BrokenHandler(DocumentHandler):
        def parse(self, file):
            raise RuntimeError("database unavailable")

    response = make_client(BrokenHandler()).post(
        "/api/documents/parse",
        files={"file": ("cv.txt", b"text", "text/plain")},
    )
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to process the uploaded file"}


def test_parse_resume(client, resume_docx):
    response = client.post(
        "/api/resumes/parse",
        files={"file": ("cv.docx", resume_docx, "application/octet-stream")},
    )
    assert response.status_code == 200
    body = response.json()
    assert "Jane Candidate" in body["text"]
    assert body["wordCount"] == len(body["text"].split())


class TestContractExtraction:
    def test_requires_pdf(self, client, words):
        response = client.post(
            "/api/contracts/extract-pdf",
            files={"file": ("contract.txt", words(30).encode(), "text/plain")},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Only PDF files are supported"}

    def test_extracts_clean_content(self):
        controller = RecordingController(
            LoadResult(fragments=[CONTRACT_TEXT, "Page two\tterms"], pages=2)
        )
        client = make_client(DocumentHandler(pdf_controller=controller))
        response = client.post(
            "/api/contracts/extract-pdf",
            files={"file": ("contract.pdf", b"%PDF-1.7", "application/pdf")},
        )
        assert response.status_code == 200
        assert response.json() == {
            "content": CONTRACT_TEXT + " Page two terms",
            "enhanced": False,
            "filename": "contract.pdf",
            "size": 8,
        }

    def test_unreadable_pdf_has_generic_message(self, client, blank_pdf):
        response = client.post(
            "/api/contracts/extract-pdf",
            files={"file": ("contract.pdf", blank_pdf, "application/pdf")},
        )
        assert response.status_code == 400
        assert response.json() == {
            "error": "Failed to parse PDF file. Please ensure the file is a valid PDF document."
        }

    def test_enhancer_output_is_used(self):
        controller = RecordingController(LoadResult(fragments=[CONTRACT_TEXT], pages=1))
        enhanced_text = CONTRACT_TEXT.replace("the candidate", "{{ candidate_name }}")
        client = make_client(
            DocumentHandler(pdf_controller=controller), enhancer=lambda text: enhanced_text
        )
        response = client.post(
            "/api/contracts/extract-pdf",
            files={"file": ("contract.pdf", b"%PDF", "application/pdf")},
            data={"useAiEnhancement": "true"},
        )
        body = response.json()
        assert body["enhanced"] is True
        assert "{{ candidate_name }}" in body["content"]

    def test_invalid_enhancer_output_keeps_original(self):
        controller = RecordingController(LoadResult(fragments=[CONTRACT_TEXT], pages=1))
        client = make_client(
            DocumentHandler(pdf_controller=controller), enhancer=lambda text: "too short"
        )
        response = client.post(
            "/api/contracts/extract-pdf",
            files={"file": ("contract.pdf", b"%PDF", "application/pdf")},
            data={"useAiEnhancement": "true"},
        )
        body = response.json()
        assert body["enhanced"] is False
        assert body["content"] == CONTRACT_TEXT

    def test_enhancement_is_opt_in(self):
        calls = []
        controller = RecordingController(LoadResult(fragments=[make_words(40)], pages=1))
        client = make_client(
            DocumentHandler(pdf_controller=controller),
            enhancer=lambda text: calls.append(text) or text,
        )
        response = client.post(
            "/api/contracts/extract-pdf",
            files={"file": ("contract.pdf", b"%PDF", "application/pdf")},
        )
        assert response.json()["enhanced"] is False
        assert calls == []

    def test_failed_enhancer_falls_back_to_placeholders(self):
        contract = (
            "This employment agreement between Acme Corp. and the new hire sets an annual "
            "salary of $90,000 for a full-time position starting January 5, 2025. "
            "The hire accepts the duties and benefits described in this agreement."
        )

        def unavailable(text):
            raise RuntimeError("llm down")

        controller = RecordingController(LoadResult(fragments=[contract], pages=1))
        client = make_client(DocumentHandler(pdf_controller=controller), enhancer=unavailable)
        response = client.post(
            "/api/contracts/extract-pdf",
            files={"file": ("contract.pdf", b"%PDF", "application/pdf")},
            data={"useAiEnhancement": "true"},
        )
        body = response.json()
        assert body["enhanced"] is True
        assert body["content"] == (
            "This employment agreement between {{ company_name }} and the new hire sets an "
            "annual salary of {{ salary_amount }} for a {{ employment_type }} position "
            "starting {{ start_date }}. "
            "The hire accepts the duties and benefits described in this agreement."
        )

    def test_enhancer_markdown_becomes_html(self):
        controller = RecordingController(LoadResult(fragments=[CONTRACT_TEXT], pages=1))
        markdown = (
            "# Employment Agreement\n\n"
            "This agreement is made between **{{ company_name }}** and {{ candidate_name }}. "
            "The candidate will start work on the agreed start date and receive the salary."
        )
        client = make_client(
            DocumentHandler(pdf_controller=controller), enhancer=lambda text: markdown
        )
        response = client.post(
            "/api/contracts/extract-pdf",
            files={"file": ("contract.pdf", b"%PDF", "application/pdf")},
            data={"useAiEnhancement": "true"},
        )
        content = response.json()["content"]
        assert content.startswith("<h1>Employment Agreement</h1>")
        assert "<strong>{{ company_name }}</strong>" in content
        assert "**" not in content

    def test_oversized_pdf_keeps_size_reason(self):
        client = make_client(settings=ApiSettings(max_file_size_mb=1))
        response = client.post(
            "/api/contracts/extract-pdf",
            files={"file": ("contract.pdf", b"%PDF" + b"0" * MEGABYTE, "application/pdf")},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "File size exceeds 1MB limit"}


class TestLoggingSetup:
    def test_creating_app_leaves_root_handlers_alone(self):
        root = logging.getLogger()
        sentinel = logging.NullHandler()
        root.addHandler(sentinel)
        try:
            create_app(settings=ApiSettings())
            assert sentinel in root.handlers
        finally:
            root.removeHandler(sentinel)

    def test_startup_configures_logging(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            with TestClient(create_app(settings=ApiSettings(log_level="DEBUG"))) as client:
                assert client.get("/health").status_code == 200
                assert root.level == logging.DEBUG
                assert len(root.handlers) == 1
                assert isinstance(root.handlers[0], logging.StreamHandler)
        finally:
            for handler in root.handlers[:]:
                root.removeHandler(handler)
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)
