"""
HTTP surface for the parsing pipeline.

POST /api/documents/parse        - Parse a PDF/DOCX/DOC/TXT upload
POST /api/resumes/parse          - Parse a resume and return its text
POST /api/contracts/extract-pdf  - Extract contract text from a PDF template
GET  /health                     - Liveness check

Run: uvicorn recruit_parser.api:app --reload
"""

from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import APIRouter, FastAPI, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from recruit_parser.config import ApiSettings
from recruit_parser.contracts import basic_placeholder_replacement, clean_markdown_from_response
from recruit_parser.exceptions import (
    ContentQualityError,
    DocumentParserError,
    FileValidationError,
)
from recruit_parser.handler import DocumentHandler
from recruit_parser.logger import get_logger, request_context, setup_logging
from recruit_parser.models import UploadedFile
from recruit_parser.quality import validate_and_clean_content

logger = get_logger(__name__)

Enhancer = Callable[[str], str]

PDF_MIME_TYPE = "application/pdf"


def _to_upload(file: UploadFile) -> UploadedFile:
    content = file.file.read()
    return UploadedFile(
        name=file.filename or "",
        content=content,
        type=file.content_type or "",
        size=len(content),
    )


def _is_truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() == "true"


def build_router(handler: DocumentHandler, enhancer: Optional[Enhancer] = None) -> APIRouter:
    router = APIRouter(prefix="/api")

    @router.post("/documents/parse", tags=["Documents"])
    def parse_document(
        file: UploadFile = File(...),
        use_ai_enhancement: Optional[str] = Form(None, alias="useAiEnhancement"),
    ):
        """Parse an upload and return the ParsedDocument."""
        upload = _to_upload(file)
        document = handler.parse(upload)
        if _is_truthy(use_ai_enhancement):
            logger.debug(
                "AI enhancement requested on generic parse, ignored",
                extra_data={"file_name": upload.name},
            )
        return document.to_dict()

    @router.post("/resumes/parse", tags=["Resumes"])
    def parse_resume(file: UploadFile = File(...)):
        """Parse a candidate resume."""
        text = handler.parse_resume(_to_upload(file))
        return {"text": text, "wordCount": len(text.split())}

    @router.post("/contracts/extract-pdf", tags=["Contracts"])
    def extract_contract_pdf(
        file: UploadFile = File(...),
        use_ai_enhancement: Optional[str] = Form(None, alias="useAiEnhancement"),
    ):
        """Extract contract template text from a PDF, optionally enhancing it."""
        upload = _to_upload(file)
        if upload.type != PDF_MIME_TYPE:
            return JSONResponse(status_code=400, content={"error": "Only PDF files are supported"})

        try:
            document = handler.parse(upload)
        except (ContentQualityError, FileValidationError):
            raise
        except DocumentParserError as exc:
            logger.warning(
                "Contract PDF could not be parsed",
                extra_data={"file_name": upload.name, "error": str(exc)},
            )
            return JSONResponse(
                status_code=400,
                content={
                    "error": "Failed to parse PDF file. Please ensure the file is a valid PDF document."
                },
            )

        content = validate_and_clean_content(document.text)
        enhanced = False

        if _is_truthy(use_ai_enhancement):
            if enhancer is None:
                logger.warning("AI enhancement requested but no enhancer is configured")
            else:
                try:
                    candidate = clean_markdown_from_response(enhancer(content))
                except Exception as exc:
                    logger.error(
                        "AI enhancement failed, using basic placeholder replacement",
                        extra_data={"error_type": type(exc).__name__, "error": str(exc)},
                    )
                    candidate = basic_placeholder_replacement(content)

                try:
                    content = validate_and_clean_content(candidate)
                    enhanced = True
                except ContentQualityError:
                    logger.warning("AI enhancement produced invalid content, using original")

        return {
            "content": content,
            "enhanced": enhanced,
            "filename": upload.name,
            "size": upload.size,
        }

    return router


def create_app(
    handler: Optional[DocumentHandler] = None,
    settings: Optional[ApiSettings] = None,
    enhancer: Optional[Enhancer] = None,
) -> FastAPI:
    settings = settings or ApiSettings()
    handler = handler or DocumentHandler(config=settings.to_parser_config())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level)
        logger.info("Recruit Parser API started", extra_data={"log_level": settings.log_level})
        yield

    app = FastAPI(
        title="Recruit Parser",
        description="Text extraction for resumes and contract templates.",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def assign_request_id(request: Request, call_next):
        with request_context(request.headers.get("x-request-id")) as request_id:
            response = await call_next(request)
            response.headers["x-request-id"] = request_id
            return response

    @app.exception_handler(DocumentParserError)
    async def parser_error_handler(request: Request, exc: DocumentParserError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled error while processing upload",
            extra_data={"path": request.url.path, "error_type": type(exc).__name__},
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"error": "Failed to process the uploaded file"})

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "healthy"}

    app.include_router(build_router(handler, enhancer))
    return app


app = create_app()
