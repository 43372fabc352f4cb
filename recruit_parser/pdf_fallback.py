"""Multi-strategy PDF extraction with a per-attempt timeout."""

import errno
import os
import shutil
import tempfile
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence, TypeVar

from recruit_parser.config import ParserConfig, ParseStrategy
from recruit_parser.exceptions import FormatParseError
from recruit_parser.loaders import PDFLoader
from recruit_parser.logger import Timer, get_logger
from recruit_parser.models import LoadResult

logger = get_logger(__name__)

T = TypeVar("T")

PDF_FAILURE_MESSAGE = (
    "Failed to parse PDF file. The file may be corrupted, password-protected, "
    "or contain only scanned images (no OCR is available)."
)


class AttemptTimeoutError(Exception):
    """Raised when a strategy attempt exceeds its time budget."""


@contextmanager
def temporary_upload(file_bytes: bytes, suffix: str = ".pdf") -> Iterator[str]:
    """Write an upload into a fresh temp directory and yield the file path.

    The directory is unique per call. Cleanup problems are logged and never
    raised.
    """
    tmp_dir = tempfile.mkdtemp(prefix="recruit-parser-")
    tmp_path = Path(tmp_dir) / f"upload{suffix}"
    try:
        tmp_path.write_bytes(file_bytes)
        yield str(tmp_path)
    finally:
        _cleanup(tmp_path, tmp_dir)


def _cleanup(tmp_path: Path, tmp_dir: str) -> None:
    try:
        tmp_path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning(
            "Failed to remove temporary upload",
            extra_data={"path": str(tmp_path), "error": str(exc)},
        )
    try:
        os.rmdir(tmp_dir)
    except OSError as exc:
        if exc.errno in (errno.ENOTEMPTY, errno.EEXIST):
            # Something else was written next to the upload
            shutil.rmtree(tmp_dir, ignore_errors=True)
            return
        logger.warning(
            "Failed to remove temporary directory",
            extra_data={"path": tmp_dir, "error": str(exc)},
        )


def attempt_with_timeout(
    executor: ThreadPoolExecutor, fn: Callable[[], T], timeout: float
) -> T:
    """Run fn on the executor and wait at most timeout seconds for it.

    On timeout the worker is left to finish in the background.
    """
    future = executor.submit(fn)
    try:
        return future.result(timeout=timeout)
    except FutureTimeoutError as exc:
        future.cancel()
        raise AttemptTimeoutError(f"Attempt exceeded {timeout:g}s") from exc


class PDFFallbackController:
    """Tries PDF parsing strategies in priority order until one yields text."""

    def __init__(
        self,
        loader: Optional[PDFLoader] = None,
        config: Optional[ParserConfig] = None,
        strategies: Optional[Sequence[ParseStrategy]] = None,
    ) -> None:
        self.config = config or ParserConfig()
        self.loader = loader or PDFLoader(default_separator=self.config.pdf_default_separator)
        self.strategies = tuple(strategies or self.config.pdf_strategies)

    def is_success(self, result: LoadResult) -> bool:
        return bool(result.fragments) and result.text_length > self.config.min_pdf_text_chars

    def run(self, file_bytes: bytes, file_name: str = "unknown.pdf") -> LoadResult:
        """Return the result of the first successful strategy.

        Raises:
            FormatParseError: If every strategy times out, fails or yields no text
        """
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="pdf-parse")
        try:
            for strategy in self.strategies:
                with Timer(f"pdf_{strategy.name}") as timer:
                    try:
                        result = attempt_with_timeout(
                            executor,
                            lambda s=strategy: self._attempt(file_bytes, s),
                            self.config.pdf_attempt_timeout_seconds,
                        )
                    except AttemptTimeoutError as exc:
                        logger.warning(
                            "PDF strategy timed out",
                            extra_data={
                                "file_name": file_name,
                                "strategy": strategy.name,
                                "error": str(exc),
                            },
                        )
                        # A hung worker would block the next attempt on this executor
                        executor.shutdown(wait=False, cancel_futures=True)
                        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="pdf-parse")
                        continue
                    except Exception as exc:
                        logger.warning(
                            "PDF strategy failed",
                            extra_data={
                                "file_name": file_name,
                                "strategy": strategy.name,
                                "error_type": type(exc).__name__,
                                "error": str(exc),
                            },
                        )
                        continue

                if self.is_success(result):
                    logger.info(
                        "PDF parsed",
                        extra_data={
                            "file_name": file_name,
                            "strategy": strategy.name,
                            "pages": result.pages,
                            "characters_extracted": result.text_length,
                            "extraction_time_ms": timer.get_elapsed_ms(),
                        },
                    )
                    return result

                logger.info(
                    "PDF strategy yielded too little text",
                    extra_data={
                        "file_name": file_name,
                        "strategy": strategy.name,
                        "characters_extracted": result.text_length,
                    },
                )
        finally:
            executor.shutdown(wait=False)

        raise FormatParseError(PDF_FAILURE_MESSAGE, file_type="pdf")

    def _attempt(self, file_bytes: bytes, strategy: ParseStrategy) -> LoadResult:
        with temporary_upload(file_bytes, suffix=".pdf") as pdf_path:
            return self.loader.load(
                pdf_path,
                split_pages=strategy.split_pages,
                separator=strategy.separator,
            )
