import pytest

from recruit_parser.config import MEGABYTE, ParserConfig
from recruit_parser.exceptions import FileValidationError
from recruit_parser.models import UploadedFile
from recruit_parser.validator import UNSUPPORTED_TYPE_MESSAGE, FileValidator


@pytest.fixture
def validator() -> FileValidator:
    return FileValidator()


@pytest.mark.parametrize("name", ["resume.pdf", "resume.DOCX", "resume.doc", "notes.txt"])
def test_accepts_supported_extensions(validator, name):
    result = validator.validate(UploadedFile(name=name, content=b"data"))
    assert result.is_valid
    assert result.error is None


def test_accepts_supported_mime_without_extension(validator):
    upload = UploadedFile(name="resume", content=b"data", type="application/pdf")
    assert validator.validate(upload).is_valid


def test_rejects_unsupported_type(validator):
    upload = UploadedFile(name="photo.png", content=b"data", type="image/png")
    result = validator.validate(upload)
    assert not result.is_valid
    assert result.error == UNSUPPORTED_TYPE_MESSAGE


def test_rejects_oversized_file(validator):
    upload = UploadedFile(name="resume.pdf", content=b"", size=10 * MEGABYTE + 1)
    result = validator.validate(upload)
    assert not result.is_valid
    assert result.error == "File size exceeds 10MB limit"


def test_file_at_limit_is_accepted(validator):
    upload = UploadedFile(name="resume.pdf", content=b"", size=10 * MEGABYTE)
    assert validator.validate(upload).is_valid


def test_size_limit_follows_config():
    validator = FileValidator(ParserConfig(max_file_size_bytes=5 * MEGABYTE))
    result = validator.validate(UploadedFile(name="a.txt", content=b"", size=6 * MEGABYTE))
    assert result.error == "File size exceeds 5MB limit"


def test_validate_or_raise_carries_reason(validator):
    with pytest.raises(FileValidationError, match="Unsupported file type"):
        validator.validate_or_raise(UploadedFile(name="sheet.xlsx", content=b""))


def test_accepts_upload_identified_by_signature(validator):
    upload = UploadedFile(name="upload", content=b"%PDF-1.7\n", type="application/octet-stream")
    assert validator.validate(upload).is_valid


def test_rejects_signature_type_missing_from_config():
    validator = FileValidator(ParserConfig(supported_extensions=("txt",)))
    result = validator.validate(UploadedFile(name="upload", content=b"%PDF-1.7\n"))
    assert result.error == UNSUPPORTED_TYPE_MESSAGE
