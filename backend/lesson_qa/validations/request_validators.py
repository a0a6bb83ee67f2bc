"""
request_validators.py
- Purpose: Boundary validation for QA run submissions (mode, source type, PDF upload).
- Design: Normalize + validate at the boundary, keep services clean.
"""

from fastapi import UploadFile

from lesson_qa.constants.qa import PDFSourceType, QAMode
from lesson_qa.core import ErrorCode
from lesson_qa.core.errors import bad_request

_PDF_CONTENT_TYPES = {"application/pdf", "application/x-pdf"}


def parse_mode(value: QAMode | str) -> QAMode:
    try:
        return QAMode((value or "").strip() if isinstance(value, str) else value)
    except ValueError:
        raise bad_request(
            message=f"Unknown QA mode '{value}'",
            details={"allowed": [m.value for m in QAMode]},
        ) from None


def parse_source_type(value: PDFSourceType | str) -> PDFSourceType:
    try:
        return PDFSourceType((value or "").strip() if isinstance(value, str) else value)
    except ValueError:
        raise bad_request(
            message=f"Unknown PDF source type '{value}'",
            details={"allowed": [s.value for s in PDFSourceType]},
        ) from None


def validate_pdf_upload(pdf: UploadFile | None) -> None:
    if not pdf:
        raise bad_request(code=ErrorCode.FILE_MISSING, message="A PDF file is required")

    content_type = (pdf.content_type or "").lower()
    filename = (pdf.filename or "").lower()
    if content_type not in _PDF_CONTENT_TYPES and not filename.endswith(".pdf"):
        raise bad_request(
            code=ErrorCode.INVALID_FILE_TYPE,
            message="Only PDF files are supported",
            details={"content_type": content_type},
        )


def validate_pdf_size(pdf_bytes: bytes, max_bytes: int) -> None:
    # UploadFile doesn't reliably expose size; checked after reading
    if len(pdf_bytes) > max_bytes:
        raise bad_request(
            code=ErrorCode.FILE_TOO_LARGE,
            message=f"PDF exceeds {max_bytes} bytes",
            details={"size": len(pdf_bytes), "max_bytes": max_bytes},
        )
