# lesson_qa/core/__init__.py
from lesson_qa.core.errors import AppError
from lesson_qa.core.error_codes import ErrorCode
from lesson_qa.core.error_reasons import ErrorReason

__all__ = ["AppError", "ErrorCode", "ErrorReason"]
