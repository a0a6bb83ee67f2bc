"""
models package
- Purpose: Import all ORM models so Base.metadata sees every table.
"""

from lesson_qa.models.configuration import Configuration
from lesson_qa.models.qa_run import QARunRecord
from lesson_qa.models.qa_version import QAVersion

__all__ = [
    "Configuration",
    "QARunRecord",
    "QAVersion",
]
