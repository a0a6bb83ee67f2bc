"""
db/base.py
- Purpose: Provide Base + ensure models are imported before create_all.
"""

from lesson_qa.models.base import Base
import lesson_qa.models  # noqa: F401  (ensures models are imported)

__all__ = ["Base"]
