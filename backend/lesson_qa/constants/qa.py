"""
qa.py
- Purpose: Central source of truth for review modes, source types and verdicts.
- Values are stored on qa_runs rows and sent by the UI; keep them stable.
"""

from enum import Enum


class QAMode(str, Enum):
    FULL_LESSON = "full-lesson"
    CHUNK_QA = "chunk-qa"
    STEM_QA = "stem-qa"
    POST_DESIGN_QA = "post-design-qa"


class PDFSourceType(str, Enum):
    GSLIDES = "gslides"      # notes printed inline on the slide page
    SLIDESCOM = "slidescom"  # notes exported as their own pages


class NotesPattern(str, Enum):
    INLINE = "inline"
    SEPARATE = "separate"
    NONE = "none"


class QAVerdict(str, Enum):
    PASS = "pass"
    PASS_WITH_WARNINGS = "pass-with-warnings"
    REVISION_REQUIRED = "revision-required"
    FAIL = "fail"


class IssueSeverity(str, Enum):
    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"


class PipelineStage(str, Enum):
    EXTRACTION = "extraction"
    NORMALIZATION = "normalization"
    DETERMINISTIC = "deterministic"
    AI_REVIEW = "ai_review"
    PERSISTENCE = "persistence"
