"""lesson_qa/pdf/types.py

Lightweight dataclasses for PDF extraction + slide/notes normalization.
Design goals:
- deterministic (no LLM)
- immutable once produced; each stage builds its own values
"""


from dataclasses import dataclass, field

from lesson_qa.constants.qa import NotesPattern


@dataclass(frozen=True)
class RawPage:
    page_number: int  # 1-based
    text: str  # whitespace-collapsed
    item_count: int  # discrete text fragments on the page
    avg_font_size: float  # mean glyph height; 0.0 when unknown


@dataclass(frozen=True)
class NormalizedSlide:
    slide_number: int
    slide_text: str
    speaker_notes: str | None = None

    @property
    def has_notes(self) -> bool:
        return bool(self.speaker_notes and self.speaker_notes.strip())


@dataclass(frozen=True)
class NormalizationResult:
    slides: tuple[NormalizedSlide, ...] = field(default_factory=tuple)
    detected_notes_pattern: NotesPattern = NotesPattern.NONE
    normalization_confidence: float = 0.0  # fraction of slides with notes

    @property
    def notes_detected_count(self) -> int:
        return sum(1 for s in self.slides if s.has_notes)
