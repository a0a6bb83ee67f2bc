"""lesson_qa/pdf/normalize.py

Cheap, explainable heuristics that rebuild "slide text" vs "speaker notes"
from undifferentiated page text.

Two exports are supported and they lay notes out differently:
- gslides: notes are printed on the same page, below the slide content.
- slidescom: notes are printed on their own, text-dense page after the slide.

The numeric thresholds below have no documented derivation; they are kept
as-is and can be overridden through settings while they are tuned on real
decks.
"""


import math
import re
from typing import Callable, Sequence

from lesson_qa.constants.qa import NotesPattern, PDFSourceType
from lesson_qa.core.config import settings
from lesson_qa.pdf.types import NormalizationResult, NormalizedSlide, RawPage


# ---- inline (gslides) ----
_INLINE_SEPARATORS: tuple[re.Pattern, ...] = (
    re.compile(r"\s{3,}(?=[A-Z])"),  # wide gap before a new sentence
    re.compile(r"\[Notes?\][:：]?\s*", re.IGNORECASE),
    re.compile(r"Speaker Notes?[:：]?\s*", re.IGNORECASE),
)
INLINE_MIN_HEAD_CHARS = 20
INLINE_MIN_TAIL_CHARS = 10
POSITIONAL_MIN_TOKENS = 30
POSITIONAL_MIN_TAIL_CHARS = 20
POSITIONAL_MIN_TAIL_TOKENS = 5
POSITIONAL_SPLIT = settings.NORMALIZER_POSITIONAL_SPLIT

# ---- paired pages (slidescom) ----
DENSITY_RATIO = settings.NORMALIZER_DENSITY_RATIO
FONT_RATIO = settings.NORMALIZER_FONT_RATIO
NOTES_PAGE_MIN_CHARS = 80


def _confidence(slides: Sequence[NormalizedSlide]) -> float:
    if not slides:
        return 0.0
    return sum(1 for s in slides if s.has_notes) / len(slides)


def _split_on_separator(text: str) -> tuple[str, str] | None:
    for sep in _INLINE_SEPARATORS:
        parts = sep.split(text)
        if len(parts) >= 2 and len(parts[0]) > INLINE_MIN_HEAD_CHARS and len(parts[1]) > INLINE_MIN_TAIL_CHARS:
            notes = " ".join(parts[1:]).strip()
            if notes:
                return parts[0].strip(), notes
    return None


def _split_positional(text: str, split_at: float) -> tuple[str, str] | None:
    tokens = text.split()
    if len(tokens) <= POSITIONAL_MIN_TOKENS:
        return None

    boundary = math.floor(len(tokens) * split_at)
    head = " ".join(tokens[:boundary]).strip()
    tail = " ".join(tokens[boundary:]).strip()
    if len(tail) > POSITIONAL_MIN_TAIL_CHARS and len(tail.split()) > POSITIONAL_MIN_TAIL_TOKENS:
        return head, tail
    return None


def normalize_inline_notes(
    raw_pages: Sequence[RawPage],
    *,
    split_at: float = POSITIONAL_SPLIT,
) -> NormalizationResult:
    """One slide per page; notes are cut off the tail of the page text."""
    slides: list[NormalizedSlide] = []

    for page in raw_pages:
        text = page.text
        split = _split_on_separator(text) or _split_positional(text, split_at)

        if split:
            slide_text, notes = split
        else:
            slide_text, notes = text, None

        slides.append(
            NormalizedSlide(
                slide_number=page.page_number,
                slide_text=slide_text.strip(),
                speaker_notes=notes,
            )
        )

    confidence = _confidence(slides)
    pattern = NotesPattern.INLINE if confidence > 0 else NotesPattern.NONE
    return NormalizationResult(
        slides=tuple(slides),
        detected_notes_pattern=pattern,
        normalization_confidence=confidence,
    )


def normalize_paired_pages(
    raw_pages: Sequence[RawPage],
    *,
    density_ratio: float = DENSITY_RATIO,
    font_ratio: float = FONT_RATIO,
) -> NormalizationResult:
    """Slides and notes arrive as separate pages; pair each notes page with
    the slide before it."""
    if not raw_pages:
        return NormalizationResult()

    mean_items = sum(p.item_count for p in raw_pages) / len(raw_pages)
    mean_font = sum(p.avg_font_size for p in raw_pages) / len(raw_pages)

    def is_notes_page(page: RawPage) -> bool:
        dense = page.item_count > mean_items * density_ratio
        small_print = page.avg_font_size < mean_font * font_ratio
        return (dense or small_print) and len(page.text) > NOTES_PAGE_MIN_CHARS

    slides: list[NormalizedSlide] = []
    i = 0
    while i < len(raw_pages):
        page = raw_pages[i]

        if is_notes_page(page):
            # stray notes page: belongs to the previous slide if it has none yet
            if slides and not slides[-1].speaker_notes:
                prev = slides[-1]
                slides[-1] = NormalizedSlide(prev.slide_number, prev.slide_text, page.text.strip())
            i += 1
            continue

        notes = None
        if i + 1 < len(raw_pages) and is_notes_page(raw_pages[i + 1]):
            notes = raw_pages[i + 1].text.strip()
            i += 2
        else:
            i += 1

        slides.append(
            NormalizedSlide(
                slide_number=len(slides) + 1,
                slide_text=page.text.strip(),
                speaker_notes=notes,
            )
        )

    confidence = _confidence(slides)
    pattern = NotesPattern.SEPARATE if confidence > 0 else NotesPattern.NONE
    return NormalizationResult(
        slides=tuple(slides),
        detected_notes_pattern=pattern,
        normalization_confidence=confidence,
    )


NormalizerStrategy = Callable[[Sequence[RawPage]], NormalizationResult]

STRATEGIES: dict[PDFSourceType, NormalizerStrategy] = {
    PDFSourceType.GSLIDES: normalize_inline_notes,
    PDFSourceType.SLIDESCOM: normalize_paired_pages,
}


def normalize_pages(raw_pages: Sequence[RawPage], source_type: PDFSourceType | str) -> NormalizationResult:
    strategy = STRATEGIES[PDFSourceType(source_type)]
    return strategy(raw_pages)
