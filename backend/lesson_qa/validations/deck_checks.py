"""
deck_checks.py
- Purpose: Rule-based structural checks on a normalized deck.
- Runs before the AI review; a critical flag blocks the review entirely.
- Every rule is evaluated so the caller sees all flags at once.
"""

import re
from typing import Sequence

from lesson_qa.constants.qa import QAMode
from lesson_qa.pdf.types import NormalizedSlide
from lesson_qa.validations.types import DeterministicResult

MIN_SLIDE_COUNT: dict[QAMode, int] = {
    QAMode.FULL_LESSON: 5,
    QAMode.CHUNK_QA: 2,
    QAMode.STEM_QA: 3,
    QAMode.POST_DESIGN_QA: 3,
}

MAX_MISSING_NOTES_RATIO: dict[QAMode, float] = {
    QAMode.FULL_LESSON: 0.4,
    QAMode.CHUNK_QA: 0.5,
    QAMode.STEM_QA: 0.4,
    QAMode.POST_DESIGN_QA: 0.6,
}

CRITICAL_MISSING_NOTES_RATIO = 0.8
MIN_SLIDE_CHARS = 5
MIN_TITLE_CHARS = 2
MIN_TOTAL_CHARS = 50

_DIGIT = re.compile(r"\d")


def run_deterministic_checks(
    slides: Sequence[NormalizedSlide],
    mode: QAMode | str,
    title: str | None,
) -> DeterministicResult:
    mode = QAMode(mode)
    flags: list[str] = []
    critical = False

    # 1) slide count
    min_slides = MIN_SLIDE_COUNT[mode]
    if len(slides) < min_slides:
        flags.append(
            f"Slide count ({len(slides)}) is below the minimum required for {mode.value} ({min_slides})."
        )
        critical = True

    # 2) empty slides
    empty = [s.slide_number for s in slides if len((s.slide_text or "").strip()) < MIN_SLIDE_CHARS]
    if empty:
        nums = ", ".join(str(n) for n in empty)
        flags.append(f"{len(empty)} slide(s) have empty or near-empty content: slides {nums}.")

    # 3) speaker notes coverage
    with_notes = sum(1 for s in slides if s.has_notes)
    missing_ratio = 1 - with_notes / max(len(slides), 1)
    max_missing = MAX_MISSING_NOTES_RATIO[mode]
    if missing_ratio > max_missing:
        flags.append(
            f"{round(missing_ratio * 100)}% of slides are missing speaker notes "
            f"(threshold: {round(max_missing * 100)}%)."
        )
        if missing_ratio > CRITICAL_MISSING_NOTES_RATIO:
            critical = True

    # 4) title
    if not title or len(title.strip()) < MIN_TITLE_CHARS:
        flags.append("Lesson title is missing or too short.")
        critical = True

    # 5) extraction sanity
    total_text = "".join(s.slide_text or "" for s in slides).strip()
    if len(total_text) < MIN_TOTAL_CHARS:
        flags.append("Total extracted slide text is too short; the PDF may not have extracted correctly.")
        critical = True

    # 6) STEM decks should carry some numeric content (hint only)
    if mode is QAMode.STEM_QA and not any(_DIGIT.search(s.slide_text or "") for s in slides):
        flags.append("STEM QA mode selected but no numeric content detected in slides.")

    return DeterministicResult(
        deterministic_pass=not flags,
        flags=flags,
        critical_fail=critical,
    )
