# lesson_qa/llm/prompts/registry.py

from dataclasses import dataclass
from typing import Sequence

from lesson_qa.constants.qa import QAMode
from lesson_qa.llm.prompts import templates
from lesson_qa.pdf.types import NormalizedSlide

DEFAULT_VERSION = "default-v1"
NO_NOTES_MARKER = "[none]"

@dataclass(frozen=True)
class PromptTemplate:
    name: str
    version: str
    template: str

PROMPTS: dict[QAMode, PromptTemplate] = {
    QAMode.FULL_LESSON: PromptTemplate("full-lesson", DEFAULT_VERSION, templates.FULL_LESSON_V1),
    QAMode.CHUNK_QA: PromptTemplate("chunk-qa", DEFAULT_VERSION, templates.CHUNK_QA_V1),
    QAMode.STEM_QA: PromptTemplate("stem-qa", DEFAULT_VERSION, templates.STEM_QA_V1),
    QAMode.POST_DESIGN_QA: PromptTemplate("post-design-qa", DEFAULT_VERSION, templates.POST_DESIGN_QA_V1),
}

def get_default_prompt(mode: QAMode | str) -> PromptTemplate:
    try:
        return PROMPTS[QAMode(mode)]
    except (KeyError, ValueError):
        raise KeyError(f"Unknown QA mode: {mode}") from None


def _render_template(template: str, variables: dict) -> str:
    out = template
    for k, v in variables.items():
        out = out.replace("{{" + k + "}}", str(v))
    return out


def render_slide_block(slide: NormalizedSlide) -> str:
    notes = slide.speaker_notes if slide.speaker_notes else NO_NOTES_MARKER
    return f"--- SLIDE {slide.slide_number} ---\n{slide.slide_text}\nSPEAKER NOTES: {notes}"


def render_transcript(slides: Sequence[NormalizedSlide]) -> str:
    return _render_template(
        templates.LESSON_TRANSCRIPT_V1,
        {
            "slide_count": len(slides),
            "slide_blocks": "\n\n".join(render_slide_block(s) for s in slides),
        },
    )
