"""lesson_qa/pdf/extract.py

Deterministic PDF -> per-page text extraction.

Each page yields its whitespace-collapsed text, the number of discrete text
fragments and the mean glyph height. The normalizer relies on the last two
to tell dense, small-print notes pages apart from slides.

Preferred strategy:
1) PyMuPDF (fitz): text spans, span size as glyph height
2) pdfplumber: words, word box height as glyph height
3) pypdf (very basic): whitespace tokens, no glyph sizes
"""


import io
import logging
import re

from lesson_qa.constants.qa import PipelineStage
from lesson_qa.core import ErrorCode, ErrorReason
from lesson_qa.core.errors import stage_error
from lesson_qa.pdf.types import RawPage

logger = logging.getLogger("lesson_qa.pdf.extract")

_WS = re.compile(r"\s+")


def _collapse(parts: list[str]) -> str:
    return _WS.sub(" ", " ".join(parts)).strip()


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _pages_pymupdf(pdf_bytes: bytes) -> list[RawPage]:
    import fitz  # type: ignore

    pages: list[RawPage] = []
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        for i in range(doc.page_count):
            page = doc.load_page(i)
            fragments: list[str] = []
            sizes: list[float] = []
            for block in page.get_text("dict").get("blocks", []):
                if block.get("type") != 0:  # images
                    continue
                for line in block.get("lines", []):
                    for span in line.get("spans", []):
                        fragments.append(span.get("text", ""))
                        size = float(span.get("size") or 0.0)
                        if size > 0:
                            sizes.append(size)
            pages.append(
                RawPage(
                    page_number=i + 1,
                    text=_collapse(fragments),
                    item_count=len(fragments),
                    avg_font_size=_mean(sizes),
                )
            )
    return pages


def _pages_pdfplumber(pdf_bytes: bytes) -> list[RawPage]:
    import pdfplumber  # type: ignore

    pages: list[RawPage] = []
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        for i, p in enumerate(pdf.pages):
            words = p.extract_words() or []
            heights = [float(w["bottom"]) - float(w["top"]) for w in words]
            pages.append(
                RawPage(
                    page_number=i + 1,
                    text=_collapse([w.get("text", "") for w in words]),
                    item_count=len(words),
                    avg_font_size=_mean([h for h in heights if h > 0]),
                )
            )
    return pages


def _pages_pypdf(pdf_bytes: bytes) -> list[RawPage]:
    from pypdf import PdfReader  # type: ignore

    reader = PdfReader(io.BytesIO(pdf_bytes))
    pages: list[RawPage] = []
    for i, p in enumerate(reader.pages):
        text = _collapse([p.extract_text() or ""])
        pages.append(
            RawPage(
                page_number=i + 1,
                text=text,
                item_count=len(text.split()),
                avg_font_size=0.0,
            )
        )
    return pages


_BACKENDS = (
    ("pymupdf", _pages_pymupdf),
    ("pdfplumber", _pages_pdfplumber),
    ("pypdf", _pages_pypdf),
)


def extract_raw_pages(pdf_bytes: bytes) -> list[RawPage]:
    if not pdf_bytes:
        raise stage_error(
            PipelineStage.EXTRACTION,
            code=ErrorCode.PDF_UNREADABLE,
            reason=ErrorReason.PDF_INVALID,
            message="Empty PDF bytes",
            status_code=422,
        )

    last_err: Exception | None = None
    for name, backend in _BACKENDS:
        try:
            pages = backend(pdf_bytes)
        except ImportError as e:
            last_err = e
            logger.debug("pdf.backend_missing", extra={"backend": name})
            continue
        except Exception as e:
            last_err = e
            logger.warning("pdf.backend_failed", extra={"backend": name, "error": str(e)})
            continue

        logger.info("pdf.extracted", extra={"backend": name, "page_count": len(pages)})
        return pages

    raise stage_error(
        PipelineStage.EXTRACTION,
        code=ErrorCode.PDF_UNREADABLE,
        reason=ErrorReason.PDF_INVALID,
        message=f"Could not read the PDF: {last_err}",
        status_code=422,
    ) from last_err
