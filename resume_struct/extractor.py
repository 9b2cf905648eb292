"""
PDF ➜ raw text
– groups words sharing a vertical position into one line, top to bottom
– leaves a blank line where the vertical gap is clearly larger than usual
– strips `(cid:N)` glyph artifacts
– suppresses verbose CropBox warnings from pdfplumber/pdfminer
"""
from __future__ import annotations
from pathlib import Path
from statistics import median
from typing import Dict, List
import re, logging, warnings, pdfplumber

from .utils import text_to_lines

# silence noisy PDF logging
logging.getLogger("pdfplumber").setLevel(logging.ERROR)
logging.getLogger("pdfminer").setLevel(logging.ERROR)
warnings.filterwarnings("ignore", category=UserWarning, module="pdfminer")

logger = logging.getLogger(__name__)

_CID_RE = re.compile(r"\(cid:\d+\)")
ROW_TOLERANCE = 2.5   # points; words closer than this share a line
GAP_FACTOR = 1.8      # gap / median line height that counts as a paragraph break


def _rows(words: List[Dict]) -> List[List[Dict]]:
    rows: List[List[Dict]] = []
    top = None
    for w in sorted(words, key=lambda w: (round(w["top"], 1), w["x0"])):
        if top is not None and abs(w["top"] - top) <= ROW_TOLERANCE:
            rows[-1].append(w)
        else:
            rows.append([w])
            top = w["top"]
    return rows


def _page_lines(words: List[Dict]) -> List[str]:
    rows = _rows(words)
    heights = [w["bottom"] - w["top"] for row in rows for w in row if w["bottom"] > w["top"]]
    gap_threshold = (median(heights) if heights else 10.0) * GAP_FACTOR

    out: List[str] = []
    last_bottom = None
    for row in rows:
        top = min(w["top"] for w in row)
        if last_bottom is not None and top - last_bottom > gap_threshold:
            out.append("")
        out.append(" ".join(w["text"] for w in sorted(row, key=lambda w: w["x0"])))
        last_bottom = max(w["bottom"] for w in row)
    return out


def pdf_to_text(pdf_path: str | Path) -> str:
    pages: List[str] = []
    with pdfplumber.open(pdf_path) as pdf:
        for page in pdf.pages:
            words = page.extract_words(keep_blank_chars=False) or []
            pages.append("\n".join(_page_lines(words)))
    logger.debug("extracted %d pages from %s", len(pages), pdf_path)
    return _CID_RE.sub("", "\n\n".join(pages))


def pdf_to_lines(pdf_path: str | Path) -> List[str]:
    return text_to_lines(pdf_to_text(pdf_path))
