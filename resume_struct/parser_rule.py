"""
Rule-based résumé structuring.

Contact header ➜ section segmenter ➜ per-section field parsers ➜ normaliser.
``extract`` never raises for string input; the optional LLM draft is only
consulted through ``parse_resume`` and only as a lower-precedence source.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from . import config
from .cleaner import normalize
from .contact import scan_contact
from .extractor import pdf_to_text
from .fields import PARSERS
from .llm_client import LLMError
from .parser_llm import parse_resume_llm
from .segmenter import segment
from .utils import text_to_lines

logger = logging.getLogger(__name__)


def structure(lines: Iterable[str]) -> Dict:
    """Segment ``lines`` and run each block through its section parser."""
    out: Dict = {}
    for sec, buf in segment(lines):
        _flush(sec, buf, out)
    return out


def extract(lines: Union[str, Iterable[str]], draft: Optional[Dict] = None) -> Dict:
    if isinstance(lines, str):
        lines = lines.splitlines()
    lines = [(ln or "").strip() for ln in lines or []]

    contact, used = scan_contact(lines)
    body = [ln for i, ln in enumerate(lines) if i not in used]
    local = structure(body)
    return normalize(local, contact, draft)


def parse_resume_rule(raw_text: str, draft: Optional[Dict] = None) -> Dict:
    return extract(text_to_lines(raw_text), draft)


def parse_resume(raw_text: str, use_llm: Optional[bool] = None) -> Dict:
    """
    Structure ``raw_text``, asking the LLM for a draft first when enabled.

    A failed draft is logged and the local heuristics run on their own.
    """
    if use_llm is None:
        use_llm = config.USE_LLM_DRAFT
    draft = None
    if use_llm:
        try:
            draft = parse_resume_llm(raw_text)
        except (LLMError, ValueError) as exc:  # JSONDecodeError is a ValueError
            logger.warning("LLM draft unavailable, using local heuristics only: %s", exc)
    return parse_resume_rule(raw_text, draft)


def parse_resume_pdf(pdf_path: Union[str, Path], use_llm: Optional[bool] = None) -> Dict:
    """PDF file ➜ canonical record, via ``pdf_to_text`` and ``parse_resume``."""
    return parse_resume(pdf_to_text(pdf_path), use_llm=use_llm)


# ───────────────────────────────────────── helpers ──
def _flush(sec: str, buf: List[str], o: Dict):
    """Parse one segment into ``o``; repeated sections add to what is there."""
    if not buf or sec not in PARSERS:
        return
    value = PARSERS[sec](buf)
    if not value:
        return
    if sec == "summary":
        o["summary"] = f"{o['summary']} {value}" if o.get("summary") else value
    else:
        o.setdefault(sec, []).extend(value)
    logger.debug("section %s: %s", sec, len(value) if isinstance(value, list) else "text")
