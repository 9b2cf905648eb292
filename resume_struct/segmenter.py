"""
Section segmenter.

A single forward pass over the lines, written as a state machine: ``step``
takes one line and the current ``SegmentState`` and returns the next state,
``finish`` closes the stream.  Nothing is mutated, so any prefix of a
document can be replayed and inspected on its own.

Boundaries come from three places, tried in order:

1. exact heading lookup in ``HEADING_SYNONYMS``
2. fuzzy heading match (punctuation stripped, bounded length difference)
3. content that looks like a job or a degree while we are elsewhere.
   Such a line is only a *candidate*; it is parked in ``pending`` and the
   boundary is taken only if the next line backs it up.  Only summary,
   experience and education blocks that already hold content are open to
   this; a headed skills or projects block keeps everything under it.
"""

from __future__ import annotations
import logging, re
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Tuple

from . import config
from .headings import HEADING_SYNONYMS, section_for
from .utils import (
    DEGREE_HINT,
    DEGREE_WORD,
    EXPERIENCE_START,
    INSTITUTION_HINT,
    INSTITUTION_WORD,
    LOCATION_LINE,
    NOT_EDUCATION,
    YEAR,
    is_bullet,
)

logger = logging.getLogger(__name__)

_HEADING_PUNCT = re.compile(r"[:\-_•]")
_SPACES = re.compile(r"\s+")

Block = Tuple[str, Tuple[str, ...]]

# sections whose content may run on into an unlabeled experience or education block
HEURISTIC_SECTIONS = ("summary", "experience", "education")


def _clean_heading(text: str) -> str:
    return _SPACES.sub(" ", _HEADING_PUNCT.sub("", text.upper())).strip()


# synonym, cleaned synonym, word-bounded pattern; table order preserved
_FUZZY = tuple(
    (syn, clean, re.compile(rf"(?:^|\b){re.escape(clean)}\b"))
    for syn, clean in ((s, _clean_heading(s)) for s in HEADING_SYNONYMS)
)


@dataclass(frozen=True)
class SegmentState:
    section: str = "summary"
    buffer: Tuple[str, ...] = ()
    blocks: Tuple[Block, ...] = ()
    pending: Optional[Tuple[str, str]] = None  # (target section, candidate line)


# ───────────────────────────────────────── classification ──
def classify_heading(line: str) -> Optional[str]:
    """Section id named by ``line`` if it is a heading, else None."""
    text = (line or "").strip()
    if not text:
        return None
    if (exact := section_for(text)) is not None:
        return exact

    cleaned = _clean_heading(text)
    bullet = is_bullet(text)
    for syn, clean, pat in _FUZZY:
        if bullet and cleaned != clean:
            continue
        if len(cleaned) < len(clean) + config.FUZZY_HEADING_SLACK and pat.search(cleaned):
            logger.debug("fuzzy heading %r matched %r", line, syn)
            return HEADING_SYNONYMS[syn]
    return None


def is_experience_start(line: str) -> bool:
    return bool(EXPERIENCE_START.match(line))


def is_education_start(line: str, section: str = "") -> bool:
    if NOT_EDUCATION.search(line):
        return False
    if section == "experience":
        # job lines mention universities; only a degree pulls us out of experience
        return bool(DEGREE_HINT.search(line))
    return bool(DEGREE_HINT.search(line) or INSTITUTION_HINT.search(line))


def heuristic_target(line: str, section: str) -> Optional[str]:
    """Section an unlabeled content line seems to open, if it differs from ``section``."""
    if section != "experience" and is_experience_start(line):
        return "experience"
    if section != "education" and is_education_start(line, section):
        return "education"
    return None


def _confirms(target: str, line: str) -> bool:
    """Does ``line`` back up a heuristic boundary into ``target``?"""
    edu = DEGREE_WORD.search(line) or INSTITUTION_WORD.search(line)
    if target == "experience":
        return not edu and bool(
            is_bullet(line)
            or YEAR.search(line)
            or is_experience_start(line)
            or LOCATION_LINE.match(line)
        )
    return bool(edu or YEAR.search(line) or _short_label(line))


def _short_label(line: str) -> bool:
    # "MIT", "Cambridge, MA": a few words, not a bullet, not a sentence
    return not is_bullet(line) and len(line.split()) <= 6 and not line.endswith((".", "!", "?"))


# ───────────────────────────────────────── transitions ──
def _flush(state: SegmentState) -> SegmentState:
    if any(ln for ln in state.buffer):
        logger.debug("section %s: %d lines", state.section, len(state.buffer))
        return replace(state, buffer=(), blocks=state.blocks + ((state.section, state.buffer),))
    return replace(state, buffer=())


def _append(state: SegmentState, line: str) -> SegmentState:
    return replace(state, buffer=state.buffer + (line,))


def _open_to_heuristics(state: SegmentState) -> bool:
    return state.section in HEURISTIC_SECTIONS and any(ln for ln in state.buffer)


def _resolve_pending(line: str, state: SegmentState) -> Tuple[SegmentState, bool]:
    """Settle a parked candidate against ``line``; True if ``line`` was consumed."""
    target, candidate = state.pending
    state = replace(state, pending=None)
    if line and classify_heading(line) is None and _confirms(target, line):
        logger.debug("heuristic boundary into %s at %r", target, candidate)
        return replace(_flush(state), section=target, buffer=(candidate, line)), True
    logger.debug("heuristic boundary into %s rejected at %r", target, candidate)
    return _append(state, candidate), False


def step(line: str, state: SegmentState) -> SegmentState:
    line = (line or "").strip()
    if state.pending is not None:
        state, consumed = _resolve_pending(line, state)
        if consumed:
            return state
    if not line:
        return _append(state, "") if state.buffer else state

    heading = classify_heading(line)
    if heading is not None:
        return replace(_flush(state), section=heading)

    # content-shaped boundaries only inside free-running sections, never at a block start
    target = heuristic_target(line, state.section) if _open_to_heuristics(state) else None
    if target is not None:
        return replace(state, pending=(target, line))
    return _append(state, line)


def finish(state: SegmentState) -> SegmentState:
    if state.pending is not None:
        state = _append(replace(state, pending=None), state.pending[1])
    return _flush(state)


def segment(lines: Iterable[str]) -> List[Tuple[str, List[str]]]:
    """Ordered ``(section id, lines)`` blocks; a section may appear more than once."""
    state = SegmentState()
    for ln in lines:
        state = step(ln, state)
    return [(sec, list(buf)) for sec, buf in finish(state).blocks]
