"""
Shared patterns and small text helpers for the resume_struct modules.
"""

from __future__ import annotations
import hashlib, re, unicodedata
from typing import List

# ───────────────────────────────────────── patterns ──
BULLET = re.compile(r"^\s*[-•●▪◦‣*·–]\s*")
YEAR = re.compile(r"\b\d{4}\b")

_MONTH = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?\s+"
_RANGE = (
    rf"(?:{_MONTH})?\d{{4}}\s*(?:-|–|—|to)\s*"
    rf"(?:(?:{_MONTH})?\d{{4}}|present|current|now)\b"
)
DATE_RANGE = re.compile(_RANGE, re.I)
DATE_ONLY = re.compile(rf"^\(?\s*{_RANGE}\s*\)?$", re.I)
# a year range, or a lone year, as education durations are often written
YEAR_SPAN = re.compile(rf"{_RANGE}|\b\d{{4}}\b", re.I)

EXPERIENCE_START = re.compile(
    r"^(?:"
    r"\d{4}\s*(?:-|–|—|to)\s*(?:\d{4}|(?i:present|current))"
    r"|[A-Z][\w.&/'-]*(?: [\w.&/'-]+){0,5} at [A-Z]"
    r"|[A-Z][\w.&/'-]*(?: [\w.&/'-]+){0,5} \|"
    r"|(?i:senior|lead|principal|director|manager|engineer|developer)\b"
    r")"
)
SENIORITY = re.compile(
    r"^(?:senior|lead|principal|director|manager|engineer|developer)\b", re.I
)

_DEGREE = (
    r"\b(?:bachelor|master)(?:'?s)?\b|\bph\.?\s?d\b|\bmba\b"
    r"|\b[bm]\.\s?(?:sc|s|a|e)\."
)
DEGREE_HINT = re.compile(_DEGREE, re.I)
DEGREE_WORD = re.compile(_DEGREE + r"|\b(?:diploma|certificate|degree)\b", re.I)
INSTITUTION_HINT = re.compile(r"\b(?:university|college|school of|institute of)\b", re.I)
INSTITUTION_WORD = re.compile(r"\b(?:university|college|institute|school)\b", re.I)
NOT_EDUCATION = re.compile(r"experience|skill|language", re.I)

# "City, ST", "City, Country", "New York, NY, USA"
LOCATION_LINE = re.compile(
    r"^[A-Z][a-z]+(?:[ -][A-Z][a-z]+)*,\s*"
    r"(?:[A-Z]{2}|[A-Z][a-z]+(?: [A-Z][a-z]+)*)"
    r"(?:,\s*[A-Z][A-Za-z]+(?: [A-Z][a-z]+)*)?$"
)

ITEM_SPLIT = re.compile(r"\s*(?:[,|;•·]|\s{2,})\s*")
URL = re.compile(r"https?://|www\.|github\.com|gitlab\.com", re.I)


# ───────────────────────────────────────── helpers ──
def _sha(text: str) -> str:
    """Computes SHA256 hash of a string."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def is_bullet(line: str) -> bool:
    return bool(BULLET.match(line or ""))


def strip_bullet(line: str) -> str:
    return BULLET.sub("", line or "", count=1).strip()


def split_items(line: str) -> List[str]:
    return [x for x in ITEM_SPLIT.split(strip_bullet(line)) if x]


def tidy(text: str) -> str:
    """Trim whitespace and the separators left behind after cutting a date out."""
    return re.sub(r"\s{2,}", " ", text or "").strip(" ,;|-–—()\t")


def text_to_lines(text: str) -> List[str]:
    """
    Raw extracted text ➜ trimmed lines.

    Runs of blank lines collapse to a single "" so that blank gaps survive
    as entry separators; leading and trailing blanks are dropped.
    """
    out: List[str] = []
    for raw in unicodedata.normalize("NFKC", text or "").splitlines():
        ln = raw.strip()
        if ln or (out and out[-1]):
            out.append(ln)
    while out and not out[-1]:
        out.pop()
    return out
