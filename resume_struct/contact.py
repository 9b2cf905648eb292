"""
Contact block extraction.

Looks only at the first few non-empty lines, where resumes put the name,
headline and contact details.  Every field is first-match-wins; anything not
found stays "".
"""

from __future__ import annotations
import logging, re
from typing import Dict, List, Set, Tuple

from . import config
from .cleaner import recase_name, recase_role
from .segmenter import classify_heading
from .utils import SENIORITY

logger = logging.getLogger(__name__)

NAME = re.compile(r"^[A-Z][A-Za-z]+ [A-Z][A-Za-z]+$")
EMAIL = re.compile(r"[\w.-]+@[\w.-]+")
PHONE_RUN = re.compile(r"\+?\(?\d[\d\s().-]*\d")
PHONE_DIGITS = (10, 15)
LINKEDIN = re.compile(r"linkedin\.com\S*", re.I)
LINK = re.compile(r"https?://|www\.|\.com/|github", re.I)
LOCATION_HINT = re.compile(
    r"\b(?i:usa|united states|india|uk|united kingdom|canada|australia|germany"
    r"|france|japan|china|remote|new york|cambridge|london|berlin|toronto|bangalore)\b"
    # state codes only in "City, ST" / "City ST" position
    r"|(?:,\s*|(?<=[a-z])\s+)(?:AL|AK|AZ|AR|CA|CO|CT|DE|FL|GA|HI|ID|IL|IN|IA|KS|KY|LA|ME|MD|MA|MI|MN"
    r"|MS|MO|MT|NE|NV|NH|NJ|NM|NY|NC|ND|OH|OK|OR|PA|RI|SC|SD|TN|TX|UT|VT|VA|WA"
    r"|WV|WI|WY|DC)\b"
)
LOCATION_LABEL = re.compile(r"^\s*(?:location|address|city|based in)\s*[:\-]?\s*", re.I)
SEGMENT_SPLIT = re.compile(r"\s*[|•·]\s*")


def _digits(line: str) -> int:
    return sum(c.isdigit() for c in line)


def _is_email(line: str) -> bool:
    return "@" in line and bool(EMAIL.search(line))


def _is_phone(line: str) -> bool:
    return bool(_phone(line))


def _is_link(line: str) -> bool:
    return "linkedin" in line.lower() or bool(LINK.search(line))


def _is_contact(line: str) -> bool:
    return _is_email(line) or _is_phone(line) or _is_link(line) or bool(LOCATION_HINT.search(line))


def _phone(line: str) -> str:
    # one contiguous run must hold the whole number; year ranges stay short
    runs = [r.strip() for r in PHONE_RUN.findall(line) if PHONE_DIGITS[0] <= _digits(r) <= PHONE_DIGITS[1]]
    return max(runs, key=len) if runs else ""


def _location(line: str) -> str:
    """Location in ``line``, looking at each "|"-separated piece on its own."""
    for piece in SEGMENT_SPLIT.split(line):
        if not LOCATION_HINT.search(piece):
            continue
        if _is_email(piece) or _is_phone(piece) or _is_link(piece):
            continue
        return LOCATION_LABEL.sub("", piece).strip()
    return ""


def scan_contact(lines: List[str]) -> Tuple[Dict[str, str], Set[int]]:
    """
    Contact fields plus the indices of the lines they came from.

    Only lines above the first section heading are reported as consumed, so
    a match inside a section never pulls content away from that section.
    """
    contact = {"name": "", "role": "", "phone": "", "email": "", "linkedin": "", "location": ""}
    window = [(i, ln.strip()) for i, ln in enumerate(lines or []) if ln and ln.strip()]
    window = window[: config.CONTACT_SCAN_LINES]

    head: List[Tuple[int, str]] = []
    for i, ln in window:
        if classify_heading(ln) is not None:
            break
        head.append((i, ln))
    head_idx = {i for i, _ in head}
    used: Set[int] = set()

    for i, ln in window:
        hit = False
        if not contact["email"] and "@" in ln and (m := EMAIL.search(ln)):
            contact["email"] = m.group()
            hit = True
        if not contact["phone"] and (phone := _phone(ln)):
            contact["phone"] = phone
            hit = True
        if not contact["linkedin"] and "linkedin" in ln.lower():
            m = LINKEDIN.search(ln)
            contact["linkedin"] = m.group() if m else ln
            hit = True
        if not contact["location"] and (loc := _location(ln)):
            contact["location"] = loc
            hit = True
        if hit and i in head_idx:
            used.add(i)

    # name: strict "First Last" first, then line 0 (line 1 if 0 is a contact/role line)
    pos = next((k for k, (i, ln) in enumerate(head) if NAME.match(ln) and i not in used), None)
    if pos is None and head:
        pos = 0
        if len(head) > 1 and (_is_contact(head[0][1]) or SENIORITY.match(head[0][1])):
            pos = 1
        if _is_contact(head[pos][1]):
            pos = None
    if pos is not None:
        contact["name"] = recase_name(head[pos][1])
        used.add(head[pos][0])
        if pos + 1 < len(head):
            idx, ln = head[pos + 1]
            if idx not in used and not _is_contact(ln):
                contact["role"] = recase_role(ln)
                used.add(idx)

    logger.debug("contact fields found: %s", [k for k, v in contact.items() if v])
    return contact, used


def extract_contact(lines: List[str]) -> Dict[str, str]:
    return scan_contact(lines)[0]
