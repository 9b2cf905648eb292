"""
Section field parsers.

Each parser takes the lines collected for one section and returns that
section's value: a string for the summary, a list of entry dicts for the
rest.  Parsers never raise; text they cannot make sense of ends up in the
most generic slot (title, name, description).
"""

from __future__ import annotations
import logging, re
from types import MappingProxyType
from typing import Callable, Dict, List, Optional, Set

from .schema_resume import (
    CERTIFICATION_ENTRY,
    EDUCATION_ENTRY,
    EXPERIENCE_ENTRY,
    LANGUAGE_ENTRY,
    PROJECT_ENTRY,
)
from .utils import (
    DATE_ONLY,
    DATE_RANGE,
    DEGREE_WORD,
    EXPERIENCE_START,
    INSTITUTION_WORD,
    LOCATION_LINE,
    SENIORITY,
    URL,
    YEAR,
    YEAR_SPAN,
    is_bullet,
    split_items,
    strip_bullet,
    tidy,
)

logger = logging.getLogger(__name__)

AT_HEADER = re.compile(r"^(.*?)\s+at\s+(.*?)(?:\s+\((.*?)\))?$", re.I)
LEVEL_SPLIT = re.compile(r"^(.*?)\s*[(:\-–]\s*(.*?)\)?$")
LEVEL_WORD = re.compile(
    r"^([A-Za-z][\w ]*?)\s+(native|fluent|advanced|intermediate|beginner|basic"
    r"|elementary|proficient|conversational)$",
    re.I,
)
MENTION_SPLIT = re.compile(r",\s*(?![^()]*\))")
TRAILING_YEAR = re.compile(r"[\s,(–-]*\(?\b(\d{4})\b\)?\s*$")
BARE_YEAR = re.compile(r"^\d{4}$")
INLINE_CATEGORY = re.compile(r"^([^:,|;]{1,40}):\s*(\S.*)$")

# level keyword ➜ proficiency dots, first row that matches wins
LEVEL_DOTS = (
    (("native", "fluent", "bilingual", "mother tongue"), 5),
    (("advanced", "proficient", "very good"), 4),
    (("intermediate", "conversational", "good"), 3),
    (("basic", "elementary", "beginner"), 2),
)
DEFAULT_DOTS = 3


def level_dots(level: str) -> Optional[int]:
    """Dots for a recognised level description, None when nothing matches."""
    low = (level or "").lower()
    for words, dots in LEVEL_DOTS:
        if any(w in low for w in words):
            return dots
    return None


def dots_for(level: str) -> int:
    dots = level_dots(level)
    return DEFAULT_DOTS if dots is None else dots


# ───────────────────────────────────────── summary ──
def parse_summary(lines: List[str]) -> str:
    return " ".join(ln.strip() for ln in lines if ln.strip())


# ───────────────────────────────────────── skills ──
def _skill_header(line: str) -> Optional[str]:
    text = strip_bullet(line)
    if line.endswith(":") and len(line) < 50:
        return text[:-1].strip()
    if (
        len(line) < 50
        and not is_bullet(line)
        and line == line.upper()
        and any(c.isalpha() for c in line)
        and not re.search(r"[,|;]", line)
    ):
        return line.strip()
    return None


def parse_skills(lines: List[str]) -> List[Dict]:
    """
    Category headers are short lines ending in ":" or short ALL-CAPS lines.
    "Category: a, b" on one line counts as a header plus its items.
    Without any header the whole block is one "Skills" group.
    """
    groups: List[Dict] = []
    current: Optional[Dict] = None
    for ln in lines:
        ln = ln.strip()
        if not ln:
            continue
        header = _skill_header(ln)
        inline = None if header or URL.search(ln) else INLINE_CATEGORY.match(strip_bullet(ln))
        if header or inline:
            current = {"category": header or inline.group(1).strip(), "items": []}
            groups.append(current)
            if inline:
                current["items"].extend(split_items(inline.group(2)))
            continue
        if current is None:
            current = {"category": "Skills", "items": []}
            groups.append(current)
        current["items"].extend(split_items(ln))
    kept = [g for g in groups if g["items"]]
    if groups and not kept:
        # a column of ALL-CAPS skills reads as headers with nothing under them
        return [{"category": "Skills", "items": [g["category"] for g in groups]}]
    return kept


# ───────────────────────────────────────── entries ──
def _split_entries(lines: List[str], starts: Callable[[str, List[str]], bool]) -> List[List[str]]:
    """Cut a block at blank lines and wherever ``starts`` says a new entry begins."""
    chunks: List[List[str]] = []
    cur: List[str] = []
    for ln in lines:
        ln = ln.strip()
        if not ln:
            if cur:
                chunks.append(cur)
            cur = []
            continue
        if cur and starts(ln, cur):
            chunks.append(cur)
            cur = []
        cur.append(ln)
    if cur:
        chunks.append(cur)
    return chunks


def _header_shaped(line: str) -> bool:
    """Title plus company ("at" or "|" form), or a line carrying a date range."""
    if AT_HEADER.match(line) or DATE_RANGE.search(line):
        return True
    return "|" in line and sum(1 for p in line.split("|") if p.strip()) >= 2


def _starts_job(line: str, chunk: List[str]) -> bool:
    # a header only closes the current entry once that entry has a body or a date
    if not EXPERIENCE_START.match(line) or DATE_ONLY.match(line) or not _header_shaped(line):
        return False
    if AT_HEADER.match(line) and AT_HEADER.match(chunk[0]):
        return True
    return any(is_bullet(ln) or DATE_RANGE.search(ln) for ln in chunk)


def _job_header(chunk: List[str], used: Set[int]) -> Dict:
    first = chunk[0]
    job = dict(EXPERIENCE_ENTRY)
    if m := AT_HEADER.match(first):
        job["title"], job["companyName"] = m.group(1).strip(), m.group(2).strip()
        job["date"] = (m.group(3) or "").strip()
    elif "|" in first:
        parts = [p.strip() for p in first.split("|")]
        job["title"], job["companyName"] = parts[0], parts[1]
        for extra in parts[2:]:
            if YEAR.search(extra) and not job["date"]:
                job["date"] = extra
            elif extra and not job["companyLocation"]:
                job["companyLocation"] = extra
        if m := DATE_RANGE.search(job["companyName"]):
            job["date"] = job["date"] or m.group()
            job["companyName"] = tidy(job["companyName"].replace(m.group(), ""))
    elif "," in first:
        parts = [p.strip() for p in first.split(",")]
        job["title"], job["companyName"] = parts[0], parts[1]
        if len(parts) > 2:
            rest = ", ".join(parts[2:])
            if YEAR.search(rest):
                job["date"] = rest
            else:
                job["companyLocation"] = rest
    else:
        job["title"] = first
        second = chunk[1] if len(chunk) > 1 and not is_bullet(chunk[1]) else ""
        if second and (m := DATE_RANGE.search(second)) and tidy(second.replace(m.group(), "")):
            job["date"] = m.group()
            job["companyName"] = tidy(second.replace(m.group(), ""))
            used.add(1)
        elif second and YEAR.search(second):
            job["date"] = second
            used.add(1)
            if len(chunk) > 2 and not is_bullet(chunk[2]) and not LOCATION_LINE.match(chunk[2]):
                job["companyName"] = chunk[2]
                used.add(2)
        elif second:
            job["companyName"] = second
            used.add(1)
    return job


def _bare_seniority(line: str) -> bool:
    # "Senior Engineer" restated under the header, not a sentence of body text
    return bool(SENIORITY.match(line)) and len(line.split()) <= 3


def _job(chunk: List[str]) -> Dict:
    used = {0}
    job = _job_header(chunk, used)

    if not job["date"]:
        for idx, ln in enumerate(chunk):
            if is_bullet(ln):
                continue
            if m := DATE_RANGE.search(ln):
                job["date"] = m.group()
                for key in ("title", "companyName"):
                    if job["date"] in job[key]:
                        job[key] = tidy(job[key].replace(job["date"], ""))
                if DATE_ONLY.match(ln):
                    used.add(idx)
                break
            if idx not in used and YEAR.search(ln) and len(YEAR.sub("", ln).split()) <= 2:
                job["date"] = ln
                used.add(idx)
                break
    elif job["date"] in job["title"]:
        job["title"] = tidy(job["title"].replace(job["date"], ""))

    if not job["companyLocation"]:
        for idx, ln in enumerate(chunk):
            if idx not in used and LOCATION_LINE.match(ln):
                job["companyLocation"] = ln
                used.add(idx)
                break

    bullets: List[str] = []
    for idx, ln in enumerate(chunk[1:], 1):
        if is_bullet(ln):
            bullets.append(strip_bullet(ln))
        elif bullets and idx not in used and not DATE_ONLY.match(ln):
            # wrapped bullet text continues on the next line
            bullets[-1] = f"{bullets[-1]} {ln}"
    if not bullets:
        meta = {job["companyName"], job["date"], job["companyLocation"]}
        bullets = [
            ln for idx, ln in enumerate(chunk[1:], 1)
            if idx not in used and ln not in meta and not _bare_seniority(ln)
        ]
    job["accomplishment"] = "\n".join(b for b in bullets if b)
    return job


def parse_experience(lines: List[str]) -> List[Dict]:
    """
    One entry per blank-line separated block, and a new entry wherever a
    line looks like a job header (leading year range, "Title at Company",
    "Title | Company", seniority keyword).
    """
    jobs = [_job(chunk) for chunk in _split_entries(lines, _starts_job)]
    logger.debug("experience: %d entries", len(jobs))
    return jobs


def _edu_kind(line: str) -> Optional[str]:
    if DEGREE_WORD.search(line):
        return "degree"
    if INSTITUTION_WORD.search(line):
        return "institution"
    return None


def _starts_school(line: str, chunk: List[str]) -> bool:
    kind = _edu_kind(line)
    return kind is not None and any(_edu_kind(ln) == kind for ln in chunk)


def _second_line(chunk: List[str]) -> Optional[int]:
    """Index of the line paired with the first one; a bare year line is skipped over."""
    for idx in (1, 2):
        if idx >= len(chunk):
            return None
        ln = chunk[idx]
        if is_bullet(ln) or LOCATION_LINE.match(ln):
            return None
        if YEAR_SPAN.fullmatch(ln.strip("()")):
            continue
        return idx
    return None


def _school(chunk: List[str]) -> Dict:
    edu = dict(EDUCATION_ENTRY)
    used = {0}
    first = chunk[0]
    second_idx = _second_line(chunk)
    second = chunk[second_idx] if second_idx is not None else ""
    kind = _edu_kind(first)

    if kind and "," in first and (not second or INSTITUTION_WORD.search(first.split(",", 1)[1])):
        # "B.S. Computer Science, MIT, 2019" on a single line
        parts = [p.strip() for p in first.split(",")]
        if kind == "degree":
            edu["degree"], edu["institution"] = parts[0], parts[1]
        else:
            edu["institution"], edu["degree"] = parts[0], parts[1]
        rest = ", ".join(parts[2:])
        if rest and not YEAR.search(rest):
            edu["location"] = rest
    elif kind == "degree":
        edu["degree"], edu["institution"] = first, second
    elif kind == "institution":
        edu["institution"], edu["degree"] = first, second
    elif len(first) < 50 or "," not in first:
        edu["degree"], edu["institution"] = first, second
    else:
        parts = [p.strip() for p in first.split(",")]
        edu["degree"], edu["institution"] = parts[0], parts[1]
    if second and second in (edu["degree"], edu["institution"]):
        used.add(second_idx)

    for idx, ln in enumerate(chunk):
        if is_bullet(ln):
            continue
        if m := YEAR_SPAN.search(ln):
            edu["duration"] = m.group()
            rest = tidy(ln.replace(m.group(), ""))
            if idx > 0 and not rest:
                used.add(idx)
            elif rest and LOCATION_LINE.match(rest) and rest not in (edu["degree"], edu["institution"]):
                edu["location"] = edu["location"] or rest
                used.add(idx)
            break
    if edu["duration"]:
        for key in ("degree", "institution"):
            if edu["duration"] in edu[key]:
                edu[key] = tidy(edu[key].replace(edu["duration"], ""))

    if not edu["location"]:
        for idx, ln in enumerate(chunk):
            if idx not in used and ln not in (edu["degree"], edu["institution"]) and LOCATION_LINE.match(ln):
                edu["location"] = ln
                used.add(idx)
                break

    desc = [strip_bullet(ln) for idx, ln in enumerate(chunk) if idx > 0 and idx not in used]
    edu["description"] = "\n".join(d for d in desc if d)
    return edu


def parse_education(lines: List[str]) -> List[Dict]:
    schools = [_school(chunk) for chunk in _split_entries(lines, _starts_school)]
    logger.debug("education: %d entries", len(schools))
    return schools


# ───────────────────────────────────────── languages ──
def _language(text: str) -> Optional[Dict]:
    if m := LEVEL_SPLIT.match(text):
        name, level = m.group(1).strip(), m.group(2).strip()
    elif m := LEVEL_WORD.match(text):
        name, level = m.group(1).strip(), m.group(2).strip()
    else:
        name, level = text.strip(), ""
    if not name:
        return None
    return dict(LANGUAGE_ENTRY, name=name, level=level, dots=dots_for(level))


def parse_languages(lines: List[str]) -> List[Dict]:
    langs = []
    for ln in lines:
        for part in MENTION_SPLIT.split(strip_bullet(ln)):
            if part.strip() and (lang := _language(part.strip())):
                langs.append(lang)
    return langs


# ───────────────────────────────────────── certifications ──
def _certification(line: str) -> Dict:
    parts = [p.strip() for p in line.split(",") if p.strip()]
    if 2 <= len(parts) <= 3:
        cert = dict(CERTIFICATION_ENTRY, name=parts[0])
        for part in parts[1:]:
            if BARE_YEAR.match(part) and not cert["date"]:
                cert["date"] = part
            elif not cert["issuer"]:
                cert["issuer"] = part
        return cert
    if m := TRAILING_YEAR.search(line):
        return dict(CERTIFICATION_ENTRY, name=tidy(line[: m.start()]), date=m.group(1))
    return dict(CERTIFICATION_ENTRY, name=line)


def parse_certifications(lines: List[str]) -> List[Dict]:
    return [_certification(strip_bullet(ln)) for ln in lines if strip_bullet(ln)]


# ───────────────────────────────────────── projects ──
def _project_header(line: str) -> bool:
    if is_bullet(line) or URL.match(line):
        return False
    return len(line) < 100 or line[:1].isupper()


def parse_projects(lines: List[str]) -> List[Dict]:
    """
    A plain (non-bullet) line opens a project; bullets and links below it
    form the description.  Bullets with no project above them stand alone.
    """
    projects: List[Dict] = []
    current: Optional[Dict] = None
    for ln in lines:
        ln = ln.strip()
        if not ln:
            continue
        if _project_header(ln):
            current = {"name": ln, "description": []}
            projects.append(current)
        elif current is not None:
            current["description"].append(strip_bullet(ln))
        else:
            projects.append({"name": strip_bullet(ln), "description": []})
    return [
        dict(PROJECT_ENTRY, name=p["name"], description="\n".join(d for d in p["description"] if d))
        for p in projects
        if p["name"]
    ]


PARSERS = MappingProxyType({
    "summary": parse_summary,
    "skills": parse_skills,
    "experience": parse_experience,
    "education": parse_education,
    "languages": parse_languages,
    "certifications": parse_certifications,
    "projects": parse_projects,
})
