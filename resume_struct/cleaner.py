"""
Shared clean-ups and schema normalisation.

``normalize`` folds up to three sources into one canonical record:

* ``record``  – what the section parsers found locally
* ``contact`` – what the contact extractor found in the header lines
* ``draft``   – an optional, loosely shaped record from a remote service

Which source wins is decided per field by ``FIELD_PRECEDENCE``; the first
source with a non-empty value is taken.  Wrong shapes anywhere are treated
as absent, so the function is total and ``normalize(normalize(x))`` equals
``normalize(x)``.
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Any, Dict, List, Optional

from .fields import DEFAULT_DOTS, level_dots
from .schema_resume import (
    CERTIFICATION_ENTRY,
    EDUCATION_ENTRY,
    EXPERIENCE_ENTRY,
    LANGUAGE_ENTRY,
    LIST_FIELDS,
    PROJECT_ENTRY,
    STRING_FIELDS,
    blank_resume,
)
from .utils import split_items

_LOCAL, _CONTACT, _DRAFT = "local", "contact", "draft"

FIELD_PRECEDENCE = MappingProxyType({
    **{f: (_LOCAL, _CONTACT, _DRAFT) for f in STRING_FIELDS},
    **{f: (_LOCAL, _DRAFT) for f in LIST_FIELDS},
})

# canonical top-level key ➜ accepted spellings, canonical first
TOP_ALIASES = MappingProxyType({
    "name": ("name", "fullName", "full_name"),
    "role": ("role", "headline", "jobTitle", "label"),
    "phone": ("phone", "phoneNumber", "mobile"),
    "email": ("email", "mail"),
    "linkedin": ("linkedin", "linkedinUrl", "linkedin_url"),
    "location": ("location", "address", "city"),
    "summary": ("summary", "objective", "about", "profile"),
    "skills": ("skills",),
    "experience": ("experience", "workExperience", "work"),
    "education": ("education",),
    "languages": ("languages",),
    "certifications": ("certifications", "certificates"),
    "projects": ("projects",),
})
_NESTED_CONTACT = ("contact", "contactInfo", "basics")

EXPERIENCE_ALIASES = {
    "title": ("title", "position", "role", "jobTitle"),
    "companyName": ("companyName", "company", "employer", "organization", "name"),
    "date": ("date", "duration", "dates", "period"),
    "companyLocation": ("companyLocation", "location"),
    "accomplishment": (
        "accomplishment", "description", "bullets", "highlights", "responsibilities", "summary",
    ),
}
EDUCATION_ALIASES = {
    "degree": ("degree", "qualification", "studyType"),
    "institution": ("institution", "school", "university", "college"),
    "duration": ("duration", "date", "dates", "year"),
    "location": ("location",),
    "description": ("description", "bullets", "details", "highlights"),
}
LANGUAGE_ALIASES = {
    "name": ("name", "language"),
    "level": ("level", "proficiency", "fluency"),
}
CERTIFICATION_ALIASES = {
    "name": ("name", "title", "certification"),
    "issuer": ("issuer", "authority", "organization", "issuedBy"),
    "date": ("date", "year", "issued"),
}
PROJECT_ALIASES = {
    "name": ("name", "title"),
    "description": ("description", "bullets", "details", "highlights", "summary"),
}
_MULTILINE = {"accomplishment", "description"}


# ───────────────────────────────────────── casing ──
def title_case(text: str) -> str:
    return " ".join(w[:1].upper() + w[1:].lower() for w in text.split(" "))


def recase_name(name: str) -> str:
    """ALL CAPS or all lower ➜ Title Case; mixed case is left as written."""
    name = (name or "").strip()
    if name and (name == name.upper() or name == name.lower()):
        return title_case(name)
    return name


def recase_role(role: str) -> str:
    role = (role or "").strip()
    if not role or (role != role.upper() and role != role.lower()):
        return role
    if "|" in role:
        return " | ".join(title_case(p.strip()) for p in role.split("|")).strip()
    return title_case(role)


# ───────────────────────────────────────── coercion ──
def _text(value: Any, multiline: bool = False) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        parts = [_text(v) for v in value]
        return ("\n" if multiline else ", ").join(p for p in parts if p)
    return ""


def _first(src: Dict, keys, multiline: bool = False) -> str:
    for key in keys:
        if val := _text(src.get(key), multiline):
            return val
    return ""


def _entry(item: Any, template: Dict, aliases: Dict) -> Dict:
    out = dict(template)
    if isinstance(item, str):
        out[next(iter(template))] = item.strip()
        return out
    if not isinstance(item, dict):
        return out
    for key, keys in aliases.items():
        out[key] = _first(item, keys, key in _MULTILINE)
    return out


def _span(item: Any) -> str:
    """"start - end" out of start/end or startDate/endDate keys."""
    if not isinstance(item, dict):
        return ""
    start = _text(item.get("start") or item.get("startDate"))
    end = _text(item.get("end") or item.get("endDate"))
    return " - ".join(x for x in (start, end) if x)


def _experience(value: Any) -> List[Dict]:
    out = []
    for item in value if isinstance(value, list) else []:
        job = _entry(item, EXPERIENCE_ENTRY, EXPERIENCE_ALIASES)
        job["date"] = job["date"] or _span(item)
        if any(job.values()):
            out.append(job)
    return out


def _education(value: Any) -> List[Dict]:
    out = []
    for item in value if isinstance(value, list) else []:
        edu = _entry(item, EDUCATION_ENTRY, EDUCATION_ALIASES)
        edu["duration"] = edu["duration"] or _span(item)
        field = _text(item.get("fieldOfStudy") or item.get("area")) if isinstance(item, dict) else ""
        if field and field not in edu["degree"]:
            edu["degree"] = f"{edu['degree']} {field}".strip()
        if any(edu.values()):
            out.append(edu)
    return out


def _languages(value: Any) -> List[Dict]:
    out = []
    for item in value if isinstance(value, list) else []:
        lang = _entry(item, LANGUAGE_ENTRY, LANGUAGE_ALIASES)
        if not lang["name"]:
            continue
        dots = level_dots(lang["level"])
        if dots is None:
            given = item.get("dots") if isinstance(item, dict) else None
            valid = isinstance(given, int) and not isinstance(given, bool) and 1 <= given <= 5
            dots = given if valid else DEFAULT_DOTS
        lang["dots"] = dots
        out.append(lang)
    return out


def _certifications(value: Any) -> List[Dict]:
    out = []
    for item in value if isinstance(value, list) else []:
        cert = _entry(item, CERTIFICATION_ENTRY, CERTIFICATION_ALIASES)
        if cert["name"]:
            out.append(cert)
    return out


def _projects(value: Any) -> List[Dict]:
    out = []
    for item in value if isinstance(value, list) else []:
        proj = _entry(item, PROJECT_ENTRY, PROJECT_ALIASES)
        if proj["name"]:
            out.append(proj)
    return out


def _items(value: Any) -> List[str]:
    if isinstance(value, str):
        return split_items(value)
    if isinstance(value, (list, tuple)):
        return [t for t in (_text(v) for v in value) if t]
    return []


def _skills(value: Any) -> List[Dict]:
    """
    Accepts [{"category", "items"}], a flat list of strings, a mix of both,
    or a {category: [items]} mapping.
    """
    if isinstance(value, dict):
        value = [{"category": title_case(str(k).replace("_", " ")), "items": v} for k, v in value.items()]
    if not isinstance(value, list):
        return []
    loose = [v.strip() for v in value if isinstance(v, str) and v.strip()]
    groups = [{"category": "Skills", "items": loose}] if loose else []
    for g in value:
        if isinstance(g, dict):
            groups.append({
                "category": _first(g, ("category", "name", "title")) or "Skills",
                "items": _items(g.get("items", g.get("keywords", g.get("skills")))),
            })
    return [g for g in groups if g["items"]]


_LIST_CLEANERS = MappingProxyType({
    "skills": _skills,
    "experience": _experience,
    "education": _education,
    "languages": _languages,
    "certifications": _certifications,
    "projects": _projects,
})


def _candidates(source: Dict, field: str):
    places = [source]
    if field in STRING_FIELDS:
        places += [source[n] for n in _NESTED_CONTACT if isinstance(source.get(n), dict)]
    for place in places:
        for key in TOP_ALIASES[field]:
            if key in place:
                yield place[key]


def _value(source: Dict, field: str):
    """First usable value for ``field`` in one source, already cleaned."""
    clean = _LIST_CLEANERS.get(field, _text)
    for raw in _candidates(source, field):
        if value := clean(raw):
            return value
    return None


# ───────────────────────────────────────── cleaner ──
def normalize(
    record: Optional[Dict] = None,
    contact: Optional[Dict] = None,
    draft: Optional[Dict] = None,
) -> Dict:
    sources = {
        _LOCAL: record if isinstance(record, dict) else {},
        _CONTACT: contact if isinstance(contact, dict) else {},
        _DRAFT: draft if isinstance(draft, dict) else {},
    }
    out = blank_resume()
    for field, order in FIELD_PRECEDENCE.items():
        for src in order:
            if value := _value(sources[src], field):
                out[field] = value
                break

    out["name"] = recase_name(out["name"])
    out["role"] = recase_role(out["role"])
    return out
