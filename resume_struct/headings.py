"""
Heading synonyms recognised as section titles.

Keys are upper-cased heading variants, values are canonical section ids.
Order matters: fuzzy heading matching walks this table top to bottom and
stops at the first synonym that fits.  To recognise a new heading, add a
line here.
"""

from types import MappingProxyType

SECTION_IDS = (
    "summary",
    "skills",
    "experience",
    "education",
    "languages",
    "certifications",
    "projects",
)

HEADING_SYNONYMS = MappingProxyType({
    "PROFESSIONAL SUMMARY": "summary",
    "SUMMARY": "summary",
    "PROFILE": "summary",
    "ABOUT ME": "summary",
    "OBJECTIVE": "summary",
    "CAREER OBJECTIVE": "summary",
    "PROFESSIONAL PROFILE": "summary",
    "CAREER PROFILE": "summary",
    "PERSONAL STATEMENT": "summary",
    "EXECUTIVE SUMMARY": "summary",

    "SKILLS": "skills",
    "TECHNICAL SKILLS": "skills",
    "CORE COMPETENCIES": "skills",
    "KEY SKILLS": "skills",
    "EXPERTISE": "skills",
    "PROFICIENCIES": "skills",
    "QUALIFICATIONS": "skills",
    "AREAS OF EXPERTISE": "skills",
    "TECHNICAL PROFICIENCIES": "skills",
    "SKILL SET": "skills",

    "EXPERIENCE": "experience",
    "WORK EXPERIENCE": "experience",
    "PROFESSIONAL EXPERIENCE": "experience",
    "EMPLOYMENT HISTORY": "experience",
    "WORK HISTORY": "experience",
    "CAREER HISTORY": "experience",
    "RELEVANT EXPERIENCE": "experience",
    "EMPLOYMENT": "experience",
    "PROFESSIONAL BACKGROUND": "experience",

    "EDUCATION": "education",
    "ACADEMIC BACKGROUND": "education",
    "EDUCATIONAL BACKGROUND": "education",
    "ACADEMIC QUALIFICATIONS": "education",
    "EDUCATIONAL QUALIFICATIONS": "education",
    "ACADEMIC HISTORY": "education",
    "EDUCATIONAL HISTORY": "education",
    "ACADEMIC CREDENTIALS": "education",

    "LANGUAGES": "languages",
    "LANGUAGE PROFICIENCY": "languages",
    "LANGUAGE SKILLS": "languages",
    "FOREIGN LANGUAGES": "languages",

    "CERTIFICATIONS": "certifications",
    "CERTIFICATES": "certifications",
    "PROFESSIONAL CERTIFICATIONS": "certifications",
    "CREDENTIALS": "certifications",
    "LICENSES": "certifications",
    "PROFESSIONAL DEVELOPMENT": "certifications",

    "PROJECTS": "projects",
    "PROJECT EXPERIENCE": "projects",
    "KEY PROJECTS": "projects",
    "PERSONAL PROJECTS": "projects",
    "ACADEMIC PROJECTS": "projects",
    "PROFESSIONAL PROJECTS": "projects",
})


def section_for(heading: str):
    """Exact lookup: case-insensitive, surrounding space and a trailing ":" ignored."""
    key = (heading or "").strip().upper()
    if key.endswith(":"):
        key = key[:-1].strip()
    return HEADING_SYNONYMS.get(key)
