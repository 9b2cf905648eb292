import json

# canonical record (empty strings and lists – no placeholders)
RESUME_SCHEMA = {
    "name": "",
    "role": "",
    "phone": "",
    "email": "",
    "linkedin": "",
    "location": "",
    "summary": "",
    "skills": [],
    "experience": [],
    "education": [],
    "languages": [],
    "certifications": [],
    "projects": [],
}

# entry shapes, key order is the output order
SKILL_GROUP = {"category": "", "items": []}
EXPERIENCE_ENTRY = {
    "title": "",
    "companyName": "",
    "date": "",
    "companyLocation": "",
    "accomplishment": "",
}
EDUCATION_ENTRY = {
    "degree": "",
    "institution": "",
    "duration": "",
    "location": "",
    "description": "",
}
LANGUAGE_ENTRY = {"name": "", "level": "", "dots": 3}
CERTIFICATION_ENTRY = {"name": "", "issuer": "", "date": ""}
PROJECT_ENTRY = {"name": "", "description": ""}

STRING_FIELDS = tuple(k for k, v in RESUME_SCHEMA.items() if isinstance(v, str))
LIST_FIELDS = tuple(k for k, v in RESUME_SCHEMA.items() if isinstance(v, list))


def blank_resume() -> dict:
    """Fresh copy of the canonical record; nothing is shared between calls."""
    return json.loads(json.dumps(RESUME_SCHEMA))


def schema_example() -> dict:
    """Record with one sample of every entry shape, used to prompt the LLM."""
    out = blank_resume()
    out["skills"] = [SKILL_GROUP]
    out["experience"] = [EXPERIENCE_ENTRY]
    out["education"] = [EDUCATION_ENTRY]
    out["languages"] = [LANGUAGE_ENTRY]
    out["certifications"] = [CERTIFICATION_ENTRY]
    out["projects"] = [PROJECT_ENTRY]
    return json.loads(json.dumps(out))
