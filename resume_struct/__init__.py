"""Résumé text ➜ canonical structured record."""

from .cleaner import normalize
from .extractor import pdf_to_lines, pdf_to_text
from .parser_rule import extract, parse_resume, parse_resume_pdf, parse_resume_rule

__all__ = [
    "extract",
    "normalize",
    "parse_resume",
    "parse_resume_pdf",
    "parse_resume_rule",
    "pdf_to_lines",
    "pdf_to_text",
]
