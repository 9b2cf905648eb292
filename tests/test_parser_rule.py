"""
End-to-end tests for the rule-based pipeline.
"""

import logging
from unittest.mock import patch

from resume_struct import extract, parse_resume, parse_resume_pdf, parse_resume_rule
from resume_struct.llm_client import LLMError
from resume_struct.schema_resume import blank_resume

SAMPLE = "\n".join([
    "Jane Doe",
    "Data Analyst",
    "jane@mail.com",
    "Analyst with 5 years of experience.",
    "SKILLS",
    "Python, SQL",
])


class TestExtract:
    """Lines in, canonical record out."""

    def test_full_resume(self):
        record = extract([
            "JOHN SMITH",
            "SENIOR ENGINEER",
            "john@x.com",
            "EXPERIENCE",
            "Engineer at Acme (2019-2022)",
            "- Built X",
            "- Led Y",
            "EDUCATION",
            "B.S. Computer Science",
            "MIT",
            "2015-2019",
        ])

        assert record["name"] == "John Smith"
        assert record["role"] == "Senior Engineer"
        assert record["email"] == "john@x.com"
        assert record["summary"] == ""
        assert record["experience"] == [{
            "title": "Engineer",
            "companyName": "Acme",
            "date": "2019-2022",
            "companyLocation": "",
            "accomplishment": "Built X\nLed Y",
        }]
        assert record["education"] == [{
            "degree": "B.S. Computer Science",
            "institution": "MIT",
            "duration": "2015-2019",
            "location": "",
            "description": "",
        }]

    def test_empty_input(self):
        assert extract([]) == blank_resume()
        assert extract("") == blank_resume()
        assert parse_resume_rule("") == blank_resume()
        assert parse_resume_rule("\n\n   \n") == blank_resume()

    def test_contact_lines_kept_out_of_summary(self):
        record = parse_resume_rule(SAMPLE)
        assert record["name"] == "Jane Doe"
        assert record["role"] == "Data Analyst"
        assert record["summary"] == "Analyst with 5 years of experience."
        assert record["skills"] == [{"category": "Skills", "items": ["Python", "SQL"]}]

    def test_repeated_sections_are_merged(self):
        record = extract("SKILLS\nPython\nEXPERIENCE\nEngineer at Acme (2019-2022)\n- Built X\nSKILLS\nGo")
        assert [g["items"] for g in record["skills"]] == [["Python"], ["Go"]]
        assert len(record["experience"]) == 1

    def test_draft_fills_gaps_only(self):
        draft = {"summary": "draft summary", "name": "Other", "certifications": [{"name": "CKA"}]}
        record = parse_resume_rule(SAMPLE, draft)
        assert record["summary"] == "Analyst with 5 years of experience."
        assert record["name"] == "Jane Doe"
        assert record["certifications"] == [{"name": "CKA", "issuer": "", "date": ""}]

    def test_extract_is_deterministic(self):
        assert parse_resume_rule(SAMPLE) == parse_resume_rule(SAMPLE)

    def test_headed_projects_keep_job_shaped_names(self):
        record = extract(["Jane Doe", "PROJECTS", "Developer Portal", "- Built with React", "Chat Bot", "- Did things"])
        assert record["projects"] == [
            {"name": "Developer Portal", "description": "Built with React"},
            {"name": "Chat Bot", "description": "Did things"},
        ]
        assert record["experience"] == []

    def test_headed_skills_keep_their_category(self):
        record = extract(["Jane Doe", "SKILLS", "Developer Tools:", "- Git", "- Docker"])
        assert record["skills"] == [{"category": "Developer Tools", "items": ["Git", "Docker"]}]
        assert record["experience"] == []

    def test_headed_certifications_stay_certifications(self):
        record = extract(["Jane Doe", "CERTIFICATIONS", "PMP, PMI, 2019", "Lead Auditor, BSI, 2020"])
        assert record["certifications"] == [
            {"name": "PMP", "issuer": "PMI", "date": "2019"},
            {"name": "Lead Auditor", "issuer": "BSI", "date": "2020"},
        ]
        assert record["experience"] == []


class TestParseResume:
    """Optional LLM draft with fallback."""

    @patch("resume_struct.parser_rule.parse_resume_llm")
    def test_draft_used_when_enabled(self, mock_llm):
        mock_llm.return_value = {"certifications": [{"name": "CKA", "issuer": "CNCF"}]}
        record = parse_resume(SAMPLE, use_llm=True)

        mock_llm.assert_called_once_with(SAMPLE)
        assert record["certifications"] == [{"name": "CKA", "issuer": "CNCF", "date": ""}]

    @patch("resume_struct.parser_rule.parse_resume_llm")
    def test_llm_failure_falls_back(self, mock_llm, caplog):
        mock_llm.side_effect = LLMError("connection refused")
        with caplog.at_level(logging.WARNING, logger="resume_struct.parser_rule"):
            record = parse_resume(SAMPLE, use_llm=True)

        assert record == parse_resume_rule(SAMPLE)
        assert any("local heuristics" in r.getMessage() for r in caplog.records)

    @patch("resume_struct.parser_rule.parse_resume_llm")
    def test_missing_api_key_falls_back(self, mock_llm):
        mock_llm.side_effect = ValueError("OpenAI API key is required.")
        assert parse_resume(SAMPLE, use_llm=True) == parse_resume_rule(SAMPLE)

    @patch("resume_struct.parser_rule.parse_resume_llm")
    def test_llm_not_called_when_disabled(self, mock_llm):
        parse_resume(SAMPLE, use_llm=False)
        mock_llm.assert_not_called()

    @patch("resume_struct.parser_rule.pdf_to_text")
    def test_pdf_entry_point(self, mock_pdf):
        mock_pdf.return_value = SAMPLE
        record = parse_resume_pdf("resume.pdf", use_llm=False)

        mock_pdf.assert_called_once_with("resume.pdf")
        assert record == parse_resume_rule(SAMPLE)
