"""
Tests for the per-section field parsers.
"""

import pytest

from resume_struct.fields import (
    dots_for,
    parse_certifications,
    parse_education,
    parse_experience,
    parse_languages,
    parse_projects,
    parse_skills,
    parse_summary,
)


class TestSkills:
    """Skill groups from headers, inline categories and bare lists."""

    def test_header_lines(self):
        skills = parse_skills(["Programming:", "Python, Go, Rust", "Tools:", "Git, Docker"])
        assert skills == [
            {"category": "Programming", "items": ["Python", "Go", "Rust"]},
            {"category": "Tools", "items": ["Git", "Docker"]},
        ]

    def test_inline_categories(self):
        skills = parse_skills(["Languages: Python, Go", "Cloud: AWS"])
        assert skills == [
            {"category": "Languages", "items": ["Python", "Go"]},
            {"category": "Cloud", "items": ["AWS"]},
        ]

    def test_without_headers_single_group(self):
        assert parse_skills(["Python, SQL", "", "Docker"]) == [
            {"category": "Skills", "items": ["Python", "SQL", "Docker"]}
        ]

    def test_all_caps_column_is_one_group(self):
        assert parse_skills(["PYTHON", "SQL"]) == [{"category": "Skills", "items": ["PYTHON", "SQL"]}]


class TestLanguages:
    """Language mentions and proficiency dots."""

    def test_level_formats(self):
        langs = parse_languages(["English (Native)", "Spanish - Advanced", "French"])
        assert langs == [
            {"name": "English", "level": "Native", "dots": 5},
            {"name": "Spanish", "level": "Advanced", "dots": 4},
            {"name": "French", "level": "", "dots": 3},
        ]

    def test_several_mentions_per_line(self):
        langs = parse_languages(["• English (Native), German (B2), Italian basic"])
        assert [(l["name"], l["level"], l["dots"]) for l in langs] == [
            ("English", "Native", 5),
            ("German", "B2", 3),
            ("Italian", "basic", 2),
        ]

    @pytest.mark.parametrize("level", ["", "Native", "weird", "B2", "good", "mother tongue", "x" * 200])
    def test_dots_always_in_range(self, level):
        assert 1 <= dots_for(level) <= 5

    def test_unknown_level_defaults_to_three(self):
        assert dots_for("Klingon-grade") == 3


class TestExperience:
    """Job entries: header shapes and entry splitting."""

    def test_at_header_with_date(self):
        jobs = parse_experience(["Engineer at Acme (2019-2022)", "- Built X", "- Led Y"])
        assert jobs == [{
            "title": "Engineer",
            "companyName": "Acme",
            "date": "2019-2022",
            "companyLocation": "",
            "accomplishment": "Built X\nLed Y",
        }]

    def test_one_entry_per_header(self):
        jobs = parse_experience([
            "Senior Engineer | Globex | 2020 - Present",
            "- Led team",
            "Engineer | Initech | 2018 - 2020",
            "- Wrote code",
        ])
        assert len(jobs) == 2
        assert [(j["title"], j["companyName"], j["date"]) for j in jobs] == [
            ("Senior Engineer", "Globex", "2020 - Present"),
            ("Engineer", "Initech", "2018 - 2020"),
        ]
        assert [j["accomplishment"] for j in jobs] == ["Led team", "Wrote code"]

    def test_header_over_two_lines_with_location(self):
        jobs = parse_experience(["Software Engineer", "Acme Corp, 2019 - 2022", "Cambridge, MA", "- Shipped things"])
        assert jobs == [{
            "title": "Software Engineer",
            "companyName": "Acme Corp",
            "date": "2019 - 2022",
            "companyLocation": "Cambridge, MA",
            "accomplishment": "Shipped things",
        }]

    def test_blank_line_separates_entries(self):
        jobs = parse_experience(["Analyst, Initech", "- Reports", "", "Intern, Hooli", "- Coffee"])
        assert [(j["title"], j["companyName"]) for j in jobs] == [("Analyst", "Initech"), ("Intern", "Hooli")]

    def test_wrapped_bullet_joined(self):
        jobs = parse_experience(["Engineer at Acme (2019-2022)", "- Built a very long", "pipeline for things"])
        assert jobs[0]["accomplishment"] == "Built a very long pipeline for things"

    def test_seniority_sentence_stays_in_entry(self):
        jobs = parse_experience(["Engineer at Acme (2019-2022)", "Lead engineer for the payments platform"])
        assert len(jobs) == 1
        assert jobs[0]["accomplishment"] == "Lead engineer for the payments platform"

    def test_plain_lines_become_accomplishment(self):
        jobs = parse_experience(["Engineer at Acme (2019-2022)", "Maintained the billing service.", "Mentored two interns."])
        assert jobs[0]["accomplishment"] == "Maintained the billing service.\nMentored two interns."

    def test_pipe_header_with_date_inside_company(self):
        jobs = parse_experience(["Data Scientist | Initech 2018 - 2020", "- Built models"])
        assert (jobs[0]["title"], jobs[0]["companyName"], jobs[0]["date"]) == ("Data Scientist", "Initech", "2018 - 2020")

    def test_comma_header_with_location(self):
        jobs = parse_experience(["Analyst, Initech, Austin, TX", "- Reports"])
        assert jobs == [{
            "title": "Analyst",
            "companyName": "Initech",
            "date": "",
            "companyLocation": "Austin, TX",
            "accomplishment": "Reports",
        }]


class TestEducation:
    """Degree/institution pairing and durations."""

    def test_degree_then_institution_then_years(self):
        assert parse_education(["B.S. Computer Science", "MIT", "2015-2019"]) == [{
            "degree": "B.S. Computer Science",
            "institution": "MIT",
            "duration": "2015-2019",
            "location": "",
            "description": "",
        }]

    def test_two_schools(self):
        schools = parse_education([
            "Master of Science in Data Science",
            "Stanford University",
            "2018 - 2020",
            "",
            "Bachelor of Arts, Boston College, 2014",
        ])
        assert [(s["degree"], s["institution"], s["duration"]) for s in schools] == [
            ("Master of Science in Data Science", "Stanford University", "2018 - 2020"),
            ("Bachelor of Arts", "Boston College", "2014"),
        ]

    def test_location_and_description(self):
        assert parse_education([
            "Bachelor of Science in Physics",
            "University of Texas",
            "Austin, TX",
            "2012 - 2016",
            "- Dean's list",
            "- Physics club president",
        ]) == [{
            "degree": "Bachelor of Science in Physics",
            "institution": "University of Texas",
            "duration": "2012 - 2016",
            "location": "Austin, TX",
            "description": "Dean's list\nPhysics club president",
        }]


class TestCertificationsAndProjects:

    def test_certification_shapes(self):
        certs = parse_certifications([
            "- AWS Certified Solutions Architect, Amazon, 2021",
            "CKA 2020",
            "Scrum Master",
        ])
        assert certs == [
            {"name": "AWS Certified Solutions Architect", "issuer": "Amazon", "date": "2021"},
            {"name": "CKA", "issuer": "", "date": "2020"},
            {"name": "Scrum Master", "issuer": "", "date": ""},
        ]

    def test_projects_with_descriptions(self):
        projects = parse_projects([
            "Resume Parser",
            "- Built a parser",
            "https://github.com/x/y",
            "Chat Bot",
            "- Did things",
        ])
        assert projects == [
            {"name": "Resume Parser", "description": "Built a parser\nhttps://github.com/x/y"},
            {"name": "Chat Bot", "description": "Did things"},
        ]

    def test_projects_without_headers(self):
        assert parse_projects(["- Thing one", "- Thing two"]) == [
            {"name": "Thing one", "description": ""},
            {"name": "Thing two", "description": ""},
        ]


def test_summary_joins_lines():
    assert parse_summary(["Builds things.", "", "  Ships them. "]) == "Builds things. Ships them."
