import sys
import unittest
from pathlib import Path

from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_ats.schemas.resume import ResumeDocument, WorkEntry, unique_casefold


class ResumeModelTests(unittest.TestCase):
    def test_accepts_camel_case_payload(self):
        document = ResumeDocument.model_validate(
            {
                "personalInfo": {"fullName": "Jane Doe", "email": "jane@x.com", "linkedInUrl": "linkedin.com/in/jane"},
                "workHistory": [
                    {
                        "title": "Engineer",
                        "company": "Acme",
                        "startDate": "2020-01",
                        "endDate": "2022-06",
                        "achievements": ["Built things"],
                    }
                ],
                "targetJobDescription": "Python developer",
            }
        )
        self.assertEqual(document.personal_info.full_name, "Jane Doe")
        self.assertEqual(document.personal_info.linked_in_url, "linkedin.com/in/jane")
        self.assertEqual(document.work_history[0].start_date, "2020-01")
        self.assertEqual(document.target_job_description, "Python developer")
        self.assertTrue(document.is_scorable)

    def test_serializes_with_camel_case_aliases(self):
        document = ResumeDocument(personal_info={"full_name": "Jane", "email": "jane@x.com"})
        payload = document.model_dump(by_alias=True)
        self.assertIn("personalInfo", payload)
        self.assertIn("fullName", payload["personalInfo"])
        self.assertIn("workHistory", payload)

    def test_start_after_end_is_rejected(self):
        with self.assertRaises(ValidationError):
            WorkEntry(title="Engineer", company="Acme", start_date="2023-05", end_date="2021-01")

    def test_invalid_month_format_is_rejected(self):
        with self.assertRaises(ValidationError):
            WorkEntry(title="Engineer", company="Acme", start_date="May 2021")

    def test_current_role_drops_end_date(self):
        entry = WorkEntry(title="Engineer", company="Acme", start_date="2021-01", end_date="2020-01", is_current=True)
        self.assertIsNone(entry.end_date)

    def test_blank_dates_become_none(self):
        entry = WorkEntry(title="Engineer", company="Acme", start_date="  ", end_date="")
        self.assertIsNone(entry.start_date)
        self.assertIsNone(entry.end_date)

    def test_skills_collapse_case_insensitive_duplicates(self):
        document = ResumeDocument(skills=["Python", "python", " PYTHON ", "SQL", ""])
        self.assertEqual(document.skills, ["Python", "SQL"])

    def test_long_summary_is_accepted(self):
        document = ResumeDocument(summary="x" * 900)
        self.assertEqual(len(document.summary), 900)

    def test_missing_identity_is_not_scorable(self):
        self.assertFalse(ResumeDocument().is_scorable)

    def test_corpus_text_includes_loose_sections(self):
        document = ResumeDocument.model_validate(
            {
                "summary": "Backend engineer",
                "projects": [{"name": "Ledger", "description": "Kafka pipeline", "stack": "Go"}],
                "certifications": [{"name": "AWS Solutions Architect"}],
            }
        )
        corpus = document.corpus_text()
        self.assertIn("Backend engineer", corpus)
        self.assertIn("Kafka pipeline", corpus)
        self.assertIn("Go", corpus)
        self.assertIn("AWS Solutions Architect", corpus)

    def test_unique_casefold_keeps_first_spelling(self):
        self.assertEqual(unique_casefold(["React", "react", "REACT  Native", "react native"]), ["React", "REACT Native"])


if __name__ == "__main__":
    unittest.main()
