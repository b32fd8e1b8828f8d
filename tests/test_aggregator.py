import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_ats.schemas.resume import ResumeDocument
from resume_ats.scoring import InvalidInputShape, score_resume
from resume_ats.scoring.aggregator import SUGGESTION_NO_TARGET
from resume_ats.scoring.content import ISSUE_NO_BULLETS
from resume_ats.scoring.sections import ISSUE_EDUCATION, ISSUE_WORK

JOB_DESCRIPTION = (
    "Senior Backend Engineer. Python, PostgreSQL and Kubernetes required. "
    "Build distributed systems on AWS. Python services with PostgreSQL storage."
)


def _identity_only() -> dict:
    return {
        "personalInfo": {"fullName": "Jane Doe", "email": "jane@x.com"},
        "workHistory": [],
        "education": [],
        "skills": [],
    }


def _complete() -> dict:
    return {
        "personalInfo": {
            "fullName": "Jane Doe",
            "email": "jane@example.com",
            "phone": "+49 30 1234567",
            "location": "Berlin",
            "title": "Senior Backend Engineer",
        },
        "summary": (
            "Senior Backend Engineer building distributed systems in Python on AWS, "
            "with PostgreSQL storage and Kubernetes in production."
        ),
        "workHistory": [
            {
                "title": "Senior Backend Engineer",
                "company": "Acme",
                "startDate": "2021-02",
                "isCurrent": True,
                "achievements": [
                    "Led a team of 5 engineers, reducing deployment time by 40%",
                    "Migrated 12 Python services to Kubernetes, cutting hosting costs by $80,000",
                ],
            },
            {
                "title": "Backend Engineer",
                "company": "Initech",
                "startDate": "2017-01",
                "endDate": "2021-01",
                "achievements": ["Optimized PostgreSQL queries, improving p95 latency by 60%"],
            },
        ],
        "education": [{"institution": "TU Berlin", "degree": "BSc Computer Science"}],
        "skills": [
            "Python", "PostgreSQL", "Kubernetes", "AWS", "Docker", "Terraform", "Kafka",
            "Redis", "FastAPI", "gRPC", "Linux", "Git", "CI/CD", "Prometheus", "Grafana",
        ],
    }


class ScoreResumeTests(unittest.TestCase):
    def test_repeated_calls_are_identical(self):
        first = score_resume(_complete(), JOB_DESCRIPTION)
        second = score_resume(_complete(), JOB_DESCRIPTION)
        self.assertEqual(first, second)
        self.assertEqual(
            first.model_dump_json(by_alias=True),
            second.model_dump_json(by_alias=True),
        )

    def test_identity_only_document_stays_above_floor(self):
        report = score_resume(_identity_only())
        self.assertGreaterEqual(report.overall_score, 20)
        self.assertLessEqual(report.overall_score, 100)
        self.assertEqual(report.pass_rate, "low")

    def test_complete_document_reaches_ceiling(self):
        report = score_resume(_complete(), JOB_DESCRIPTION)
        self.assertGreaterEqual(report.overall_score, 90)
        self.assertEqual(report.pass_rate, "high")
        self.assertEqual(report.missing_keywords, [])

    def test_scenario_empty_sections(self):
        report = score_resume(_identity_only(), "")
        self.assertEqual(report.breakdown.keywords, 40)
        self.assertFalse(report.keyword_match_computed)
        self.assertIn(ISSUE_WORK, report.issues)
        self.assertIn(ISSUE_EDUCATION, report.issues)
        self.assertIn(ISSUE_NO_BULLETS, report.issues)
        self.assertIn(SUGGESTION_NO_TARGET, report.suggestions)

    def test_scenario_weak_bullet(self):
        payload = _identity_only()
        payload["workHistory"] = [{"title": "Lead", "company": "Acme", "achievements": ["Managed a team"]}]
        report = score_resume(payload)
        self.assertEqual(report.weak_bullets, ["Managed a team"])
        self.assertEqual(report.breakdown.content, 10)
        self.assertEqual(report.breakdown.impact, 10)

    def test_scenario_strong_bullet(self):
        bullet = "Led a team of 5 engineers, reducing deployment time by 40%"
        payload = _identity_only()
        payload["workHistory"] = [{"title": "Lead", "company": "Acme", "achievements": [bullet]}]
        report = score_resume(payload)
        self.assertEqual(report.strong_bullet_examples, [bullet])
        self.assertEqual(report.breakdown.content, 83)
        self.assertEqual(report.breakdown.impact, 100)
        self.assertEqual(report.weak_bullets, [])

    def test_more_bullets_raise_content_but_not_impact(self):
        bullet = "Led a team of 5 engineers, reducing deployment time by 40%"
        single = _identity_only()
        single["workHistory"] = [{"title": "Lead", "company": "Acme", "achievements": [bullet]}]
        eight = _identity_only()
        eight["workHistory"] = [{"title": "Lead", "company": "Acme", "achievements": [bullet] * 8}]
        few = score_resume(single).breakdown
        many = score_resume(eight).breakdown
        self.assertLess(few.content, many.content)
        self.assertEqual(many.content, 100)
        self.assertEqual(few.impact, many.impact)

    def test_minimal_complete_document_reaches_ceiling(self):
        payload = _identity_only()
        payload["workHistory"] = [
            {
                "title": "Engineer",
                "company": "Acme",
                "achievements": ["Led a team of 5 engineers, reducing deployment time by 40%"],
            }
        ]
        payload["education"] = [{"institution": "TU Berlin", "degree": "BSc Computer Science"}]
        payload["skills"] = ["Python"]
        report = score_resume(payload, target_keywords=["Python"])
        self.assertEqual(report.breakdown.keywords, 100)
        self.assertEqual(report.breakdown.formatting, 65)
        self.assertEqual(report.breakdown.content, 83)
        self.assertEqual(report.breakdown.impact, 100)
        self.assertGreaterEqual(report.overall_score, 90)

    def test_scenario_partial_keyword_match(self):
        payload = _identity_only()
        payload["skills"] = ["Python", "SQL"]
        report = score_resume(payload, "Python SQL AWS")
        self.assertEqual(report.breakdown.keywords, 67)
        self.assertEqual(report.missing_keywords, ["AWS"])
        self.assertEqual(report.matched_keywords, ["Python", "SQL"])

    def test_adding_posting_keyword_to_skills_is_monotonic(self):
        base = _identity_only()
        base["skills"] = ["Python"]
        improved = _identity_only()
        improved["skills"] = ["Python", "Kubernetes"]
        before = score_resume(base, JOB_DESCRIPTION).breakdown.keywords
        after = score_resume(improved, JOB_DESCRIPTION).breakdown.keywords
        self.assertGreaterEqual(after, before)

    def test_keyword_sets_are_order_independent(self):
        document = ResumeDocument.model_validate(_complete())
        first = score_resume(document, target_keywords={"Python", "Rust", "Go"})
        second = score_resume(document, target_keywords={"Go", "Rust", "Python"})
        self.assertEqual(first, second)

    def test_issues_are_ordered_by_category_weight(self):
        payload = _identity_only()
        payload["workHistory"] = [{"title": "Lead", "company": "Acme", "achievements": ["Managed a team"]}]
        report = score_resume(payload, "Rust Haskell Erlang")
        self.assertTrue(report.issues[0].startswith("Missing important keywords"))
        self.assertGreater(report.issues.index(ISSUE_EDUCATION), 0)

    def test_report_carries_all_metric_insights(self):
        report = score_resume(_complete(), JOB_DESCRIPTION)
        self.assertEqual(set(report.metric_insights), {"keywords", "formatting", "content", "impact"})
        payload = report.model_dump(by_alias=True)
        self.assertIn("overallScore", payload)
        self.assertIn("keywordMatchComputed", payload)

    def test_non_document_input_is_rejected(self):
        with self.assertRaises(InvalidInputShape):
            score_resume("not a resume")
        with self.assertRaises(InvalidInputShape):
            score_resume({"workHistory": "none"})
        with self.assertRaises(InvalidInputShape):
            score_resume(_identity_only(), 42)
        with self.assertRaises(InvalidInputShape):
            score_resume(_identity_only(), None, "Python")

    def test_invalid_shape_reports_validation_errors(self):
        with self.assertRaises(InvalidInputShape) as ctx:
            score_resume({"workHistory": [{"startDate": "2023-05", "endDate": "2021-01"}]})
        self.assertEqual(ctx.exception.code, "invalid_input_shape")
        self.assertTrue(ctx.exception.errors)


if __name__ == "__main__":
    unittest.main()
