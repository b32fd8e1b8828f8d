import sys
import unittest
from pathlib import Path
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_ats.ai.types import CompletionError
from resume_ats.main import app
from resume_ats.services.completion import CompletionService, get_completion_service


class AiApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        self.ai_client = MagicMock()
        self.service = CompletionService(self.ai_client, model="test-model")
        app.dependency_overrides[get_completion_service] = lambda: self.service

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_keywords_from_ai(self):
        self.ai_client.complete.return_value = '{"keywords": ["Python", "Distributed Systems"]}'
        response = self.client.post("/v1/ai/keywords", json={"jobDescription": "Python distributed systems"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"keywords": ["Python", "Distributed Systems"], "source": "ai"})

    def test_keywords_fall_back_when_ai_fails(self):
        self.ai_client.complete.side_effect = CompletionError("down", code="llm_unavailable")
        response = self.client.post("/v1/ai/keywords", json={"jobDescription": "Python SQL AWS"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"keywords": ["Python", "SQL", "AWS"], "source": "heuristic"})

    def test_keywords_require_context(self):
        response = self.client.post("/v1/ai/keywords", json={"existingKeywords": ["Python"]})
        self.assertEqual(response.status_code, 422)

    def test_bullets_contract(self):
        self.ai_client.complete.return_value = '{"bulletPoints": ["Led A", "Built B", "Cut C", "Grew D", "Won E"]}'
        response = self.client.post(
            "/v1/ai/bullets",
            json={
                "jobTitle": "Backend Engineer",
                "jobDescription": "Own payment APIs",
                "roleHistory": [{"title": "Engineer", "company": "Acme", "responsibilities": ["APIs"]}],
            },
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(len(body["bulletPoints"]), 5)
        self.assertEqual(body["jobTitle"], "Backend Engineer")
        self.assertEqual(body["tailoredFor"], "Own payment APIs")

    def test_invalid_ai_output_is_502(self):
        self.ai_client.complete.return_value = "no json here"
        response = self.client.post(
            "/v1/ai/bullets",
            json={
                "jobTitle": "Backend Engineer",
                "jobDescription": "Own payment APIs",
                "roleHistory": [{"title": "Engineer", "company": "Acme"}],
            },
        )
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["code"], "llm_invalid")

    def test_summary_contract(self):
        self.ai_client.complete.return_value = "Backend engineer with a decade of payments experience."
        response = self.client.post("/v1/ai/summary", json={"jobTitle": "Backend Engineer", "skills": ["Go"]})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"summary": "Backend engineer with a decade of payments experience."})

    def test_linkedin_about_contract(self):
        self.ai_client.complete.return_value = "Backend engineer focused on payments reliability."
        response = self.client.post(
            "/v1/ai/linkedin-about",
            json={"resume": {"personalInfo": {"fullName": "Jane Doe", "email": "jane@x.com"}, "skills": ["Go"]}},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"about": "Backend engineer focused on payments reliability."})

    def test_linkedin_about_requires_resume(self):
        response = self.client.post("/v1/ai/linkedin-about", json={"resumeText": "   "})
        self.assertEqual(response.status_code, 422)

    def test_disabled_ai_is_503(self):
        app.dependency_overrides[get_completion_service] = lambda: CompletionService(None, model="test-model")
        response = self.client.post("/v1/ai/summary", json={"jobTitle": "Backend Engineer"})
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["code"], "llm_disabled")

    def test_rate_limited_provider_is_429(self):
        self.ai_client.complete.side_effect = CompletionError("slow down", code="llm_rate_limited")
        response = self.client.post("/v1/ai/summary", json={"jobTitle": "Backend Engineer"})
        self.assertEqual(response.status_code, 429)


if __name__ == "__main__":
    unittest.main()
