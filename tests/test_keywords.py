import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_ats.schemas.resume import ResumeDocument
from resume_ats.scoring.keywords import evaluate_keywords, extract_keywords
from resume_ats.scoring.utils import stem, to_score


class KeywordExtractionTests(unittest.TestCase):
    def test_short_posting_keeps_every_term_in_order(self):
        self.assertEqual(extract_keywords("Python SQL AWS"), ["Python", "SQL", "AWS"])

    def test_frequency_ranks_before_position(self):
        keywords = extract_keywords("Docker experience. Kubernetes clusters. Kubernetes operators. Kubernetes upgrades.")
        self.assertEqual(keywords[0], "Kubernetes")
        self.assertIn("Docker", keywords)

    def test_repeated_phrase_absorbs_its_words(self):
        text = "Strong stakeholder communication. Stakeholder communication across teams."
        keywords = extract_keywords(text)
        self.assertIn("stakeholder communication", [item.lower() for item in keywords])
        self.assertNotIn("communication", [item.lower() for item in keywords])

    def test_known_phrase_kept_after_single_mention(self):
        keywords = [item.lower() for item in extract_keywords("You will own machine learning pipelines in Python.")]
        self.assertIn("machine learning", keywords)

    def test_stop_words_and_generic_words_are_dropped(self):
        keywords = [item.lower() for item in extract_keywords("The ideal candidate has strong experience with the Go toolchain.")]
        for word in ("the", "ideal", "candidate", "strong", "experience", "with"):
            self.assertNotIn(word, keywords)

    def test_limit_is_respected(self):
        text = " ".join(f"tool{index}" for index in range(60))
        self.assertEqual(len(extract_keywords(text)), 40)
        self.assertEqual(len(extract_keywords(text, limit=5)), 5)

    def test_empty_posting_yields_nothing(self):
        self.assertEqual(extract_keywords(""), [])
        self.assertEqual(extract_keywords("   \n "), [])


class KeywordMatchTests(unittest.TestCase):
    def test_no_target_returns_neutral_score(self):
        result = evaluate_keywords(ResumeDocument(skills=["Python"]), "")
        self.assertEqual(result.score, 40)
        self.assertFalse(result.computed)
        self.assertEqual(result.missing_keywords, [])

    def test_two_of_three_keywords_matched(self):
        document = ResumeDocument(skills=["Python", "SQL"])
        result = evaluate_keywords(document, "Python SQL AWS")
        self.assertTrue(result.computed)
        self.assertEqual(result.score, 67)
        self.assertEqual(result.matched_keywords, ["Python", "SQL"])
        self.assertEqual(result.missing_keywords, ["AWS"])

    def test_explicit_keywords_take_precedence_over_posting(self):
        document = ResumeDocument(skills=["Terraform"])
        result = evaluate_keywords(document, "Python SQL AWS", ["Terraform", "terraform"])
        self.assertEqual(result.candidates, ["Terraform"])
        self.assertEqual(result.score, 100)

    def test_document_target_fields_are_used_when_arguments_missing(self):
        document = ResumeDocument(skills=["Python"], target_job_description="Python Rust")
        result = evaluate_keywords(document)
        self.assertEqual(result.candidates, ["Python", "Rust"])
        self.assertEqual(result.score, 50)

    def test_match_is_case_insensitive_and_word_bounded(self):
        document = ResumeDocument(summary="Shipped javascript apps and java services")
        result = evaluate_keywords(document, target_keywords=["JavaScript", "Java", "Scala"])
        self.assertEqual(result.matched_keywords, ["JavaScript", "Java"])
        self.assertEqual(result.missing_keywords, ["Scala"])

    def test_synonyms_count_as_variant_matches(self):
        document = ResumeDocument(skills=["k8s", "Amazon Web Services"])
        result = evaluate_keywords(document, target_keywords=["Kubernetes", "AWS"])
        self.assertEqual(result.matched_keywords, ["Kubernetes", "AWS"])
        self.assertEqual(result.variant_matches, ["Kubernetes", "AWS"])

    def test_morphological_variants_match(self):
        document = ResumeDocument(summary="Managed delivery of the platform roadmap")
        result = evaluate_keywords(document, target_keywords=["Management"])
        self.assertEqual(result.matched_keywords, ["Management"])

    def test_adding_a_keyword_never_lowers_the_score(self):
        posting = "Python SQL AWS Docker Kafka"
        document = ResumeDocument(skills=["Python"])
        before = evaluate_keywords(document, posting).score
        after = evaluate_keywords(document.model_copy(update={"skills": ["Python", "Kafka"]}), posting).score
        self.assertGreaterEqual(after, before)


class ScoringUtilsTests(unittest.TestCase):
    def test_stem_groups_manage_variants(self):
        self.assertEqual(stem("manage"), stem("managed"))
        self.assertEqual(stem("managed"), stem("management"))
        self.assertEqual(stem("process"), "process")

    def test_to_score_rounds_half_up_and_clamps(self):
        self.assertEqual(to_score(66.5), 67)
        self.assertEqual(to_score(66.49), 66)
        self.assertEqual(to_score(-5), 0)
        self.assertEqual(to_score(140), 100)


if __name__ == "__main__":
    unittest.main()
