import sys
import unittest
from dataclasses import replace
from pathlib import Path
from unittest import mock

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumeiq.analysis import fallback  # noqa: E402
from resumeiq.analysis.fallback import analyze_resume_fallback, default_unknown_role_match  # noqa: E402
from resumeiq.core.config import settings  # noqa: E402

SOFTWARE_RESUME = "Developer experienced with JavaScript and Git for many years at a small company."


def _filler(words: int) -> str:
    return " ".join(["alpha"] * words)


class FallbackAnalysisTests(unittest.TestCase):
    def test_known_role_gap_analysis(self):
        result = analyze_resume_fallback(SOFTWARE_RESUME, "Software Engineer")

        self.assertEqual(result.job_title, "Software Engineer")
        self.assertEqual(result.skills_to_acquire, ["TypeScript", "React", "Node.js", "REST APIs", "Algorithms"])
        self.assertEqual(
            result.suggested_skills,
            ["Docker", "AWS", "GraphQL", "Kubernetes", "CI/CD", "System Design"],
        )
        self.assertEqual(result.job_match, 15)
        self.assertEqual(result.current_skills, ["JavaScript", "Java", "Git"])
        self.assertEqual(result.score, 53)
        self.assertEqual(result.suited_roles, ["Software Engineer"])
        self.assertEqual(len(result.strengths), 2)
        self.assertEqual(len(result.improvements), 6)
        self.assertFalse(result.is_ai_powered)
        self.assertEqual(result.analysis_method, "fallback")

    def test_no_job_title_leaves_match_empty(self):
        result = analyze_resume_fallback(_filler(40), "   ")

        self.assertIsNone(result.job_match)
        self.assertEqual(result.skills_to_acquire, [])
        self.assertEqual(
            result.suggested_skills,
            ["JavaScript", "TypeScript", "React", "Node.js", "Python", "Java", "SQL", "HTML/CSS"],
        )
        self.assertEqual(result.current_skills, [])
        self.assertEqual(result.score, 50)
        self.assertEqual(result.suited_roles, ["General Administrative Role", "Technical Support"])
        self.assertEqual(result.job_title, "   ")

    def test_suggestions_skip_detected_skills_without_title(self):
        result = analyze_resume_fallback(SOFTWARE_RESUME + " " + _filler(10), "")
        self.assertNotIn("JavaScript", result.suggested_skills)
        self.assertNotIn("Git", result.suggested_skills)
        self.assertEqual(result.suggested_skills[:3], ["TypeScript", "React", "Node.js"])

    def test_unknown_role_uses_injected_match(self):
        result = analyze_resume_fallback(SOFTWARE_RESUME, "Marine Biologist", unknown_role_match=lambda: 55)

        self.assertEqual(result.job_match, 55)
        self.assertEqual(
            result.skills_to_acquire,
            ["Domain-specific knowledge", "Industry certifications", "Relevant tools & software"],
        )
        self.assertEqual(
            result.suggested_skills,
            ["Communication", "Project Management", "Data-driven decision making"],
        )

    def test_unknown_role_match_is_clamped(self):
        result = analyze_resume_fallback(SOFTWARE_RESUME, "Marine Biologist", unknown_role_match=lambda: 250)
        self.assertEqual(result.job_match, 100)

    def test_unknown_role_default_is_random_in_range(self):
        random_settings = replace(settings, fallback_unknown_role_mode="random")
        with mock.patch.object(fallback, "settings", random_settings):
            source = default_unknown_role_match()
            for _ in range(50):
                self.assertTrue(40 <= source() < 70)

    def test_unknown_role_fixed_mode(self):
        fixed_settings = replace(settings, fallback_unknown_role_mode="fixed", fallback_unknown_role_match=61)
        with mock.patch.object(fallback, "settings", fixed_settings):
            result = analyze_resume_fallback(SOFTWARE_RESUME, "Marine Biologist")
        self.assertEqual(result.job_match, 61)

    def test_score_and_feedback_scale_with_length(self):
        long_result = analyze_resume_fallback(_filler(500), "")
        self.assertEqual(long_result.score, 95)
        self.assertEqual(len(long_result.strengths), 6)
        self.assertEqual(len(long_result.improvements), 2)

        mid_result = analyze_resume_fallback(_filler(140), "")
        self.assertEqual(mid_result.score, 62)
        self.assertEqual(len(mid_result.strengths), 4)
        self.assertEqual(len(mid_result.improvements), 4)

    def test_score_floor(self):
        self.assertGreaterEqual(analyze_resume_fallback("x", "").score, 30)

    def test_caps_hold_for_skill_dense_resume(self):
        text = (
            "JavaScript TypeScript React Node.js Python Java SQL HTML CSS Git Docker AWS GraphQL REST "
            "Machine Learning Kubernetes CI/CD Agile Figma PostgreSQL Redis Next.js Vue Angular Tailwind "
            "Linux TensorFlow PyTorch Data Statistics Pandas NumPy Excel Tableau Product Stakeholder User "
            "Wireframing System Design api server database microservices security network cloud azure gcp terraform"
        )
        result = analyze_resume_fallback(text, "Backend Developer")

        self.assertEqual(len(result.current_skills), 12)
        self.assertLessEqual(len(result.suited_roles), 6)
        self.assertEqual(result.job_match, 100)
        self.assertEqual(result.skills_to_acquire, [])
        self.assertEqual(result.suggested_skills, [])

    def test_same_input_gives_same_output(self):
        first = analyze_resume_fallback(SOFTWARE_RESUME, "Frontend Developer")
        second = analyze_resume_fallback(SOFTWARE_RESUME, "Frontend Developer")
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
