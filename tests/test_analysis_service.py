import asyncio
import sys
import unittest
from dataclasses import replace
from pathlib import Path
from unittest import mock

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumeiq.analysis.errors import RemoteUnavailableError, ValidationError  # noqa: E402
from resumeiq.services import analysis_service  # noqa: E402
from resumeiq.services.analysis_service import analyze, request_ai_analysis  # noqa: E402

RESUME = "Developer experienced with JavaScript and Git for many years at a small company."
AI_REPLY = (
    "Sure, here is the analysis.\n"
    '{"score": 88, "jobMatch": 77.4, "strengths": ["Strong impact statements"], '
    '"improvements": ["Add a summary"], "currentSkills": ["JavaScript", "Git"], '
    '"suggestedSkills": ["TypeScript"], "skillsToAcquire": ["React"], "suitedRoles": ["Frontend Developer"]}'
)


class FakeClient:
    provider = "openai"
    model = "fake-model"

    def __init__(self, reply: str = "", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def complete(self, messages):
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        return self.reply


class AnalysisServiceTests(unittest.TestCase):
    def setUp(self):
        patcher = mock.patch.object(analysis_service, "log_analysis_run")
        self.log_run = patcher.start()
        self.addCleanup(patcher.stop)
        enabled = replace(analysis_service.settings, ai_enabled=True, resume_min_chars=50)
        settings_patcher = mock.patch.object(analysis_service, "settings", enabled)
        settings_patcher.start()
        self.addCleanup(settings_patcher.stop)

    def _logged(self) -> dict:
        self.assertEqual(self.log_run.call_count, 1)
        return self.log_run.call_args.kwargs

    def test_ai_reply_is_validated_and_stamped(self):
        client = FakeClient(reply=AI_REPLY)
        result = asyncio.run(analyze(RESUME, " Software Engineer ", "openai", client=client))

        self.assertTrue(result.is_ai_powered)
        self.assertEqual(result.analysis_method, "ai")
        self.assertEqual(result.score, 88)
        self.assertEqual(result.job_match, 77)
        self.assertEqual(result.job_title, " Software Engineer ")
        self.assertEqual(result.suited_roles, ["Frontend Developer"])
        self.assertEqual(self._logged()["status"], "success")

        prompt = client.calls[0][1].content
        self.assertIn("The candidate is applying for: Software Engineer\n", prompt)
        self.assertIn(RESUME, prompt)

    def test_prompt_without_title_requests_null_match(self):
        client = FakeClient(reply='{"score": 70, "jobMatch": null}')
        result = asyncio.run(analyze(RESUME, "", client=client))

        self.assertIsNone(result.job_match)
        prompt = client.calls[0][1].content
        self.assertIn('"jobMatch": null', prompt)
        self.assertNotIn("applying for", prompt)

    def test_transport_failure_falls_back(self):
        client = FakeClient(error=ConnectionError("connection reset"))
        with self.assertLogs("resumeiq.services.analysis_service", level="WARNING") as logs:
            result = asyncio.run(analyze(RESUME, "Software Engineer", client=client))

        self.assertFalse(result.is_ai_powered)
        self.assertEqual(result.analysis_method, "fallback")
        self.assertEqual(result.job_match, 15)
        self.assertIn("code=llm_exception", logs.output[0])
        logged = self._logged()
        self.assertEqual(logged["method"], "fallback")
        self.assertEqual(logged["error_code"], "llm_exception")

    def test_unparseable_reply_falls_back(self):
        client = FakeClient(reply="I am unable to help with that.")
        with self.assertLogs("resumeiq.services.analysis_service", level="WARNING"):
            result = asyncio.run(analyze(RESUME, "", client=client))

        self.assertEqual(result.analysis_method, "fallback")
        self.assertIsNone(result.job_match)
        self.assertEqual(self._logged()["error_code"], "invalid_json")

    def test_unconfigured_provider_falls_back(self):
        with mock.patch.object(
            analysis_service, "get_ai_client", side_effect=RuntimeError("OPENAI_API_KEY is missing")
        ):
            with self.assertLogs("resumeiq.services.analysis_service", level="WARNING"):
                result = asyncio.run(analyze(RESUME, "Data Scientist", "gemini"))

        self.assertEqual(result.analysis_method, "fallback")
        logged = self._logged()
        self.assertEqual(logged["provider"], "gemini")
        self.assertEqual(logged["error_code"], "llm_unconfigured")

    def test_disabled_ai_skips_remote_call(self):
        disabled = replace(analysis_service.settings, ai_enabled=False)
        with mock.patch.object(analysis_service, "settings", disabled), mock.patch.object(
            analysis_service, "get_ai_client"
        ) as factory:
            result = asyncio.run(analyze(RESUME, ""))

        factory.assert_not_called()
        self.assertEqual(result.analysis_method, "fallback")
        self.assertEqual(self._logged()["status"], "skipped")

    def test_short_resume_is_rejected_before_any_work(self):
        client = FakeClient(reply=AI_REPLY)
        for text in ("", "too short", " " * 80 + "tiny"):
            with self.subTest(text=text):
                with self.assertRaises(ValidationError):
                    asyncio.run(analyze(text, "Software Engineer", client=client))
        self.assertEqual(client.calls, [])
        self.log_run.assert_not_called()

    def test_request_ai_analysis_raises_for_remote_problems(self):
        with self.assertRaises(ValidationError):
            asyncio.run(request_ai_analysis("short", client=FakeClient(reply=AI_REPLY)))

        with self.assertRaises(RemoteUnavailableError) as ctx:
            asyncio.run(request_ai_analysis(RESUME, client=FakeClient(reply="")))
        self.assertEqual(ctx.exception.code, "empty_response")

        payload = asyncio.run(request_ai_analysis(RESUME, "Software Engineer", client=FakeClient(reply=AI_REPLY)))
        self.assertEqual(payload.score, 88)


if __name__ == "__main__":
    unittest.main()
