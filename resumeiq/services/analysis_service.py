from __future__ import annotations

import logging
import time
import uuid

from resumeiq.ai.config import load_ai_config
from resumeiq.ai.factory import get_ai_client
from resumeiq.ai.prompt import build_analysis_messages
from resumeiq.ai.types import AIClient
from resumeiq.analysis.errors import MalformedPayloadError, RemoteUnavailableError, ValidationError
from resumeiq.analysis.fallback import analyze_resume_fallback
from resumeiq.analysis.validation import Malformed, parse_ai_reply
from resumeiq.analytics.db import log_analysis_run
from resumeiq.core.config import settings
from resumeiq.schemas.analysis import AnalysisPayload, AnalysisResult
from resumeiq.taxonomy import TaxonomyProvider

logger = logging.getLogger(__name__)


def check_resume_length(resume_text: str | None) -> None:
    minimum = settings.resume_min_chars
    if not resume_text or len(resume_text.strip()) < minimum:
        raise ValidationError(
            f"Resume text is too short. Please provide at least {minimum} characters."
        )


def _log_run(
    *,
    run_id: str,
    provider: str,
    model: str | None,
    method: str,
    status: str,
    started: float,
    error_code: str | None = None,
) -> None:
    try:
        log_analysis_run(
            run_id=run_id,
            provider=provider or "unknown",
            model=model,
            method=method,
            status=status,
            error_code=error_code,
            latency_ms=int((time.perf_counter() - started) * 1000),
        )
    except Exception:  # pragma: no cover - analytics must not break analysis
        logger.debug("analysis_run_logging_failed", exc_info=True)


async def request_ai_analysis(
    resume_text: str,
    job_title: str | None = None,
    *,
    provider: str | None = None,
    client: AIClient | None = None,
) -> AnalysisPayload:
    """Ask the AI provider for an analysis and validate its reply.

    Raises ``ValidationError`` for short input and ``RemoteUnavailableError``
    for anything that goes wrong on the provider side.
    """
    check_resume_length(resume_text)

    if client is None:
        try:
            client = get_ai_client(provider)
        except (RuntimeError, ValueError) as exc:
            raise RemoteUnavailableError(str(exc), code="llm_unconfigured") from exc

    name = getattr(client, "provider", "ai")
    messages = build_analysis_messages(resume_text, (job_title or "").strip() or None)
    try:
        reply = await client.complete(messages)
    except Exception as exc:  # noqa: BLE001 - any transport failure means fallback
        raise RemoteUnavailableError(f"{name} request failed: {exc}", code="llm_exception") from exc

    parsed = parse_ai_reply(reply)
    if isinstance(parsed, Malformed):
        cause = MalformedPayloadError(f"{name} reply was not usable JSON.", code=parsed.reason)
        raise RemoteUnavailableError(str(cause), code=parsed.reason) from cause
    return parsed.payload


async def analyze(
    resume_text: str,
    job_title: str = "",
    provider: str | None = None,
    *,
    client: AIClient | None = None,
    taxonomy: TaxonomyProvider | None = None,
) -> AnalysisResult:
    """Analyze a resume with the AI provider, falling back to keyword analysis.

    Only ``ValidationError`` escapes; provider failures are logged and
    reflected in ``analysis_method``.
    """
    check_resume_length(resume_text)
    job_title = job_title or ""

    run_id = uuid.uuid4().hex
    started = time.perf_counter()
    cfg = load_ai_config(provider)
    provider_name = getattr(client, "provider", None) or cfg.provider
    model = getattr(client, "model", None) or cfg.model

    if not settings.ai_enabled and client is None:
        logger.info("ai_analysis_skipped provider=%s reason=disabled", provider_name)
        result = analyze_resume_fallback(resume_text, job_title, taxonomy=taxonomy)
        _log_run(
            run_id=run_id,
            provider=provider_name,
            model=model,
            method="fallback",
            status="skipped",
            error_code="llm_disabled",
            started=started,
        )
        return result

    try:
        payload = await request_ai_analysis(resume_text, job_title, provider=provider, client=client)
    except ValidationError:
        raise
    except RemoteUnavailableError as exc:
        logger.warning("ai_analysis_failed provider=%s code=%s: %s", provider_name, exc.code, exc)
        error_code = exc.code
    except Exception as exc:  # noqa: BLE001 - deterministic fallback is expected
        logger.warning("ai_analysis_failed provider=%s code=llm_exception: %s", provider_name, exc)
        error_code = "llm_exception"
    else:
        _log_run(
            run_id=run_id,
            provider=provider_name,
            model=model,
            method="ai",
            status="success",
            started=started,
        )
        return AnalysisResult.from_payload(payload, job_title=job_title, analysis_method="ai")

    result = analyze_resume_fallback(resume_text, job_title, taxonomy=taxonomy)
    _log_run(
        run_id=run_id,
        provider=provider_name,
        model=model,
        method="fallback",
        status="error",
        error_code=error_code,
        started=started,
    )
    return result
