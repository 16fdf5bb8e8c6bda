from .errors import AnalysisError, MalformedPayloadError, RemoteUnavailableError, ValidationError
from .fallback import analyze_resume_fallback
from .matching import detect_skills, probe_token, skill_present
from .validation import Malformed, WellFormed, extract_json_object, normalize_payload, parse_ai_reply

__all__ = [
    "AnalysisError",
    "MalformedPayloadError",
    "RemoteUnavailableError",
    "ValidationError",
    "analyze_resume_fallback",
    "detect_skills",
    "probe_token",
    "skill_present",
    "Malformed",
    "WellFormed",
    "extract_json_object",
    "normalize_payload",
    "parse_ai_reply",
]
