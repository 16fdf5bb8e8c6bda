"""Resume scoring with an AI provider path and a deterministic keyword fallback."""
