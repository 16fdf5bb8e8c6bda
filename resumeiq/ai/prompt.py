from resumeiq.ai.types import ChatMessage

SYSTEM_PROMPT = (
    "You are an expert resume analyst. "
    "Always respond with valid JSON only, no markdown formatting."
)


def build_analysis_prompt(resume_text: str, job_title: str | None = None) -> str:
    target = f"The candidate is applying for: {job_title}\n" if job_title else ""
    job_match_shape = "<number 0-100 or null>" if job_title else "null"
    job_match_rule = (
        "- JobMatch should reflect how well the resume matches the specified role (0-100)"
        if job_title
        else "- jobMatch should be null since no target role specified"
    )
    return (
        "You are an expert resume analyst and HR professional. "
        "Analyze the following resume and provide detailed feedback.\n\n"
        f"{target}\n"
        f"RESUME:\n{resume_text}\n\n"
        "Provide your analysis in the following JSON format (return ONLY valid JSON, no markdown):\n"
        "{\n"
        '  "score": <number 1-100>,\n'
        f'  "jobMatch": {job_match_shape},\n'
        '  "strengths": [<up to 6 specific strengths found in the resume>],\n'
        '  "improvements": [<up to 6 actionable improvements>],\n'
        '  "currentSkills": [<list of detected technical/professional skills>],\n'
        '  "suggestedSkills": [<list of beneficial skills to add>],\n'
        '  "skillsToAcquire": [<list of skills critical for the target role>],\n'
        '  "suitedRoles": [<list of roles this person is well-suited for>]\n'
        "}\n\n"
        "Requirements:\n"
        "- Score should reflect overall resume quality (1-100)\n"
        f"{job_match_rule}\n"
        "- Be specific and actionable in suggestions\n"
        "- Extract skills from the actual resume content\n"
        "- Provide realistic career guidance\n"
        "- Return ONLY valid JSON, no additional text"
    )


def build_analysis_messages(resume_text: str, job_title: str | None = None) -> list[ChatMessage]:
    return [
        ChatMessage(role="system", content=SYSTEM_PROMPT),
        ChatMessage(role="user", content=build_analysis_prompt(resume_text, job_title)),
    ]
