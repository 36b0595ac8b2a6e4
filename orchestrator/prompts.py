from __future__ import annotations
from typing import Any, Dict, NamedTuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .agents.job_extractor import JobExtraction


ARTIFACT_URLS = {
    "REACT_GITHUB_URL": "https://github.com/ksprabin/world-clock-app",
    "AI_WEB_APP_URL": "https://fund-management-sooty.vercel.app/",
    "PORTFOLIO_URL": "https://prabin-portfolio-nu.vercel.app/",
}

MANDATORY_SENTENCE = (
    "Possessing a rare skill for front-end fidelity, I deliver screens that are visually and "
    "functionally identical to the original UX design, guaranteeing a flawless UI."
)

REQUIREMENT_COUNT = 5


class ExtractionPrompt(NamedTuple):
    system_instruction: str
    user_query: str
    output_schema: Dict[str, Any]


class GenerationPrompt(NamedTuple):
    system_instruction: str
    user_query: str


# -------- Extraction --------
EXTRACTION_SYSTEM_INSTRUCTION = (
    "You are an efficient data extractor. Your only goal is to parse the input and return a JSON "
    "object that strictly conforms to the provided schema. Do not include any external commentary."
)

EXTRACTION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "company": {
            "type": "string",
            "description": "The name of the hiring company.",
        },
        "requirements": {
            "type": "array",
            "description": "A list of the top 5 most critical skills, tools, or requirements for the job.",
            "items": {"type": "string"},
        },
    },
    "required": ["company", "requirements"],
}

EXTRACTION_QUERY = """Analyze the job description below. Identify the hiring company name and list the 5 most critical, specific skills or requirements for this role.

--- JOB DESCRIPTION ---
{job_description}"""


# -------- Generation --------
GENERATION_SYSTEM_INSTRUCTION = f"""You are an expert career consultant. Write a persuasive and professional, single-page cover letter in a standard business format, using placeholders for the date and recipient name. Adopt a warm, impact-focused, and collaborative tone.

FORMATTING RULES FOR READABILITY:
1. Short Paragraphs: Use concise paragraphs (max 3-4 sentences). Avoid large blocks of dense text.
2. Bullet Points: You MUST use a bulleted list to highlight key technical skills, achievements, or specific matches to the job requirements. This is essential for readability.
3. No Markdown Bolding: Do NOT use double asterisks (**) anywhere. Do not bold words. Keep the text clean and plain.

CONTENT REQUIREMENTS:
1. Value Focus: Focus entirely on what the candidate can contribute to the company's business.
2. Addressing Gaps: Identify gaps between the JD and the candidate's profile and frame the candidate's existing expertise as a solution or highly transferable skill.
3. Artifact Integration: Integrate the following URLs naturally into the letter (e.g., within the bullet points or a relevant paragraph):
   - React Practice: {ARTIFACT_URLS["REACT_GITHUB_URL"]}
   - AI App: {ARTIFACT_URLS["AI_WEB_APP_URL"]}
   - Portfolio: {ARTIFACT_URLS["PORTFOLIO_URL"]}
4. Mandatory Sentence: You MUST include this exact sentence: "{MANDATORY_SENTENCE}"
5. Performance Nuance: Mention in a subtle, professional manner that while the candidate may consider themselves an average performer during interviews, their actual work performance and delivery are consistently exceptional.
"""

GENERATION_QUERY = """Write a professional cover letter. The letter should be addressed to the hiring manager at "{company}".
The letter MUST explicitly address how the candidate meets these key requirements: {requirements}.
The candidate's relevant experience is: {resume}.
"""


def build_extraction_prompt(job_description: str) -> ExtractionPrompt:
    return ExtractionPrompt(
        system_instruction=EXTRACTION_SYSTEM_INSTRUCTION,
        user_query=EXTRACTION_QUERY.format(job_description=job_description),
        output_schema=EXTRACTION_SCHEMA,
    )


def build_generation_prompt(extraction: "JobExtraction", resume: str) -> GenerationPrompt:
    """Render the letter prompt. Requirements are joined with ", " in extraction order."""
    user_query = GENERATION_QUERY.format(
        company=extraction.company,
        requirements=", ".join(extraction.requirements),
        resume=resume,
    )
    return GenerationPrompt(system_instruction=GENERATION_SYSTEM_INSTRUCTION, user_query=user_query)
