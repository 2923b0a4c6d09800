"""Prompt templates for resume generation, ATS analysis and cover letters.

All structured prompts spell out the exact output schema and ask for bare
JSON; replies are still parsed defensively (see services.generation.json_parsing).
"""

# =============================================================================
# RESUME: ATS-optimized resume record from the user's profile
# =============================================================================
RESUME_SYSTEM_PROMPT = "You are an expert resume writer and ATS optimizer. Output strict JSON only."

GENERATE_RESUME_PROMPT = """You are an expert resume writer and ATS optimizer.
Given the user profile and optional job description below, produce a strict JSON object (no text, no markdown, no code fences) representing an ATS-optimized professional resume.

Requirements:
1) Use concise, action-oriented bullet content and industry keywords suitable for ATS parsing.
2) Prioritize matching keywords from the job description (if provided) and incorporate the target skills.
3) Use the provided data only. Do not invent employers, dates or degrees.
4) Output valid JSON only. If a field is empty, output an empty array or empty string.

Output JSON schema (must follow exactly):
{{
  "summary": string,
  "skills": [string],
  "technologies": [string],
  "languages": [string],
  "references": [{{"name": string, "position": string, "company": string, "contact": string}}],
  "experience": [{{"title": string, "company": string, "duration": string, "description": [string]}}],
  "education": [{{"degree": string, "institution": string, "year": string, "gpa": string}}],
  "projects": [{{"title": string, "description": [string], "tech": [string], "duration": string}}],
  "certifications": [{{"name": string, "issuer": string, "year": string}}],
  "extracted_keywords": [string],
  "matched_keywords": [string]
}}

Profile JSON:
{profile_json}

Job Title: {job_title}
Target Skills: {target_skills}
Job Description:
{job_description}

Return ONLY the JSON object."""


# =============================================================================
# ATS: Score resume text against a job description
# =============================================================================
ATS_SYSTEM_PROMPT = "You are an intelligent ATS evaluator."

ANALYZE_ATS_PROMPT = """Compare the following resume and job description and respond only in valid JSON format:
{{
  "score": number (0-100),
  "missing_keywords": ["keyword1", "keyword2"],
  "suggested_improvements": ["improvement1", "improvement2"]
}}

Resume:
{resume_text}

Job Description:
{job_description}
"""


# =============================================================================
# COVER LETTER: Plain-text letter
# =============================================================================
COVER_LETTER_SYSTEM_PROMPT = "You are a professional HR assistant."

GENERATE_COVER_LETTER_PROMPT = """Write a concise, personalized cover letter for {candidate_name} applying for {job_title} at {company}.
Mention these points: {points}
Include 3 short paragraphs and a closing line.
Plain text only (no markdown)."""
