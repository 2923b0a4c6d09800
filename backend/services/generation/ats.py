import logging
from typing import Optional

from pydantic import ValidationError

from exceptions import InputValidationError
from models.ats import ATSResult, DEFAULT_ATS_RESULT
from models.generation import RawFallback
from services.extraction import extract_text
from services.generation.json_parsing import parse_reply
from services.llm.base import LLMMessage, LLMProvider
from services.llm.prompts import ANALYZE_ATS_PROMPT, ATS_SYSTEM_PROMPT
from services.upstream import truncate


logger = logging.getLogger(__name__)


class ATSAnalyzer:
    """Scores resume text against a job description."""

    def __init__(self, llm_provider: LLMProvider, temperature: float = 0.2, max_tokens: int = 800):
        self.llm = llm_provider
        self.temperature = temperature
        self.max_tokens = max_tokens

    @staticmethod
    def validate(resume_text: Optional[str], job_description: Optional[str]) -> None:
        if not (resume_text or "").strip():
            raise InputValidationError("resume_text", "Please provide your resume content.")
        if not (job_description or "").strip():
            raise InputValidationError("job_description", "Please provide the job description.")

    async def analyze(self, resume_text: str, job_description: str) -> ATSResult:
        """Compare a resume with a job description.

        Raises:
            InputValidationError: If either input is blank (no call is made).
            UpstreamServiceError: If the completion backend fails.
        """
        self.validate(resume_text, job_description)

        prompt = ANALYZE_ATS_PROMPT.format(
            resume_text=resume_text.strip(),
            job_description=job_description.strip(),
        )
        logger.info(f"Requesting ATS analysis (resume {len(resume_text)} chars)")
        reply = await self.llm.generate(
            [
                LLMMessage(role="system", content=ATS_SYSTEM_PROMPT),
                LLMMessage(role="user", content=prompt),
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return self.interpret_reply(reply)

    async def analyze_file(self, filename: str, content: bytes, job_description: str) -> ATSResult:
        """Extract text from an uploaded resume, then analyze it."""
        self.validate("-", job_description)
        resume_text = await extract_text(filename, content)
        return await self.analyze(resume_text, job_description)

    @staticmethod
    def interpret_reply(reply: str) -> ATSResult:
        outcome = parse_reply(reply)
        if isinstance(outcome, RawFallback):
            logger.warning(f"ATS reply was not JSON, using default result: {truncate(reply)}")
            return DEFAULT_ATS_RESULT.model_copy(deep=True)
        try:
            return ATSResult.model_validate(outcome.data)
        except ValidationError as e:
            logger.warning(f"ATS reply did not match the schema ({e.error_count()} errors), using default result")
            return DEFAULT_ATS_RESULT.model_copy(deep=True)
