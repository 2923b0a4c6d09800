import logging

from exceptions import InputValidationError, UpstreamServiceError
from services.llm.base import LLMMessage, LLMProvider
from services.llm.prompts import COVER_LETTER_SYSTEM_PROMPT, GENERATE_COVER_LETTER_PROMPT


logger = logging.getLogger(__name__)


class CoverLetterGenerator:
    """Writes a short plain-text cover letter."""

    def __init__(self, llm_provider: LLMProvider, temperature: float = 0.7, max_tokens: int = 600):
        self.llm = llm_provider
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def generate(
        self,
        candidate_name: str,
        job_title: str,
        company: str = "",
        points: str = "",
    ) -> str:
        if not (job_title or "").strip():
            raise InputValidationError("job_title", "Please enter the job title you are applying for.")

        prompt = GENERATE_COVER_LETTER_PROMPT.format(
            candidate_name=candidate_name.strip() or "the candidate",
            job_title=job_title.strip(),
            company=company.strip() or "the company",
            points=points.strip() or "N/A",
        )
        letter = await self.llm.generate(
            [
                LLMMessage(role="system", content=COVER_LETTER_SYSTEM_PROMPT),
                LLMMessage(role="user", content=prompt),
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        letter = letter.strip()
        logger.info(f"Cover letter generated ({len(letter)} chars)")
        if not letter:
            raise UpstreamServiceError("completion", None, "empty cover letter reply")
        return letter
