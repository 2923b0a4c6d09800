import json
import logging
import time
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from exceptions import InputValidationError
from models.generation import (
    GeneratedResume,
    RawFallback,
    Recovered,
    ResumeContentResult,
    Structured,
)
from models.resume import Profile, normalize_description
from services.generation.json_parsing import parse_reply
from services.llm.base import LLMCallLog, LLMMessage, LLMProvider
from services.llm.prompts import GENERATE_RESUME_PROMPT, RESUME_SYSTEM_PROMPT


logger = logging.getLogger(__name__)

FALLBACK_WARNING = "AI did not return strict JSON — see raw_text for details."


class JobContext(BaseModel):
    """What the user is applying for."""
    job_title: str = ""
    target_skills: list[str] = Field(default_factory=list)
    job_description: str = ""
    template_url: str = ""

    @field_validator("target_skills", mode="before")
    @classmethod
    def _normalize_skills(cls, v):
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return normalize_description(v)

    @field_validator("job_title", "job_description", "template_url", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return v or ""


class ResumeContentGenerator:
    """Asks the completion backend to write a structured resume."""

    def __init__(
        self,
        llm_provider: LLMProvider,
        temperature: float = 0.15,
        max_tokens: int = 1200,
        max_target_skills: int = 6,
    ):
        self.llm = llm_provider
        self.temperature = temperature
        self.max_target_skills = max_target_skills
        self.max_tokens = max_tokens
        self.last_call: Optional[LLMCallLog] = None

    def build_messages(self, profile: Profile, job: JobContext) -> list[LLMMessage]:
        """Build the system and user instructions for one request."""
        target_skills = (job.target_skills or profile.skills)[: self.max_target_skills]
        prompt = GENERATE_RESUME_PROMPT.format(
            profile_json=json.dumps(profile.to_prompt_dict(), indent=2, ensure_ascii=False),
            job_title=job.job_title or profile.title,
            target_skills=json.dumps(target_skills, ensure_ascii=False),
            job_description=job.job_description.strip() or "(none)",
        )
        return [
            LLMMessage(role="system", content=RESUME_SYSTEM_PROMPT),
            LLMMessage(role="user", content=prompt),
        ]

    async def request_resume_content(self, profile: Profile, job: JobContext) -> ResumeContentResult:
        """Generate resume content for a profile.

        Makes exactly one completion call. A reply that cannot be parsed is
        returned as a raw-text result with a warning, not raised.

        Raises:
            InputValidationError: If the profile is empty (no call is made).
            UpstreamServiceError: If the completion backend fails.
        """
        if profile.is_empty():
            raise InputValidationError("profile", "Profile is required. Fill in your details before generating.")

        messages = self.build_messages(profile, job)
        prompt_chars = sum(len(m.content) for m in messages)
        logger.info(f"Requesting resume content (prompt {prompt_chars} chars)")

        started = time.monotonic()
        reply, usage = await self.llm.generate_with_usage(
            messages, temperature=self.temperature, max_tokens=self.max_tokens
        )
        self.last_call = LLMCallLog(
            call_type="resume",
            model=self.llm.config.model,
            prompt_chars=prompt_chars,
            response_chars=len(reply),
            input_tokens=usage.get("input_tokens", 0),
            output_tokens=usage.get("output_tokens", 0),
            total_tokens=usage.get("total_tokens", 0),
            latency_ms=int((time.monotonic() - started) * 1000),
        )
        logger.info(f"Resume reply received ({len(reply)} chars, {self.last_call.total_tokens} tokens)")

        return self.interpret_reply(reply)

    @staticmethod
    def interpret_reply(reply: str) -> ResumeContentResult:
        """Turn a raw reply into a result; never raises."""
        outcome = parse_reply(reply)

        if isinstance(outcome, RawFallback):
            logger.warning(f"Resume reply was not JSON ({'; '.join(e for e in outcome.errors if e)})")
            return _fallback(outcome.raw_text)

        if isinstance(outcome, Recovered):
            logger.warning("Resume reply had surrounding text; recovered the JSON object")
        elif not isinstance(outcome, Structured):
            raise TypeError(f"Unhandled parse outcome: {outcome!r}")

        try:
            resume = GeneratedResume.model_validate(outcome.data)
        except ValidationError as e:
            logger.warning(f"Resume reply did not match the schema: {e.error_count()} errors")
            return _fallback(reply)

        return ResumeContentResult(outcome=outcome.kind, resume=resume)


def _fallback(raw_text: str) -> ResumeContentResult:
    return ResumeContentResult(outcome="raw_fallback", raw_text=raw_text, warning=FALLBACK_WARNING)
