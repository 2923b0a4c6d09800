from fastapi import APIRouter, Depends

from models.account import Feature, SessionContext
from models.generation import ResumeContentResult
from schemas.requests import CoverLetterRequest, GenerateResumeRequest
from schemas.responses import CoverLetterResponse
from services.auth.gate import require_feature
from services.generation.cover_letter import CoverLetterGenerator
from services.generation.resume import JobContext, ResumeContentGenerator
from routers.dependencies import (
    get_cover_letter_generator,
    get_resume_generator,
    get_session_context,
)

router = APIRouter(prefix="/api/generate", tags=["Generate"])


@router.post("/resume", response_model=ResumeContentResult)
async def generate_resume(
    request: GenerateResumeRequest,
    context: SessionContext = Depends(get_session_context),
    generator: ResumeContentGenerator = Depends(get_resume_generator),
):
    """Generate resume content for a profile without a builder session.

    Returns ``resume`` on success, or ``raw_text`` with a ``warning`` when the
    AI reply was not valid JSON.
    """
    require_feature(context, Feature.AI_GENERATION)
    job = JobContext(
        job_title=request.job_title,
        target_skills=request.target_skills,
        job_description=request.job_description,
        template_url=request.template_url,
    )
    return await generator.request_resume_content(request.profile, job)


@router.post("/cover-letter", response_model=CoverLetterResponse)
async def generate_cover_letter(
    request: CoverLetterRequest,
    context: SessionContext = Depends(get_session_context),
    generator: CoverLetterGenerator = Depends(get_cover_letter_generator),
):
    require_feature(context, Feature.COVER_LETTER)
    letter = await generator.generate(
        candidate_name=request.candidate_name or context.user.full_name or "",
        job_title=request.job_title,
        company=request.company,
        points=request.points,
    )
    return CoverLetterResponse(cover_letter=letter)
