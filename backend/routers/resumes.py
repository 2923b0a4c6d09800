from fastapi import APIRouter, Depends, Response, status

from exceptions import ResumeNotFoundError
from models.account import SessionContext
from models.resume import StoredResume
from schemas.requests import SaveResumeRequest, UpdateResumeRequest
from services.datastore.resumes import ResumeRepository
from routers.dependencies import get_resume_repository, get_session_context

router = APIRouter(prefix="/api/resumes", tags=["Resumes"])


@router.get("", response_model=list[StoredResume])
async def list_resumes(
    context: SessionContext = Depends(get_session_context),
    repo: ResumeRepository = Depends(get_resume_repository),
):
    return await repo.list(context.user_id)


@router.get("/{resume_id}", response_model=StoredResume)
async def get_resume(
    resume_id: str,
    context: SessionContext = Depends(get_session_context),
    repo: ResumeRepository = Depends(get_resume_repository),
):
    resume = await repo.get(context.user_id, resume_id)
    if resume is None:
        raise ResumeNotFoundError(resume_id)
    return resume


@router.post("", response_model=StoredResume, status_code=status.HTTP_201_CREATED)
async def save_resume(
    request: SaveResumeRequest,
    context: SessionContext = Depends(get_session_context),
    repo: ResumeRepository = Depends(get_resume_repository),
):
    """Save a resume to the caller's account."""
    return await repo.create(context.user_id, request.title, request.content, request.template)


@router.put("/{resume_id}", response_model=StoredResume)
async def update_resume(
    resume_id: str,
    request: UpdateResumeRequest,
    context: SessionContext = Depends(get_session_context),
    repo: ResumeRepository = Depends(get_resume_repository),
):
    resume = await repo.update(context.user_id, resume_id, request.model_dump(exclude_none=True))
    if resume is None:
        raise ResumeNotFoundError(resume_id)
    return resume


@router.delete("/{resume_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resume(
    resume_id: str,
    context: SessionContext = Depends(get_session_context),
    repo: ResumeRepository = Depends(get_resume_repository),
):
    await repo.delete(context.user_id, resume_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
