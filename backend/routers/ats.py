from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from config import Settings, get_settings
from models.account import SessionContext
from models.ats import ATSResult
from schemas.requests import ATSAnalyzeRequest
from schemas.responses import ExtractTextResponse
from services.builder.session_manager import SessionManager
from services.extraction import extract_text
from services.generation.ats import ATSAnalyzer
from routers.dependencies import get_ats_analyzer, get_session_context, get_sessions

router = APIRouter(prefix="/api", tags=["ATS"])


@router.post("/analyze/ats", response_model=ATSResult)
async def analyze_ats(
    request: ATSAnalyzeRequest,
    context: SessionContext = Depends(get_session_context),
    analyzer: ATSAnalyzer = Depends(get_ats_analyzer),
):
    """Score pasted resume text against a job description."""
    return await analyzer.analyze(request.resume_text, request.job_description)


@router.post("/analyze/ats/upload", response_model=ATSResult)
async def analyze_ats_upload(
    file: UploadFile = File(...),
    job_description: str = Form(""),
    session_id: Optional[str] = Form(None),
    context: SessionContext = Depends(get_session_context),
    analyzer: ATSAnalyzer = Depends(get_ats_analyzer),
    sessions: SessionManager = Depends(get_sessions),
):
    """Score an uploaded resume (PDF, DOCX or TXT) against a job description.

    When ``session_id`` is given, only one analysis may run for that session.
    """
    content = await file.read()

    if not session_id:
        return await analyzer.analyze_file(file.filename or "", content, job_description)

    sessions.require_session(session_id, context.user_id)
    sessions.begin(session_id, "is_analyzing")
    try:
        return await analyzer.analyze_file(file.filename or "", content, job_description)
    finally:
        sessions.end(session_id, "is_analyzing")


@router.post("/extract", response_model=ExtractTextResponse)
async def extract(
    file: UploadFile = File(...),
    context: SessionContext = Depends(get_session_context),
    settings: Settings = Depends(get_settings),
):
    """Extract the text of an uploaded resume."""
    content = await file.read()
    filename = file.filename or ""
    text = await extract_text(filename, content, resolution=settings.ocr_resolution)
    return ExtractTextResponse(filename=filename, text=text, characters=len(text))
