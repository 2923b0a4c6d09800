from schemas.requests import (
    SendOTPRequest,
    VerifyOTPRequest,
    CreateBuilderSessionRequest,
    UpdateProfileRequest,
    SelectTemplateRequest,
    JobRequest,
    GenerateResumeRequest,
    CoverLetterRequest,
    ATSAnalyzeRequest,
    SaveResumeRequest,
    UpdateResumeRequest,
)
from schemas.responses import (
    ErrorResponse,
    OTPSentResponse,
    VerifyOTPResponse,
    TemplateResponse,
    BuilderSessionResponse,
    PreviewResponse,
    CoverLetterResponse,
    ExtractTextResponse,
)

__all__ = [
    "SendOTPRequest",
    "VerifyOTPRequest",
    "CreateBuilderSessionRequest",
    "UpdateProfileRequest",
    "SelectTemplateRequest",
    "JobRequest",
    "GenerateResumeRequest",
    "CoverLetterRequest",
    "ATSAnalyzeRequest",
    "SaveResumeRequest",
    "UpdateResumeRequest",
    "ErrorResponse",
    "OTPSentResponse",
    "VerifyOTPResponse",
    "TemplateResponse",
    "BuilderSessionResponse",
    "PreviewResponse",
    "CoverLetterResponse",
    "ExtractTextResponse",
]
