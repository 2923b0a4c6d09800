from fastapi import APIRouter, Depends

from schemas.requests import SendOTPRequest, VerifyOTPRequest
from schemas.responses import OTPSentResponse, VerifyOTPResponse
from services.auth.otp import OTPService
from routers.dependencies import get_otp_service

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post("/send-otp", response_model=OTPSentResponse)
async def send_otp(request: SendOTPRequest, otp: OTPService = Depends(get_otp_service)):
    """Email a 6-digit signup verification code."""
    record = await otp.send_code(request.email)
    return OTPSentResponse(expires_at=record.expires_at)


@router.post("/verify-otp", response_model=VerifyOTPResponse)
async def verify_otp(request: VerifyOTPRequest, otp: OTPService = Depends(get_otp_service)):
    """Check the code and create (or link) the account.

    Returns 400 with reason ``invalid``, ``expired``, ``not_found`` or
    ``already_verified`` when the code is rejected.
    """
    user = await otp.verify_code(
        request.email,
        request.otp,
        password=request.password,
        full_name=request.full_name,
    )
    return VerifyOTPResponse(user=user)
