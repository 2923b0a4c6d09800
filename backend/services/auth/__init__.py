from services.auth.gate import can_access, can_use_template, require_feature, require_template
from services.auth.identity import IdentityService
from services.auth.otp import OTPService

__all__ = [
    "can_access",
    "can_use_template",
    "require_feature",
    "require_template",
    "IdentityService",
    "OTPService",
]
