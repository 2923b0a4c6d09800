"""Signup email verification with one-time passcodes.

Flow:
    1. ``send_code`` stores a 6-digit code with an expiry for the email and
       mails it to the user.
    2. ``verify_code`` checks the code, then its expiry, marks the record as
       verified and provisions (or links) the account and its profile row.
"""

import logging
import re
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from models.account import OTPRecord, UserProfile
from exceptions import InputValidationError, OTPError
from services.auth.identity import IdentityService
from services.datastore.client import SupabaseClient
from services.email.client import ResendEmailClient


logger = logging.getLogger(__name__)

OTP_TABLE = "email_otps"
CODE_LENGTH = 6

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

OTP_EMAIL_SUBJECT = "Your Resumize verification code"
OTP_EMAIL_BODY = """<p>Your verification code is:</p>
<p style="font-size:24px;font-weight:bold;letter-spacing:4px">{code}</p>
<p>This code expires in {ttl} minutes. If you did not request it, you can ignore this email.</p>"""


def generate_code(length: int = CODE_LENGTH) -> str:
    """Random numeric code, zero-padded."""
    return f"{secrets.randbelow(10 ** length):0{length}d}"


def normalize_email(email: str) -> str:
    email = (email or "").strip().lower()
    if not email:
        raise InputValidationError("email", "Email is required.")
    if not EMAIL_PATTERN.match(email):
        raise InputValidationError("email", "Please enter a valid email address.")
    return email


class OTPService:
    """Coordinates the data service, the email provider and account creation."""

    def __init__(
        self,
        client: SupabaseClient,
        email_client: ResendEmailClient,
        identity: IdentityService,
        ttl_minutes: int = 10,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.client = client
        self.email_client = email_client
        self.identity = identity
        self.ttl_minutes = ttl_minutes
        self.clock = clock

    async def send_code(self, email: str) -> OTPRecord:
        """Generate, store and email a new code. Replaces any previous code."""
        email = normalize_email(email)
        record = OTPRecord(
            email=email,
            code=generate_code(),
            expires_at=self.clock() + timedelta(minutes=self.ttl_minutes),
            verified=False,
        )
        await self.client.upsert(
            OTP_TABLE,
            {
                "email": record.email,
                "code": record.code,
                "expires_at": record.expires_at.isoformat(),
                "verified": False,
            },
            on_conflict="email",
        )
        await self.email_client.send(
            to=email,
            subject=OTP_EMAIL_SUBJECT,
            html=OTP_EMAIL_BODY.format(code=record.code, ttl=self.ttl_minutes),
        )
        logger.info(f"Verification code sent to {email}")
        return record

    async def check_code(self, email: str, code: str) -> OTPRecord:
        """Validate a submitted code without side effects.

        Raises:
            OTPError: ``not_found``, ``already_verified``, ``invalid`` or
                ``expired``. A matching code past its expiry is ``expired``.
        """
        email = normalize_email(email)
        code = (code or "").strip()
        if not code:
            raise InputValidationError("otp", "Please enter the code we emailed you.")

        row = await self.client.select_one(OTP_TABLE, {"email": email})
        if row is None:
            raise OTPError("not_found")
        record = OTPRecord.model_validate(row)

        if record.verified:
            raise OTPError("already_verified")
        if not secrets.compare_digest(record.code, code):
            raise OTPError("invalid")
        if record.is_expired(self.clock()):
            raise OTPError("expired")
        return record

    async def verify_code(
        self,
        email: str,
        code: str,
        password: Optional[str] = None,
        full_name: str = "",
    ) -> UserProfile:
        """Verify the code and provision or link the account.

        The code is marked verified only once the account and its profile
        row exist, so a failed attempt can be retried with the same code.

        Returns:
            The profile of the new or linked account.
        """
        record = await self.check_code(email, code)
        if password is not None and len(password) < 6:
            raise InputValidationError("password", "Password must be at least 6 characters.")

        user = await self.client.find_user_by_email(record.email)
        if user is None:
            if not password:
                raise InputValidationError("password", "Password is required to create your account.")
            user = await self.client.create_user(
                record.email, password, metadata={"full_name": full_name}
            )
            logger.info(f"Account created for {record.email}")
        else:
            logger.info(f"Verified email linked to existing account {user.get('id')}")

        profile = await self.identity.ensure_profile(user["id"], record.email, full_name)
        await self.client.update(OTP_TABLE, {"email": record.email}, {"verified": True})
        return profile
