import logging
from typing import Optional

from models.account import Plan, SessionContext, UserProfile
from exceptions import AuthenticationError
from services.datastore.client import SupabaseClient


logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"


class IdentityService:
    """Resolves access tokens to the caller's profile and plan.

    The plan is read from the ``profiles`` table on every call. It can change
    at any time after an operator verifies a payment, so it is never cached.
    """

    def __init__(self, client: SupabaseClient):
        self.client = client

    async def resolve(self, access_token: Optional[str]) -> SessionContext:
        """Build the session context for a bearer token.

        Raises:
            AuthenticationError: If no token is given or it is rejected.
        """
        if not access_token:
            raise AuthenticationError("Please sign in to continue.")

        user = await self.client.get_user(access_token)
        user_id = user.get("id")
        if not user_id:
            raise AuthenticationError("Your session has expired. Please sign in again.")

        profile = await self.load_profile(user_id)
        if profile is None:
            # Account exists but the profile row was never created.
            metadata = user.get("user_metadata") or {}
            logger.warning(f"No profile row for user {user_id}, treating as free plan")
            profile = UserProfile(
                id=user_id,
                email=user.get("email"),
                full_name=metadata.get("full_name"),
                plan=Plan.FREE,
            )
        return SessionContext(user=profile)

    async def load_profile(self, user_id: str) -> Optional[UserProfile]:
        row = await self.client.select_one(PROFILES_TABLE, {"id": user_id})
        return UserProfile.model_validate(row) if row else None

    async def ensure_profile(self, user_id: str, email: str, full_name: str = "") -> UserProfile:
        """Create the profile row for a new account, keeping an existing plan."""
        existing = await self.load_profile(user_id)
        if existing is not None:
            return existing
        row = await self.client.insert(
            PROFILES_TABLE,
            {"id": user_id, "email": email, "full_name": full_name, "plan": Plan.FREE.value},
        )
        return UserProfile.model_validate(row or {"id": user_id, "email": email, "full_name": full_name})
