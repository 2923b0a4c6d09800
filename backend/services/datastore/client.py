import logging
from functools import lru_cache
from typing import Any, Optional

import httpx

from config import get_settings
from exceptions import AuthenticationError, ConfigurationError
from services.upstream import check_response, transport_failure


logger = logging.getLogger(__name__)

SERVICE = "data"


class SupabaseClient:
    """Async client for the hosted data and auth service.

    Talks to the PostgREST endpoint (``/rest/v1``) for table rows and the
    GoTrue endpoint (``/auth/v1``) for accounts. All failures surface as
    UpstreamServiceError so callers can report a feature-specific message.
    """

    def __init__(
        self,
        url: str,
        key: str,
        timeout: float = 20,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not url or not key:
            raise ConfigurationError("Data service URL and key are required")
        self.url = url.rstrip("/")
        self.key = key
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy initialization of the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.url,
                headers={"apikey": self.key, "Authorization": f"Bearer {self.key}"},
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise transport_failure(SERVICE, e) from e
        return check_response(SERVICE, response)

    @staticmethod
    def _filters(filters: Optional[dict[str, Any]]) -> dict[str, str]:
        params = {}
        for column, value in (filters or {}).items():
            if isinstance(value, bool):
                value = str(value).lower()
            params[column] = f"eq.{value}"
        return params

    # Table rows

    async def select(
        self,
        table: str,
        filters: Optional[dict[str, Any]] = None,
        order: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        """Select rows matching equality filters.

        Args:
            table: Table name.
            filters: Column -> value equality filters.
            order: PostgREST order clause, e.g. ``"created_at.desc"``.
            limit: Maximum number of rows.
        """
        params = {"select": "*", **self._filters(filters)}
        if order:
            params["order"] = order
        if limit:
            params["limit"] = str(limit)
        response = await self._request("GET", f"/rest/v1/{table}", params=params)
        return response.json()

    async def select_one(self, table: str, filters: dict[str, Any]) -> Optional[dict[str, Any]]:
        rows = await self.select(table, filters, limit=1)
        return rows[0] if rows else None

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        response = await self._request(
            "POST",
            f"/rest/v1/{table}",
            json=row,
            headers={"Prefer": "return=representation"},
        )
        rows = response.json()
        return rows[0] if rows else {}

    async def upsert(self, table: str, row: dict[str, Any], on_conflict: str) -> dict[str, Any]:
        response = await self._request(
            "POST",
            f"/rest/v1/{table}",
            json=row,
            params={"on_conflict": on_conflict},
            headers={"Prefer": "resolution=merge-duplicates,return=representation"},
        )
        rows = response.json()
        return rows[0] if rows else {}

    async def update(
        self, table: str, filters: dict[str, Any], values: dict[str, Any]
    ) -> list[dict[str, Any]]:
        response = await self._request(
            "PATCH",
            f"/rest/v1/{table}",
            json=values,
            params=self._filters(filters),
            headers={"Prefer": "return=representation"},
        )
        return response.json()

    async def delete(self, table: str, filters: dict[str, Any]) -> None:
        await self._request("DELETE", f"/rest/v1/{table}", params=self._filters(filters))

    # Accounts

    async def get_user(self, access_token: str) -> dict[str, Any]:
        """Resolve an access token to the auth user record.

        Raises:
            AuthenticationError: If the token is rejected.
        """
        try:
            response = await self.client.get(
                "/auth/v1/user",
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as e:
            raise transport_failure(SERVICE, e) from e

        if response.status_code in (401, 403):
            raise AuthenticationError("Your session has expired. Please sign in again.")
        return check_response(SERVICE, response).json()

    async def create_user(
        self, email: str, password: str, metadata: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """Create a confirmed account through the admin endpoint."""
        response = await self._request(
            "POST",
            "/auth/v1/admin/users",
            json={
                "email": email,
                "password": password,
                "email_confirm": True,
                "user_metadata": metadata or {},
            },
        )
        return response.json()

    async def find_user_by_email(self, email: str) -> Optional[dict[str, Any]]:
        """Look up an existing account so a verified email can be linked to it."""
        response = await self._request(
            "GET", "/auth/v1/admin/users", params={"email": email}
        )
        payload = response.json()
        users = payload.get("users", []) if isinstance(payload, dict) else payload
        for user in users:
            if (user.get("email") or "").lower() == email.lower():
                return user
        return None


@lru_cache()
def get_supabase_client() -> SupabaseClient:
    """Get the shared data service client."""
    settings = get_settings()
    return SupabaseClient(settings.supabase_url, settings.supabase_key, settings.http_timeout)
