from datetime import datetime, timezone
from typing import Any, Optional

from models.resume import StoredResume
from services.datastore.client import SupabaseClient


TABLE = "resumes"


class ResumeRepository:
    """Saved resumes, always scoped to their owner."""

    def __init__(self, client: SupabaseClient):
        self.client = client

    async def list(self, user_id: str) -> list[StoredResume]:
        rows = await self.client.select(TABLE, {"user_id": user_id}, order="created_at.desc")
        return [StoredResume.model_validate(row) for row in rows]

    async def get(self, user_id: str, resume_id: str) -> Optional[StoredResume]:
        row = await self.client.select_one(TABLE, {"id": resume_id, "user_id": user_id})
        return StoredResume.model_validate(row) if row else None

    async def create(
        self, user_id: str, title: str, content: dict[str, Any], template: Optional[str] = None
    ) -> StoredResume:
        row = await self.client.insert(
            TABLE,
            {"user_id": user_id, "title": title, "content": content, "template": template},
        )
        return StoredResume.model_validate(row)

    async def update(self, user_id: str, resume_id: str, values: dict[str, Any]) -> Optional[StoredResume]:
        values = {k: v for k, v in values.items() if k in ("title", "content", "template")}
        values["updated_at"] = datetime.now(timezone.utc).isoformat()
        rows = await self.client.update(TABLE, {"id": resume_id, "user_id": user_id}, values)
        return StoredResume.model_validate(rows[0]) if rows else None

    async def delete(self, user_id: str, resume_id: str) -> None:
        await self.client.delete(TABLE, {"id": resume_id, "user_id": user_id})
