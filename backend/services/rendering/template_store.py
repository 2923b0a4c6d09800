import logging
from typing import Optional

import httpx

from exceptions import TemplateFetchError
from models.template import TemplateDescriptor
from services.datastore.client import SupabaseClient
from services.upstream import truncate


logger = logging.getLogger(__name__)

TABLE = "resume_templates"


class TemplateStore:
    """Read-only access to resume templates and their HTML documents."""

    def __init__(
        self,
        client: SupabaseClient,
        timeout: float = 20,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client = client
        self.timeout = timeout
        self._transport = transport

    async def list_templates(self, active_only: bool = True) -> list[TemplateDescriptor]:
        filters = {"is_active": True} if active_only else None
        rows = await self.client.select(TABLE, filters, order="name.asc")
        return [TemplateDescriptor.model_validate(row) for row in rows]

    async def get_template(self, template_id: str) -> Optional[TemplateDescriptor]:
        row = await self.client.select_one(TABLE, {"id": template_id})
        return TemplateDescriptor.model_validate(row) if row else None

    async def fetch_html(self, template: TemplateDescriptor) -> str:
        """Download a template's HTML document.

        Raises:
            TemplateFetchError: On transport failure, a non-2xx status or an
                empty body. Never returns an empty template.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport, follow_redirects=True
            ) as http:
                response = await http.get(template.url)
        except httpx.HTTPError as e:
            logger.error(f"Template {template.id} unreachable at {template.url}: {e}")
            raise TemplateFetchError(template.id, "the template could not be reached") from e

        if not response.is_success:
            logger.error(
                f"Template {template.id} returned {response.status_code}: {truncate(response.text)}"
            )
            raise TemplateFetchError(template.id, f"template server returned {response.status_code}")

        html = response.text
        if not html.strip():
            logger.error(f"Template {template.id} returned an empty document")
            raise TemplateFetchError(template.id, "the template document is empty")

        logger.debug(f"Fetched template {template.id} ({len(html)} chars)")
        return html
