from pydantic import BaseModel
from typing import Optional


class TemplateDescriptor(BaseModel):
    """A resume template stored in the data service. Read-only for clients."""

    model_config = {"frozen": True, "extra": "ignore"}

    id: str
    name: str
    description: Optional[str] = None
    url: str
    preview_image: Optional[str] = None
    is_premium: bool = False
    is_active: bool = True
    category: Optional[str] = None
