"""Shared fakes and fixtures.

Nothing here touches the network: the completion backend, the data service,
templates and the browser rasterizer are all replaced by in-memory fakes.
"""

from io import BytesIO
from typing import Optional

import pytest
from PIL import Image

from models.account import Plan, SessionContext, UserProfile
from models.resume import Profile
from models.template import TemplateDescriptor
from services.llm.base import LLMConfig, LLMProvider


class FakeLLM(LLMProvider):
    """Completion backend that replays canned replies and records calls."""

    def __init__(self, replies: Optional[list[str]] = None, error: Optional[Exception] = None):
        super().__init__("test-key", LLMConfig(model="fake-model"))
        self.replies = list(replies or [])
        self.error = error
        self.calls: list[dict] = []

    async def generate_with_usage(self, messages, temperature=None, max_tokens=None):
        self.calls.append({"messages": messages, "temperature": temperature, "max_tokens": max_tokens})
        if self.error is not None:
            raise self.error
        reply = self.replies.pop(0) if self.replies else ""
        return reply, {"input_tokens": 12, "output_tokens": 34, "total_tokens": 46}


class FakeRasterizer:
    """Returns a solid PNG of a fixed pixel size."""

    def __init__(self, width: int = 200, height: int = 400):
        self.width = width
        self.height = height
        self.calls: list[tuple[str, int]] = []

    async def rasterize(self, html: str, scale: int) -> bytes:
        self.calls.append((html, scale))
        buffer = BytesIO()
        Image.new("RGB", (self.width * scale, self.height * scale), "white").save(buffer, format="PNG")
        return buffer.getvalue()


class FakeTemplateStore:
    """Template store backed by a dict of descriptors and their HTML."""

    def __init__(self, templates: dict[str, tuple[TemplateDescriptor, str]]):
        self.templates = templates
        self.fetched: list[str] = []

    async def list_templates(self, active_only: bool = True):
        items = [t for t, _ in self.templates.values()]
        if active_only:
            items = [t for t in items if t.is_active]
        return sorted(items, key=lambda t: t.name)

    async def get_template(self, template_id: str):
        entry = self.templates.get(template_id)
        return entry[0] if entry else None

    async def fetch_html(self, template: TemplateDescriptor) -> str:
        self.fetched.append(template.id)
        return self.templates[template.id][1]


TEMPLATE_HTML = """<html><body>
<h1>{{name}}</h1><p>{{email}} | {{phone}}</p>
<section>{{summary}}</section>
<section>{{skills}}</section>
<section>{{experience}}</section>
<section>{{education}}</section>
<section>{{ai_resume}}</section>
</body></html>"""


@pytest.fixture
def fake_llm():
    return FakeLLM


@pytest.fixture
def sample_profile() -> Profile:
    return Profile.model_validate({
        "personal_info": {
            "name": "Asha Rao",
            "email": "asha@example.com",
            "phone": "+91 98765 43210",
            "location": "Hyderabad",
            "linkedin": "linkedin.com/in/asharao",
        },
        "title": "Backend Engineer",
        "summary": "Engineer building reliable APIs.",
        "skills": ["Python", "FastAPI", "PostgreSQL"],
        "experience": [
            {
                "title": "Software Engineer",
                "company": "Acme Corp",
                "duration": "2021 - 2024",
                "description": ["Built billing APIs", "Cut latency by 40%"],
            }
        ],
        "education": [
            {"degree": "B.Tech CSE", "institution": "JNTU", "year": "2021", "gpa": "8.7"}
        ],
        "projects": [
            {"title": "Resumize", "description": "Resume builder", "tech": "Python, FastAPI"}
        ],
        "certifications": [{"name": "AWS Developer", "issuer": "AWS", "year": 2023}],
    })


def make_context(plan: Plan = Plan.FREE, user_id: str = "user-1") -> SessionContext:
    return SessionContext(user=UserProfile(id=user_id, full_name="Asha Rao", email="asha@example.com", plan=plan))


@pytest.fixture
def free_context() -> SessionContext:
    return make_context(Plan.FREE)


@pytest.fixture
def paid_context() -> SessionContext:
    return make_context(Plan.PAID)


@pytest.fixture
def free_template() -> TemplateDescriptor:
    return TemplateDescriptor(id="classic", name="Classic", url="https://cdn.example.com/classic.html")


@pytest.fixture
def premium_template() -> TemplateDescriptor:
    return TemplateDescriptor(
        id="modern", name="Modern", url="https://cdn.example.com/modern.html", is_premium=True
    )


@pytest.fixture
def fake_rasterizer() -> FakeRasterizer:
    return FakeRasterizer()


@pytest.fixture
def template_store(free_template, premium_template) -> FakeTemplateStore:
    retired = TemplateDescriptor(
        id="retired", name="Retired", url="https://cdn.example.com/retired.html", is_active=False
    )
    return FakeTemplateStore({
        free_template.id: (free_template, TEMPLATE_HTML),
        premium_template.id: (premium_template, TEMPLATE_HTML),
        retired.id: (retired, TEMPLATE_HTML),
    })


@pytest.fixture
def context_for():
    return make_context
