"""Unit tests for resume, ATS and account models."""

from datetime import datetime, timedelta, timezone

import pytest

from models.account import OTPRecord, Plan, UserProfile
from models.ats import ATSResult, DEFAULT_ATS_RESULT
from models.generation import GeneratedResume
from models.resume import ExperienceEntry, Profile, ProjectEntry, normalize_description


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [
        (["a", "b"], ["a", "b"]),
        ("single bullet", ["single bullet"]),
        (None, []),
        ("", []),
        ("   ", []),
        ([], []),
        (["a", None, "  ", 3], ["a", "  ", "3"]),
    ],
)
def test_normalize_description(value, expected):
    assert normalize_description(value) == expected


@pytest.mark.unit
def test_normalize_description_keeps_list_unchanged():
    bullets = ["Led migration", "Mentored two engineers"]
    assert normalize_description(bullets) == bullets

    with_blank = ["Built APIs", "", "Led team"]
    assert normalize_description(with_blank) == with_blank
    assert ExperienceEntry(title="SWE", description=with_blank).description == with_blank


@pytest.mark.unit
def test_experience_accepts_company_or_organization():
    stored = ExperienceEntry.model_validate({"title": "SWE", "company": "Acme", "description": "Built it"})
    generated = ExperienceEntry.model_validate({"title": "SWE", "organization": "Acme"})

    assert stored.organization == generated.organization == "Acme"
    assert stored.description == ["Built it"]
    assert generated.description == []


@pytest.mark.unit
def test_project_tech_from_comma_string():
    project = ProjectEntry.model_validate({"title": "Bot", "tech": "Python, , Redis", "description": None})

    assert project.tech == ["Python", "Redis"]
    assert project.description == []


@pytest.mark.unit
def test_profile_list_fields_never_none():
    profile = Profile.model_validate({"skills": None, "experience": None, "summary": None})

    assert profile.skills == []
    assert profile.experience == []
    assert profile.summary == ""
    assert profile.is_empty()


@pytest.mark.unit
def test_profile_flat_and_nested_shapes_match():
    nested = Profile.model_validate({"personal_info": {"name": "Asha", "email": "a@x.io"}})
    flat = Profile.model_validate({"name": "Asha", "email": "a@x.io"})

    assert nested == flat
    assert flat.name == "Asha"
    assert not flat.is_empty()


@pytest.mark.unit
def test_to_prompt_dict_uses_company_key(sample_profile):
    data = sample_profile.to_prompt_dict()

    assert data["name"] == "Asha Rao"
    assert data["experience"][0]["company"] == "Acme Corp"
    assert "organization" not in data["experience"][0]


@pytest.mark.unit
def test_generated_resume_defaults_and_aliases():
    resume = GeneratedResume.model_validate({"summary": "x", "skills": ["a"], "tech": ["Go"]})

    assert resume.summary == "x"
    assert resume.skills == ["a"]
    assert resume.technologies == ["Go"]
    assert resume.experience == []
    assert resume.extracted_keywords == []
    assert resume.matched_keywords == []


@pytest.mark.unit
def test_ats_result_clamps_score_and_accepts_suggestions_key():
    result = ATSResult.model_validate({"score": 140, "missing_keywords": None, "suggestions": "Add metrics"})

    assert result.score == 100
    assert result.missing_keywords == []
    assert result.suggested_improvements == ["Add metrics"]
    assert ATSResult.model_validate({"score": -5}).score == 0


@pytest.mark.unit
def test_default_ats_result():
    assert DEFAULT_ATS_RESULT.score == 70
    assert DEFAULT_ATS_RESULT.missing_keywords == ["Leadership", "Project Management"]
    assert DEFAULT_ATS_RESULT.is_default


@pytest.mark.unit
@pytest.mark.parametrize("value, plan", [("paid", Plan.PAID), ("premium", Plan.PAID), ("free", Plan.FREE), (None, Plan.FREE)])
def test_user_plan_coercion(value, plan):
    assert UserProfile(id="u", plan=value).plan == plan


@pytest.mark.unit
def test_otp_record_expiry_and_code_padding():
    now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    record = OTPRecord(email="a@x.io", code=42, expires_at=(now + timedelta(minutes=10)).replace(tzinfo=None))

    assert record.code == "000042"
    assert not record.is_expired(now)
    assert record.is_expired(now + timedelta(minutes=10))
