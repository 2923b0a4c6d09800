"""Unit tests for plan gating."""

import pytest

from exceptions import FeatureLockedError, InputValidationError
from models.account import Feature, Plan
from models.template import TemplateDescriptor
from services.auth.gate import can_access, can_use_template, require_feature, require_template


@pytest.mark.unit
@pytest.mark.parametrize("feature", list(Feature))
def test_premium_features_need_paid_plan(feature):
    assert can_access(feature, Plan.PAID)
    assert not can_access(feature, Plan.FREE)


@pytest.mark.unit
def test_premium_template_gated_on_plan(free_template, premium_template):
    assert can_use_template(free_template, Plan.FREE)
    assert not can_use_template(premium_template, Plan.FREE)
    assert can_use_template(premium_template, Plan.PAID)


@pytest.mark.unit
def test_inactive_template_unusable_on_any_plan():
    retired = TemplateDescriptor(id="old", name="Old", url="https://x/old.html", is_active=False)

    assert not can_use_template(retired, Plan.PAID)


@pytest.mark.unit
def test_require_feature(free_context, paid_context):
    require_feature(paid_context, Feature.AI_GENERATION)

    with pytest.raises(FeatureLockedError) as exc:
        require_feature(free_context, Feature.COVER_LETTER)

    assert exc.value.status_code == 403
    assert exc.value.details == {"feature": "cover_letter"}
    assert "premium" in exc.value.message


@pytest.mark.unit
def test_require_template(free_context, paid_context, premium_template):
    require_template(paid_context, premium_template)

    with pytest.raises(FeatureLockedError):
        require_template(free_context, premium_template)

    retired = premium_template.model_copy(update={"is_active": False})
    with pytest.raises(InputValidationError):
        require_template(paid_context, retired)


@pytest.mark.unit
def test_gate_follows_plan_changes(context_for):
    """The same user is re-evaluated with whatever plan their context carries."""
    assert not can_access(Feature.AI_GENERATION, context_for(Plan.FREE).plan)
    assert can_access(Feature.AI_GENERATION, context_for(Plan.PAID).plan)
