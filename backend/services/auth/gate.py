from models.account import Feature, Plan, SessionContext
from models.template import TemplateDescriptor
from exceptions import FeatureLockedError, InputValidationError


# Features available only on the paid plan.
PREMIUM_FEATURES: frozenset[Feature] = frozenset({
    Feature.AI_GENERATION,
    Feature.COVER_LETTER,
    Feature.SAVE_COVER_LETTER,
    Feature.PREMIUM_TEMPLATES,
    Feature.WATERMARK_FREE_EXPORT,
})

LOCKED_MESSAGES = {
    Feature.AI_GENERATION: "AI generation is a premium feature. Upgrade to generate your resume with AI.",
    Feature.COVER_LETTER: "Cover Letter generation is a premium feature. Please upgrade to access this tool.",
    Feature.SAVE_COVER_LETTER: "Saving cover letters is a premium feature. Please upgrade to access this functionality.",
    Feature.PREMIUM_TEMPLATES: "This is a premium template. Upgrade to Premium to use it!",
}


def can_access(feature: Feature, plan: Plan) -> bool:
    """Whether a plan unlocks a feature."""
    if feature in PREMIUM_FEATURES:
        return plan == Plan.PAID
    return True


def can_use_template(template: TemplateDescriptor, plan: Plan) -> bool:
    if not template.is_active:
        return False
    return not template.is_premium or can_access(Feature.PREMIUM_TEMPLATES, plan)


def require_feature(context: SessionContext, feature: Feature) -> None:
    """Raise FeatureLockedError unless the caller's plan unlocks ``feature``."""
    if not can_access(feature, context.plan):
        raise FeatureLockedError(feature.value, LOCKED_MESSAGES.get(feature))


def require_template(context: SessionContext, template: TemplateDescriptor) -> None:
    if not template.is_active:
        raise InputValidationError("template_id", "This template is no longer available.")
    if not can_use_template(template, context.plan):
        raise FeatureLockedError(
            Feature.PREMIUM_TEMPLATES.value, LOCKED_MESSAGES[Feature.PREMIUM_TEMPLATES]
        )
