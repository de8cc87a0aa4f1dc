"""Domain Types — value sets shared by schemas, services and models.

Invariants:
    - Every enum is a str Enum: values serialize as-is in JSON and in DB columns
    - Enum values are the exact strings stored in the datastore
"""

from enum import Enum


# ─── Projects ───────────────────────────────────────────────────

class ProjectStatus(str, Enum):
    """Lifecycle of a website or app project."""
    PLANNING = "planning"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    LIVE = "live"
    ON_HOLD = "on_hold"
    ARCHIVED = "archived"


class ReorderItemType(str, Enum):
    WEBSITE = "website"
    APP = "app"


# ─── Deployments ────────────────────────────────────────────────

class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class AppDeploymentStatus(str, Enum):
    """No transition rules: any status may follow any other."""
    PENDING = "pending"
    DEPLOYING = "deploying"
    DEPLOYED = "deployed"
    FAILED = "failed"
    ROLLED_BACK = "rolled_back"


class IndexingStatus(str, Enum):
    """Per-URL search indexing state. Only moves forward."""
    PENDING = "pending"
    REQUESTED = "requested"
    INDEXED = "indexed"


# ─── Agenda ─────────────────────────────────────────────────────

class AgendaStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


ACTIVE_AGENDA_STATUSES = (AgendaStatus.PENDING, AgendaStatus.IN_PROGRESS)


# ─── Domani ─────────────────────────────────────────────────────

class FeedbackCategory(str, Enum):
    BUG = "bug"
    FEATURE = "feature"
    LOVE = "love"
    GENERAL = "general"


class Platform(str, Enum):
    IOS = "ios"
    ANDROID = "android"


class UserTier(str, Enum):
    FREE = "free"
    PREMIUM = "premium"
    LIFETIME = "lifetime"


class SignupCohort(str, Enum):
    FRIENDS_FAMILY = "friends_family"
    EARLY_ADOPTER = "early_adopter"
    GENERAL = "general"


# ─── Leads ──────────────────────────────────────────────────────

class LeadBudget(str, Enum):
    UNDER_1K = "<1k"
    FROM_1_TO_3K = "1-3k"
    FROM_3_TO_6K = "3-6k"
    FROM_6_TO_10K = "6-10k"
    OVER_10K = "10k+"


class LeadTimeline(str, Enum):
    ASAP = "ASAP"
    ONE_TO_TWO_MONTHS = "1-2mo"
    THREE_TO_SIX_MONTHS = "3-6mo"
    SIX_PLUS_MONTHS = "6+mo"
    UNSURE = "unsure"


PROJECT_STATUSES = tuple(s.value for s in ProjectStatus)


def invalid_project_status_detail() -> str:
    return f"Status must be one of: {', '.join(PROJECT_STATUSES)}"
