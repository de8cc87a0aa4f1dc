"""ORM Models — SQLAlchemy declarative models for both datastores.

Invariants:
    - Primary models inherit from Base, Domani models from DomaniBase (db/base.py)
    - Every model exposes to_dict() for select('*')-shaped responses

Design Decisions:
    - One file per entity for locality; the Domani tables share one file (separate datastore)
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from pvs_api.models.client import Client  # noqa: F401
from pvs_api.models.website import Website  # noqa: F401
from pvs_api.models.app import App  # noqa: F401
from pvs_api.models.app_deployment import AppDeployment  # noqa: F401
from pvs_api.models.deployment import Deployment  # noqa: F401
from pvs_api.models.agenda_item import AgendaItem  # noqa: F401
from pvs_api.models.cms_page import CmsPage  # noqa: F401
from pvs_api.models.contact_form import ContactFormSubmission  # noqa: F401
from pvs_api.models.newsletter_subscriber import NewsletterSubscriber  # noqa: F401
from pvs_api.models.lead import Lead  # noqa: F401
from pvs_api.models.audit_request import AuditRequest  # noqa: F401
from pvs_api.models.legacy_user import LegacyUser  # noqa: F401
from pvs_api.models.legacy_client import LegacyClient  # noqa: F401
from pvs_api.models.newsletter_participant import NewsletterParticipant  # noqa: F401
from pvs_api.models.domani import (  # noqa: F401
    BetaFeedback, SupportRequest, WaitlistEntry, Profile,
)
