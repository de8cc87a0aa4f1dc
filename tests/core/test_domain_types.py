"""Domain Types — verifies enum values match the strings stored in the datastore."""

from pvs_api.core.domain_types import (
    ACTIVE_AGENDA_STATUSES, AgendaStatus, AppDeploymentStatus, Environment,
    IndexingStatus, LeadBudget, LeadTimeline, ProjectStatus,
)


def test_project_statuses():
    assert [s.value for s in ProjectStatus] == [
        "planning", "in_progress", "review", "live", "on_hold", "archived",
    ]


def test_enums_serialize_to_str():
    assert Environment.PRODUCTION == "production"
    assert AppDeploymentStatus("rolled_back") is AppDeploymentStatus.ROLLED_BACK


def test_indexing_states_in_lifecycle_order():
    assert [s.value for s in IndexingStatus] == ["pending", "requested", "indexed"]


def test_active_agenda_excludes_completed():
    assert AgendaStatus.COMPLETED not in ACTIVE_AGENDA_STATUSES
    assert set(ACTIVE_AGENDA_STATUSES) == {AgendaStatus.PENDING, AgendaStatus.IN_PROGRESS}


def test_lead_value_sets():
    assert {b.value for b in LeadBudget} == {"<1k", "1-3k", "3-6k", "6-10k", "10k+"}
    assert {t.value for t in LeadTimeline} == {"ASAP", "1-2mo", "3-6mo", "6+mo", "unsure"}
