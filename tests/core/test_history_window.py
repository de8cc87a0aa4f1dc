"""Deployment history window — calendar-month arithmetic."""

from datetime import datetime

from pvs_api.services.deployments import HISTORY_MONTHS, months_ago


def test_months_ago_clamps_day():
    assert months_ago(datetime(2024, 5, 31, 12), 3) == datetime(2024, 2, 29, 12)


def test_months_ago_crosses_year():
    assert months_ago(datetime(2024, 2, 15), HISTORY_MONTHS) == datetime(2023, 11, 15)


def test_zero_months_is_identity():
    now = datetime(2024, 7, 4, 9, 30)
    assert months_ago(now, 0) == now
