"""Domani Routes — isolated datastore listings, unsubscribes and the beta-launch blast.

Invariants:
    - Listings read the Domani session only (primary DB is empty here)
    - Soft-deleted users hidden unless include_deleted=true
    - A failed recipient is reported and the blast continues
"""

from datetime import timedelta

import pytest

from pvs_api.db.base import utcnow
from pvs_api.models.domani import BetaFeedback, Profile, WaitlistEntry


@pytest.fixture
async def seed_domani(domani_db):
    now = utcnow()
    domani_db.add_all([
        BetaFeedback(category="bug", message="Crash on save", platform="ios",
                     created_at=now - timedelta(hours=2)),
        BetaFeedback(category="love", message="Great app", platform="android",
                     created_at=now - timedelta(hours=1)),
        WaitlistEntry(email="early@domani.test", confirmed=True),
        WaitlistEntry(email="later@domani.test", confirmed=False),
        Profile(email="active@domani.test", tier="premium", signup_cohort="early_adopter"),
        Profile(email="gone@domani.test", deleted_at=now),
    ])
    await domani_db.commit()


async def test_feedback_list_newest_first(client, seed_domani):
    res = await client.get("/api/domani/feedback")
    body = res.json()
    assert body["total"] == 2
    assert (body["limit"], body["offset"]) == (50, 0)
    assert [i["message"] for i in body["items"]] == ["Great app", "Crash on save"]


async def test_feedback_filters(client, seed_domani):
    res = await client.get("/api/domani/feedback?category=bug&platform=ios")
    assert [i["message"] for i in res.json()["items"]] == ["Crash on save"]

    res = await client.get("/api/domani/feedback?category=rant")
    assert res.status_code == 400


async def test_waitlist_confirmed_filter(client, seed_domani):
    res = await client.get("/api/domani/waitlist?confirmed=true")
    assert [i["email"] for i in res.json()["items"]] == ["early@domani.test"]


async def test_waitlist_rows_keep_metadata_column_name(client, seed_domani):
    res = await client.get("/api/domani/waitlist")
    assert "metadata" in res.json()["items"][0]


async def test_users_hide_deleted(client, seed_domani):
    res = await client.get("/api/domani/users")
    assert [u["email"] for u in res.json()["items"]] == ["active@domani.test"]

    res = await client.get("/api/domani/users?include_deleted=true")
    assert res.json()["total"] == 2

    res = await client.get("/api/domani/users?tier=premium&cohort=early_adopter")
    assert res.json()["total"] == 1


async def test_limit_bounds(client):
    assert (await client.get("/api/domani/support?limit=0")).status_code == 400
    assert (await client.get("/api/domani/support?limit=101")).status_code == 400


async def test_waitlist_unsubscribe(client, seed_domani):
    res = await client.post(
        "/api/domani/waitlist/unsubscribe", json={"email": "Early@Domani.test"},
    )
    assert res.status_code == 200
    assert res.json()["email"] == "early@domani.test"

    res = await client.get("/api/domani/waitlist?status=unsubscribed")
    assert res.json()["total"] == 1


async def test_waitlist_unsubscribe_unknown(client, seed_domani):
    res = await client.post(
        "/api/domani/waitlist/unsubscribe", json={"email": "nobody@domani.test"},
    )
    assert res.status_code == 404
    assert res.json() == {"error": "Email not found on waitlist"}


async def test_user_unsubscribe_soft_deletes_once(client, seed_domani):
    res = await client.post("/api/domani/users/unsubscribe", json={"email": "active@domani.test"})
    assert res.status_code == 200

    res = await client.post("/api/domani/users/unsubscribe", json={"email": "active@domani.test"})
    assert res.status_code == 404
    assert res.json() == {"error": "User not found or already unsubscribed"}


async def test_beta_launch_reports_each_recipient(client, monkeypatch):
    sent = []

    async def fake_send(to, subject, html, text=None, **kwargs):
        if to == "bounce@domani.test":
            raise RuntimeError("mailbox unavailable")
        sent.append((to, subject, html))

    monkeypatch.setattr("pvs_api.infrastructure.gmail.send_email", fake_send)
    res = await client.post("/api/domani/beta-launch/send", json={
        "recipients": [
            {"email": "one@domani.test", "name": "One"},
            {"email": "bounce@domani.test"},
            {"email": "two@domani.test"},
        ],
        "iosLink": "https://testflight.apple.com/join/abc",
        "androidLink": "https://play.google.com/apps/testing/domani",
        "delayBetweenEmails": 0,
    })
    assert res.status_code == 200
    body = res.json()
    assert (body["total"], body["sent"], body["failed"]) == (3, 2, 1)
    assert body["results"][1] == {
        "email": "bounce@domani.test", "success": False, "error": "mailbox unavailable",
    }
    assert [s[0] for s in sent] == ["one@domani.test", "two@domani.test"]
    assert "https://testflight.apple.com/join/abc" in sent[0][2]


async def test_beta_launch_validates_body(client):
    res = await client.post("/api/domani/beta-launch/send", json={
        "recipients": [], "iosLink": "nope", "androidLink": "https://x.test",
    })
    assert res.status_code == 400
    fields = {e["field"] for e in res.json()["errors"]}
    assert {"recipients", "iosLink"} <= fields
