"""CMS, Contact Form and Newsletter Routes — slug- and website-addressed content."""

import uuid


# ─── CMS ────────────────────────────────────────────────────────

async def test_cms_add_and_list(client, seed_client):
    res = await client.post("/api/cms/acme-bakery", json={
        "page": "home", "content": {"hero": "Fresh bread daily"}, "active": True,
    })
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "CMS item added"
    [page] = body["data"]
    assert page["page"] == "home"
    assert page["client_id"] == str(seed_client.id)

    await client.post("/api/cms/acme-bakery", json={
        "page": "about", "content": "draft", "active": False,
    })
    everything = (await client.get("/api/cms/acme-bakery")).json()
    assert {p["page"] for p in everything} == {"home", "about"}
    active = (await client.get("/api/cms/acme-bakery/active")).json()
    assert [p["page"] for p in active] == ["home"]
    assert len((await client.get("/api/cms")).json()) == 2


async def test_cms_unknown_client_slug(client):
    res = await client.get("/api/cms/nobody")
    assert res.status_code == 404
    assert res.json() == {"error": "Client not found"}


async def test_cms_requires_content(client, seed_client):
    res = await client.post("/api/cms/acme-bakery", json={"page": "home", "active": True})
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "content"


# ─── Contact forms ──────────────────────────────────────────────

def _submission(**overrides):
    body = {
        "fullname": "Jane Customer", "email": "jane@customer.test",
        "phone": "555-0100", "data": {"message": "Do you cater weddings?"},
    }
    body.update(overrides)
    return body


async def test_contact_form_forwards_to_owner(client, outbox, seed_website):
    res = await client.post(f"/api/v1/contact-forms/{seed_website.id}", json=_submission())
    assert res.status_code == 201
    [row] = res.json()
    assert row["website_id"] == str(seed_website.id)
    assert row["data"] == {"message": "Do you cater weddings?"}

    [sent] = outbox["send_contact_submission_email"]
    assert sent["to"] == "owner@acme.test"
    assert sent["website_title"] == "Acme Bakery"

    listed = (await client.get("/api/v1/contact-forms")).json()
    assert len(listed) == 1


async def test_contact_form_without_owner_email(client, outbox, seed_website, test_db):
    seed_website.contact_email = None
    await test_db.commit()
    res = await client.post(f"/api/v1/contact-forms/{seed_website.id}", json=_submission())
    assert res.status_code == 201
    assert outbox["send_contact_submission_email"] == []


async def test_contact_form_unknown_website(client, outbox):
    res = await client.post(f"/api/v1/contact-forms/{uuid.uuid4()}", json=_submission())
    assert res.status_code == 404
    assert res.json() == {"error": "Website not found"}


async def test_contact_form_empty_data_rejected(client, seed_website):
    res = await client.post(
        f"/api/v1/contact-forms/{seed_website.id}", json=_submission(data={}),
    )
    assert res.status_code == 400


# ─── Newsletter ─────────────────────────────────────────────────

async def test_newsletter_subscribe(client, seed_client):
    res = await client.post("/api/newsletter/acme-bakery", json={
        "firstName": "Sam", "lastName": "Reader", "email": "sam@reader.test",
    })
    assert res.status_code == 201
    assert res.json() == {"message": "Subscriber added."}

    body = (await client.get("/api/newsletter/all")).json()
    [subscriber] = body["newsletter"]
    assert subscriber["firstname"] == "Sam"
    assert subscriber["client_id"] == str(seed_client.id)


async def test_newsletter_unknown_client(client):
    res = await client.post("/api/newsletter/nobody", json={
        "firstName": "Sam", "lastName": "Reader", "email": "sam@reader.test",
    })
    assert res.status_code == 404


async def test_newsletter_invalid_email(client, seed_client):
    res = await client.post("/api/newsletter/acme-bakery", json={
        "firstName": "Sam", "lastName": "Reader", "email": "not-an-email",
    })
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "email"
