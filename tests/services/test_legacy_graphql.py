"""Legacy GraphQL — users, Calendly clients and the studio newsletter over /graphql.

Invariants:
    - Resolver failures surface as GraphQL errors with an extensions.code
    - Client resolvers require a valid bearer token ("Invalid User Token")
"""

import pytest

from pvs_api.legacy_graphql import auth

PASSWORD = "Sup3r$ecret"

REGISTER = """
mutation Register($email: String!, $password: String!) {
  register(email: $email, password: $password, firstName: "Ada", lastName: "Lovelace") {
    id email firstName token
  }
}
"""

LOGIN = """
mutation Login($email: String!, $password: String!) {
  login(email: $email, password: $password) { id email token }
}
"""


async def gql(client, query, variables=None, token=None):
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    res = await client.post(
        "/graphql", json={"query": query, "variables": variables or {}}, headers=headers,
    )
    assert res.status_code == 200
    return res.json()


def first_error(body):
    assert body.get("errors"), body
    return body["errors"][0]


@pytest.fixture
async def registered(client):
    body = await gql(client, REGISTER, {"email": "Ada@Engine.test", "password": PASSWORD})
    return body["data"]["register"]


# ─── Users ──────────────────────────────────────────────────────

async def test_register_returns_token(registered):
    assert registered["email"] == "ada@engine.test"
    assert registered["firstName"] == "Ada"
    payload = auth.decode_token(registered["token"])
    assert payload["email"] == "ada@engine.test"
    assert payload["id"] == registered["id"]


async def test_register_duplicate(client, registered):
    body = await gql(client, REGISTER, {"email": "ada@engine.test", "password": PASSWORD})
    error = first_error(body)
    assert error["message"] == "User Exists"
    assert error["extensions"]["code"] == "BAD_USER_INPUT"
    assert error["extensions"]["errors"] == {
        "email": "User already exists with these credentials",
    }


async def test_register_validation(client):
    body = await gql(client, REGISTER, {"email": "nope", "password": "weak"})
    error = first_error(body)
    assert error["message"] == "Registration Errors"
    assert set(error["extensions"]["errors"]) == {"email", "password"}


async def test_login(client, registered):
    body = await gql(client, LOGIN, {"email": "ada@engine.test", "password": PASSWORD})
    assert body["data"]["login"]["id"] == registered["id"]
    assert auth.decode_token(body["data"]["login"]["token"]) is not None


async def test_login_wrong_password(client, registered):
    body = await gql(client, LOGIN, {"email": "ada@engine.test", "password": "Wr0ng$pass"})
    error = first_error(body)
    assert error["message"] == "Wrong password"
    assert error["extensions"]["errors"] == {"general": "Invalid credentials"}


async def test_login_unknown_user(client):
    body = await gql(client, LOGIN, {"email": "nobody@engine.test", "password": PASSWORD})
    assert first_error(body)["message"].startswith("User not found")


async def test_logged_in_user_requires_token(client, registered):
    query = "{ getLoggedInUser { email } }"
    error = first_error(await gql(client, query))
    assert error["message"] == "Invalid User Token"
    assert error["extensions"]["code"] == "UNAUTHENTICATED"

    body = await gql(client, query, token=registered["token"])
    assert body["data"]["getLoggedInUser"]["email"] == "ada@engine.test"


async def test_get_all_users_empty(client):
    error = first_error(await gql(client, "{ getAllUsers { id } }"))
    assert error["message"] == "No Users"


async def test_update_password_rejects_same_password(client, registered):
    mutation = """
    mutation($email: String!, $pw: String!) {
      updatePassword(email: $email, newPassword: $pw) { token }
    }
    """
    same = await gql(client, mutation, {"email": "ada@engine.test", "pw": PASSWORD})
    assert first_error(same)["message"] == "Matching Passwords"

    changed = await gql(client, mutation, {"email": "ada@engine.test", "pw": "N3w$ecret!"})
    assert changed["data"]["updatePassword"]["token"]
    login = await gql(client, LOGIN, {"email": "ada@engine.test", "password": "N3w$ecret!"})
    assert "errors" not in login


async def test_delete_user_returns_remaining(client, registered):
    await gql(client, REGISTER, {"email": "bob@engine.test", "password": PASSWORD})
    body = await gql(
        client, "mutation($id: String!) { deleteUser(id: $id) { email } }",
        {"id": registered["id"]},
    )
    assert body["data"]["deleteUser"] == [{"email": "bob@engine.test"}]


async def test_password_reset_email(client, outbox, registered):
    body = await gql(
        client,
        'mutation { sendPasswordResetEmail(email: "ada@engine.test") { email } }',
    )
    assert body["data"]["sendPasswordResetEmail"] == [{"email": "ada@engine.test"}]
    [sent] = outbox["send_password_reset_email"]
    assert sent["args"] == ("ada@engine.test",)
    assert auth.decode_token(sent["token"])["email"] == "ada@engine.test"


# ─── Clients ────────────────────────────────────────────────────

@pytest.fixture
def calendly(monkeypatch):
    event = {
        "created_at": "2024-05-01T10:00:00Z",
        "start_time": "2024-05-08T15:00:00Z",
        "location": {"type": "google_conference", "join_url": "https://meet.test/abc"},
    }
    invitee = {
        "email": "prospect@shop.test", "name": "Pat Prospect",
        "first_name": "Pat", "last_name": "Prospect",
        "questions_and_answers": [
            {"question": "Budget?", "answer": "5k", "position": 0},
        ],
    }

    async def get_event(uri, **kwargs):
        return event

    async def get_invitee(uri, **kwargs):
        return invitee

    monkeypatch.setattr("pvs_api.infrastructure.calendly.get_event", get_event)
    monkeypatch.setattr("pvs_api.infrastructure.calendly.get_invitee", get_invitee)
    return invitee


SET_MEETINGS = """
mutation {
  setClientMeetings(eventUri: "https://calendly.test/e/1", inviteeUri: "https://calendly.test/i/1") {
    id email status meetings { url scheduledFor prepInfo { question answer } }
  }
}
"""


async def test_set_client_meetings_creates_then_appends(client, outbox, calendly):
    created = (await gql(client, SET_MEETINGS))["data"]["setClientMeetings"]
    assert created["email"] == "prospect@shop.test"
    assert created["status"] == "Phase 1: Information Gathering"
    assert created["meetings"] == [{
        "url": "https://meet.test/abc",
        "scheduledFor": "2024-05-08T15:00:00Z",
        "prepInfo": [{"question": "Budget?", "answer": "5k"}],
    }]
    assert len(outbox["send_intro_meeting_email"]) == 1

    again = (await gql(client, SET_MEETINGS))["data"]["setClientMeetings"]
    assert again["id"] == created["id"]
    assert len(again["meetings"]) == 2
    assert len(outbox["send_intro_meeting_email"]) == 1


async def test_set_client_meetings_survives_email_failure(client, outbox, calendly):
    outbox["fail"].add("send_intro_meeting_email")
    body = await gql(client, SET_MEETINGS)
    assert "errors" not in body
    assert body["data"]["setClientMeetings"]["email"] == "prospect@shop.test"


async def test_client_queries_require_token(client):
    error = first_error(await gql(client, "{ getAllClients { id } }"))
    assert error["message"] == "Invalid User Token"


async def test_edit_client_notes_and_project(client, outbox, calendly, registered):
    created = (await gql(client, SET_MEETINGS))["data"]["setClientMeetings"]
    token = registered["token"]

    notes = await gql(client, """
      mutation($id: String!) { editClientNotes(clientID: $id, notes: ["Call back Friday"]) { notes } }
    """, {"id": created["id"]}, token=token)
    assert notes["data"]["editClientNotes"] == [{"notes": ["Call back Friday"]}]

    project = await gql(client, """
      mutation($id: String!) {
        editClientProject(clientID: $id, title: "Storefront", externalDependencies: ["Stripe"]) {
          project { title domain externalDependencies }
        }
      }
    """, {"id": created["id"]}, token=token)
    assert project["data"]["editClientProject"][0]["project"] == {
        "title": "Storefront", "domain": None, "externalDependencies": ["Stripe"],
    }

    fetched = await gql(
        client, "query($id: String!) { getClient(clientID: $id) { project { title } } }",
        {"id": created["id"]}, token=token,
    )
    assert fetched["data"]["getClient"]["project"]["title"] == "Storefront"


async def test_edit_client_notes_requires_notes(client, registered):
    body = await gql(client, """
      mutation { editClientNotes(clientID: "x", notes: []) { id } }
    """, token=registered["token"])
    assert first_error(body)["message"] == "Notes are required"


async def test_unknown_client(client, registered):
    body = await gql(
        client, '{ getClient(clientID: "not-a-uuid") { id } }', token=registered["token"],
    )
    assert first_error(body)["message"] == "Client not found"


# ─── Newsletter ─────────────────────────────────────────────────

ADD_PARTICIPANT = """
mutation($email: String!) { addNewsletterParticipant(email: $email, name: "Reader") { email subscribed } }
"""


async def test_newsletter_participant(client):
    body = await gql(client, ADD_PARTICIPANT, {"email": "reader@news.test"})
    assert body["data"]["addNewsletterParticipant"] == {
        "email": "reader@news.test", "subscribed": True,
    }
    listed = await gql(client, "{ getSubscribedNewsletterUsers { email } }")
    assert listed["data"]["getSubscribedNewsletterUsers"] == [{"email": "reader@news.test"}]


async def test_newsletter_duplicate(client):
    await gql(client, ADD_PARTICIPANT, {"email": "reader@news.test"})
    body = await gql(client, ADD_PARTICIPANT, {"email": "reader@news.test"})
    assert first_error(body)["message"] == "You are already subscribed."


async def test_newsletter_blank_email(client):
    body = await gql(client, ADD_PARTICIPANT, {"email": "  "})
    assert first_error(body)["message"] == "Email is required"


async def test_calendly_participant(client, calendly):
    body = await gql(client, """
      mutation { addCalendlyParticipant(inviteeUri: "https://calendly.test/i/1") { email name } }
    """)
    assert body["data"]["addCalendlyParticipant"] == {
        "email": "prospect@shop.test", "name": "Pat Prospect",
    }


async def test_update_password_rejects_overlong_password(client, registered):
    mutation = """
    mutation($email: String!, $pw: String!) {
      updatePassword(email: $email, newPassword: $pw) { token }
    }
    """
    body = await gql(client, mutation, {"email": "ada@engine.test", "pw": "Aa1!" + "x" * 80})
    error = first_error(body)
    assert error["message"] == "Invalid Credentials"
    assert error["extensions"]["errors"] == {"password": "Invalid password"}
