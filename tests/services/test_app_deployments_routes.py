"""App Deployment Routes — release records, active list and latest per environment.

Invariants:
    - New records are stored as deployed with deployed_at set
    - rolled_back sets rolled_back_at and keeps the reason
    - latest only considers status == deployed
"""

from uuid import uuid4


async def _deploy(client, app_id, **overrides):
    body = {"app_id": str(app_id), "version": "1.0.0", "deploy_summary": "First release"}
    body.update(overrides)
    res = await client.post("/api/app-deployments", json=body)
    assert res.status_code == 201, res.text
    return res.json()


async def test_create_is_deployed(client, seed_app):
    record = await _deploy(client, seed_app.id, commit_sha="abc1234")
    assert record["status"] == "deployed"
    assert record["environment"] == "production"
    assert record["deployed_at"] is not None


async def test_create_unknown_app(client):
    res = await client.post("/api/app-deployments", json={
        "app_id": str(uuid4()), "version": "1", "deploy_summary": "x",
    })
    assert res.status_code == 404


async def test_commit_sha_length(client, seed_app):
    res = await client.post("/api/app-deployments", json={
        "app_id": str(seed_app.id), "version": "1", "deploy_summary": "x",
        "commit_sha": "abc",
    })
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "commit_sha"


async def test_list_by_app_filters_environment(client, seed_app):
    await _deploy(client, seed_app.id, environment="staging", version="0.9.0")
    await _deploy(client, seed_app.id, version="1.0.0")

    res = await client.get(f"/api/apps/{seed_app.id}/deployments?environment=staging")
    body = res.json()
    assert body["app_name"] == "Acme Orders"
    assert body["total"] == 1
    assert body["limit"] == 20 and body["offset"] == 0
    assert [d["version"] for d in body["deployments"]] == ["0.9.0"]


async def test_list_by_unknown_app(client):
    res = await client.get(f"/api/apps/{uuid4()}/deployments")
    assert res.status_code == 404


async def test_latest_by_environment(client, seed_app):
    await _deploy(client, seed_app.id, version="1.0.0")
    rolled = await _deploy(client, seed_app.id, version="1.1.0")
    await client.patch(
        f"/api/app-deployments/{rolled['id']}/status", json={"status": "rolled_back"},
    )

    res = await client.get(f"/api/apps/{seed_app.id}/deployments/latest")
    latest = res.json()["latest"]
    assert latest["production"]["version"] == "1.0.0"
    assert latest["staging"] is None
    assert latest["development"] is None


async def test_active_lists_pending_and_deploying(client, seed_app):
    record = await _deploy(client, seed_app.id)
    await client.patch(
        f"/api/app-deployments/{record['id']}/status", json={"status": "deploying"},
    )
    res = await client.get("/api/app-deployments/active")
    body = res.json()
    assert body["total"] == 1
    assert body["deployments"][0]["apps"] == {
        "id": str(seed_app.id), "name": "Acme Orders", "app_slug": "acme-orders",
    }


async def test_get_detail_nests_app_and_client(client, seed_app, seed_client):
    record = await _deploy(client, seed_app.id)
    res = await client.get(f"/api/app-deployments/{record['id']}")
    body = res.json()
    assert body["app"]["app_slug"] == "acme-orders"
    assert body["client"]["firstname"] == "Ada"


async def test_get_unknown_deployment(client):
    res = await client.get(f"/api/app-deployments/{uuid4()}")
    assert res.status_code == 404
    assert res.json() == {"error": "Deployment not found"}


async def test_rollback_records_reason(client, seed_app):
    record = await _deploy(client, seed_app.id)
    res = await client.patch(f"/api/app-deployments/{record['id']}/status", json={
        "status": "rolled_back", "rollback_reason": "Crash on launch",
    })
    body = res.json()
    assert body["status"] == "rolled_back"
    assert body["rolled_back_at"] is not None
    assert body["rollback_reason"] == "Crash on launch"


async def test_unknown_status_rejected(client, seed_app):
    record = await _deploy(client, seed_app.id)
    res = await client.patch(
        f"/api/app-deployments/{record['id']}/status", json={"status": "exploded"},
    )
    assert res.status_code == 400
