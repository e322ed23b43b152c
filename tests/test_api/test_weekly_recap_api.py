"""HTTP tests for the weekly recap endpoints."""

import json

GUEST_AUTH = {"Authorization": "Bearer guest-token-test"}

PREMIUM_PAYLOAD = {
    "scriptureSection": {"reflections": ["Isaiah 2"], "sharedReflections": []},
    "bodySection": {"practices": ["Breath Prayer"], "notes": []},
    "communitySection": {"checkInSummary": "A quiet week", "sharedPosts": []},
    "promptingSection": {"suggestions": ["Walk slowly"]},
    "personalSynthesis": "You made room for stillness.",
    "practiceVisualization": {"weeklyData": [{"date": "Sun", "count": 2}]},
}


async def test_requires_auth(client):
    for path in (
        "/api/weekly-recap/current",
        "/api/weekly-recap/history",
        "/api/weekly-recap/preferences",
        "/api/weekly-recap/2025-10-05",
    ):
        response = await client.get(path)
        assert response.status_code == 401, path

    response = await client.get(
        "/api/weekly-recap/current", headers={"Authorization": "Bearer unknown"}
    )
    assert response.status_code == 401


async def test_current_creates_free_recap_once(client, text_generator):
    first = await client.get("/api/weekly-recap/current", headers=GUEST_AUTH)
    second = await client.get("/api/weekly-recap/current", headers=GUEST_AUTH)

    assert first.status_code == 200
    body = first.json()
    assert body["weekStartDate"] == "2025-10-05"
    assert body["weekEndDate"] == "2025-10-11"
    recap = body["recap"]
    assert recap["userId"] == "guest-user"
    assert recap["isPremium"] is False
    assert recap["bodySection"] == {"practices": ["Breath Prayer"], "notes": ["Slow breath"]}
    assert "personalSynthesis" not in recap
    assert "practiceVisualization" not in recap

    assert second.json()["recap"] == recap
    assert text_generator.generate.await_count == 1


async def test_generate_premium_upgrades_same_row(client, text_generator):
    free = (await client.get("/api/weekly-recap/current", headers=GUEST_AUTH)).json()["recap"]
    text_generator.generate.return_value = json.dumps(PREMIUM_PAYLOAD)

    response = await client.post(
        "/api/weekly-recap/generate", json={"isPremium": True}, headers=GUEST_AUTH
    )

    assert response.status_code == 200
    recap = response.json()["recap"]
    assert recap["id"] == free["id"]
    assert recap["isPremium"] is True
    assert recap["personalSynthesis"] == "You made room for stillness."
    assert recap["practiceVisualization"]["weeklyData"][0]["count"] == 2


async def test_generate_without_body_is_free(client):
    response = await client.post("/api/weekly-recap/generate", headers=GUEST_AUTH)

    assert response.status_code == 200
    assert response.json()["recap"]["isPremium"] is False


async def test_model_failure_returns_safe_default(client, text_generator):
    text_generator.generate.side_effect = RuntimeError("provider down")

    response = await client.get("/api/weekly-recap/current", headers=GUEST_AUTH)

    assert response.status_code == 200
    recap = response.json()["recap"]
    assert recap["communitySection"] == {"checkInSummary": "", "sharedPosts": []}
    assert recap["promptingSection"] == {"suggestions": []}


async def test_explicit_week_lookup(client, text_generator):
    await client.get("/api/weekly-recap/current", headers=GUEST_AUTH)

    found = await client.get("/api/weekly-recap/2025-10-05", headers=GUEST_AUTH)
    missing = await client.get("/api/weekly-recap/2025-09-28", headers=GUEST_AUTH)

    assert found.json()["recap"]["weekStartDate"] == "2025-10-05"
    assert missing.status_code == 200
    assert missing.json() == {"recap": None}
    assert text_generator.generate.await_count == 1


async def test_explicit_week_rejects_malformed_date(client):
    response = await client.get("/api/weekly-recap/last-week", headers=GUEST_AUTH)
    assert response.status_code == 400


async def test_history(client):
    empty = await client.get("/api/weekly-recap/history", headers=GUEST_AUTH)
    assert empty.json() == {"recaps": []}

    await client.get("/api/weekly-recap/current", headers=GUEST_AUTH)
    response = await client.get("/api/weekly-recap/history?limit=5", headers=GUEST_AUTH)

    recaps = response.json()["recaps"]
    assert len(recaps) == 1
    assert recaps[0]["weekStartDate"] == "2025-10-05"


async def test_preferences_defaults_and_update(client):
    response = await client.get("/api/weekly-recap/preferences", headers=GUEST_AUTH)
    assert response.json()["preferences"] == {
        "userId": "guest-user",
        "deliveryDay": "sunday",
        "deliveryTime": "18:00",
    }

    response = await client.post(
        "/api/weekly-recap/preferences",
        json={"deliveryDay": "monday", "deliveryTime": "07:15"},
        headers=GUEST_AUTH,
    )
    assert response.status_code == 200
    assert response.json()["preferences"]["deliveryDay"] == "monday"
    assert response.json()["preferences"]["deliveryTime"] == "07:15"


async def test_preferences_reject_invalid_day(client):
    response = await client.post(
        "/api/weekly-recap/preferences",
        json={"deliveryDay": "friday"},
        headers=GUEST_AUTH,
    )

    assert response.status_code == 400
    current = await client.get("/api/weekly-recap/preferences", headers=GUEST_AUTH)
    assert current.json()["preferences"]["deliveryDay"] == "sunday"


async def test_preferences_reject_empty_update(client):
    response = await client.post(
        "/api/weekly-recap/preferences", json={}, headers=GUEST_AUTH
    )

    assert response.status_code == 400
    assert "deliveryDay" in response.json()["detail"]


async def test_failed_premium_generate_keeps_stored_premium_recap(client, text_generator):
    text_generator.generate.return_value = json.dumps(PREMIUM_PAYLOAD)
    await client.post("/api/weekly-recap/generate", json={"isPremium": True}, headers=GUEST_AUTH)
    text_generator.generate.return_value = "not json"

    response = await client.post(
        "/api/weekly-recap/generate", json={"isPremium": True}, headers=GUEST_AUTH
    )

    recap = response.json()["recap"]
    assert recap["isPremium"] is True
    assert recap["personalSynthesis"] == "You made room for stillness."
    assert recap["promptingSection"] == {"suggestions": ["Walk slowly"]}
