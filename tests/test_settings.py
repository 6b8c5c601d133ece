"""
Tests for the business settings editor.
"""

from barbershop.data import DEFAULT_SETTINGS


def test_public_settings_start_from_defaults(client):
    response = client.get("/settings")

    assert response.status_code == 200
    assert response.json()["hours_sunday"] == DEFAULT_SETTINGS["hours_sunday"][0]
    assert set(response.json()) == set(DEFAULT_SETTINGS)


def test_update_settings(client, admin_headers):
    response = client.put(
        "/settings",
        json={"values": {"phone": "47 3333-4444", "city": DEFAULT_SETTINGS["city"][0]}},
        headers=admin_headers,
    )

    assert response.status_code == 200
    rows = {row["key"]: row for row in response.json()}
    assert rows["phone"]["value"] == "47 3333-4444"
    assert rows["phone"]["category"] == "contact"
    assert client.get("/settings").json()["phone"] == "47 3333-4444"


def test_unknown_setting_is_rejected(client, admin_headers):
    response = client.put("/settings", json={"values": {"tiktok": "@shop"}}, headers=admin_headers)

    assert response.status_code == 422


def test_settings_admin_only(client, client_headers):
    assert client.put("/settings", json={"values": {"phone": "1"}}).status_code == 401
    assert client.get("/settings/all", headers=client_headers).status_code == 403


def test_all_settings_grouped_by_category(client, admin_headers):
    rows = client.get("/settings/all", headers=admin_headers).json()

    categories = [row["category"] for row in rows]
    assert categories == sorted(categories)
    assert len(rows) == len(DEFAULT_SETTINGS)
