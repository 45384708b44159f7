from __future__ import annotations

from pydantic.alias_generators import to_camel

from utils.defaults import ABOUT_DEFAULTS, SETTINGS_DEFAULTS

CAMEL_SETTINGS = {to_camel(k): v for k, v in SETTINGS_DEFAULTS.items()}
CAMEL_ABOUT = {to_camel(k): v for k, v in ABOUT_DEFAULTS.items()}


def test_fresh_settings_return_every_default(client):
    response = client.get("/api/settings")

    assert response.status_code == 200
    assert response.json() == CAMEL_SETTINGS
    assert response.json()["stat1Value"] == "99.9%"


def test_settings_save_replaces_all_fields(admin_client):
    first = admin_client.post(
        "/api/settings",
        json={"currency": "inr", "heroTitleLine1": "Fly Higher", "supportLink": "https://example.com/help"},
    )
    assert first.status_code == 200
    assert first.json()["currency"] == "inr"

    second = admin_client.post("/api/settings", json={"heroTitleLine2": "With Phoenix", "stat1Value": ""})
    settings = admin_client.get("/api/settings").json()

    assert second.json() == settings
    assert settings["heroTitleLine2"] == "With Phoenix"
    assert settings["heroTitleLine1"] == CAMEL_SETTINGS["heroTitleLine1"]
    assert settings["supportLink"] == CAMEL_SETTINGS["supportLink"]
    assert settings["currency"] == "usd"
    assert settings["stat1Value"] == "99.9%"


def test_invalid_settings_are_rejected(admin_client):
    for body in (
        {"currency": "eur"},
        {"supportLink": "discord"},
        {"email": "not-an-email"},
        {"supportLink": "https://example.com/" + "a" * 500},
        {"stat1Label": "l" * 101},
        {"heroTitleLine1": "t" * 256},
    ):
        response = admin_client.post("/api/settings", json=body)
        assert response.status_code == 400, body

    assert admin_client.get("/api/settings").json() == CAMEL_SETTINGS


def test_about_page_defaults_and_save(admin_client):
    assert admin_client.get("/api/about").json() == CAMEL_ABOUT

    response = admin_client.post("/api/about", json={"companyName": "Phoenix Cloud Ltd", "yearsExperience": "7"})

    assert response.status_code == 200
    about = admin_client.get("/api/about").json()
    assert about["companyName"] == "Phoenix Cloud Ltd"
    assert about["yearsExperience"] == "7"
    assert about["visionTitle"] == CAMEL_ABOUT["visionTitle"]


def test_team_member_crud(admin_client):
    created = admin_client.post(
        "/api/team-members",
        json={"name": "Ava", "role": "Founder", "imageUrl": "https://cdn.example.com/ava.png", "order": 2},
    )
    assert created.status_code == 201
    member = created.json()
    assert member["description"] == ""

    admin_client.post("/api/team-members", json={"name": "Ben", "role": "Support", "order": 1})
    assert [m["name"] for m in admin_client.get("/api/team-members").json()] == ["Ben", "Ava"]

    patched = admin_client.patch(f"/api/team-members/{member['id']}", json={"role": "CEO"})
    assert patched.json() == {**member, "role": "CEO"}

    bad = admin_client.post("/api/team-members", json={"name": "Cy", "role": "Ops", "imageUrl": "ftp://x"})
    assert bad.status_code == 400

    assert admin_client.delete(f"/api/team-members/{member['id']}").json() == {"success": True}
    assert admin_client.get(f"/api/team-members/{member['id']}").status_code == 404
