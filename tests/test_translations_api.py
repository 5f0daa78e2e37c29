"""
Tests for the translation HTTP API
"""
import pytest

API = "/api/v1"


@pytest.fixture
def seeded(make_translation):
    return [
        make_translation("home.welcome", "Welcome", "en", ["web", "mobile"]),
        make_translation("home.welcome", "Bienvenue", "fr", ["web"]),
        make_translation("auth.logout", "Sign out", "en", ["admin"]),
        make_translation("page.title", "Startseite", "de"),
    ]


class TestCrud:

    def test_create_returns_201_with_tags(self, client):
        response = client.post(f"{API}/translations", json={
            "key": "welcome.msg",
            "value": "Hi",
            "locale": "en",
            "tags": ["web"],
        })

        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["key"] == "welcome.msg"
        assert [tag["name"] for tag in data["tags"]] == ["web"]

    def test_duplicate_create_is_409(self, client):
        body = {"key": "welcome.msg", "value": "Hi", "locale": "en"}
        assert client.post(f"{API}/translations", json=body).status_code == 201

        response = client.post(f"{API}/translations", json=body)

        assert response.status_code == 409
        assert response.json()["code"] == "CONFLICT"
        assert client.get(f"{API}/translations").json()["total"] == 1

    def test_missing_field_is_422(self, client):
        response = client.post(f"{API}/translations", json={"key": "k", "locale": "en"})

        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "VALIDATION_FAILED"
        assert "value" in body["details"]["errors"]

    def test_locale_with_separator_is_422(self, client):
        response = client.post(f"{API}/translations", json={"key": "k", "value": "v", "locale": "en:tags"})
        assert response.status_code == 422

    def test_blank_value_is_422(self, client):
        response = client.post(f"{API}/translations", json={"key": "k", "value": "   ", "locale": "en"})
        assert response.status_code == 422
        assert "value" in response.json()["details"]["errors"]

    def test_get_by_id(self, client, seeded):
        response = client.get(f"{API}/translations/{seeded[0].id}")

        assert response.status_code == 200
        assert response.json()["value"] == "Welcome"

    def test_get_unknown_id_is_404(self, client):
        response = client.get(f"{API}/translations/999999")

        assert response.status_code == 404
        assert response.json()["error"] == "Translation not found"

    def test_partial_update_keeps_tags(self, client, seeded):
        response = client.put(f"{API}/translations/{seeded[0].id}", json={"value": "Hello"})

        assert response.status_code == 200
        data = response.json()
        assert data["value"] == "Hello"
        assert sorted(tag["name"] for tag in data["tags"]) == ["mobile", "web"]

    def test_update_replaces_tags(self, client, seeded):
        response = client.put(f"{API}/translations/{seeded[0].id}", json={"tags": ["admin"]})
        assert [tag["name"] for tag in response.json()["tags"]] == ["admin"]

    def test_update_into_taken_pair_is_409(self, client, seeded):
        response = client.put(f"{API}/translations/{seeded[1].id}", json={"locale": "en"})
        assert response.status_code == 409

    def test_update_unknown_id_is_404(self, client):
        response = client.put(f"{API}/translations/999999", json={"value": "x"})
        assert response.status_code == 404

    def test_delete(self, client, seeded):
        translation_id = seeded[2].id
        response = client.delete(f"{API}/translations/{translation_id}")

        assert response.status_code == 200
        assert client.get(f"{API}/translations/{translation_id}").status_code == 404

    def test_delete_unknown_id_is_404(self, client):
        assert client.delete(f"{API}/translations/999999").status_code == 404


class TestListing:

    def test_page_structure(self, client, seeded):
        response = client.get(f"{API}/translations")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 4
        assert body["current_page"] == 1
        assert body["per_page"] == 15
        assert body["last_page"] == 1
        assert [item["id"] for item in body["data"]] == sorted(t.id for t in seeded)

    def test_filters(self, client, seeded):
        body = client.get(f"{API}/translations", params={"key": "welcome", "locale": "fr"}).json()
        assert [(t["key"], t["locale"]) for t in body["data"]] == [("home.welcome", "fr")]

        body = client.get(f"{API}/translations", params={"content": "SIGN"}).json()
        assert [t["key"] for t in body["data"]] == ["auth.logout"]

    def test_tag_filter_repeated_and_comma_separated(self, client, seeded):
        repeated = client.get(f"{API}/translations?tags=admin&tags=mobile").json()
        combined = client.get(f"{API}/translations?tags=admin,mobile").json()

        assert repeated["total"] == 2
        assert [t["id"] for t in repeated["data"]] == [t["id"] for t in combined["data"]]

    def test_search_alias(self, client, seeded):
        listing = client.get(f"{API}/translations", params={"tags": "web"}).json()
        search = client.get(f"{API}/search/translations", params={"tags": "web"}).json()
        assert search == listing

    def test_per_page_is_clamped(self, client, make_translation):
        for i in range(3):
            make_translation(f"k{i}", "v", "en")

        body = client.get(f"{API}/translations", params={"per_page": 500}).json()
        assert body["per_page"] == 100

        body = client.get(f"{API}/translations", params={"per_page": 2, "page": 2}).json()
        assert body["last_page"] == 2
        assert len(body["data"]) == 1


class TestExport:

    def test_export_defaults_to_en(self, client, seeded):
        body = client.get(f"{API}/translations/export").json()

        assert body["locale"] == "en"
        assert body["translations"] == {"home.welcome": "Welcome", "auth.logout": "Sign out"}
        assert body["count"] == 2

    def test_export_with_tags(self, client, seeded):
        body = client.get(f"{API}/translations/export", params={"locale": "en", "tags": "admin"}).json()
        assert body["translations"] == {"auth.logout": "Sign out"}

    def test_export_reflects_writes(self, client):
        created = client.post(f"{API}/translations", json={
            "key": "welcome.msg", "value": "Hi", "locale": "en", "tags": ["web"],
        }).json()
        assert client.post(f"{API}/translations", json={
            "key": "welcome.msg", "value": "Hi again", "locale": "en",
        }).status_code == 409

        export = client.get(f"{API}/translations/export?locale=en").json()
        assert export["translations"]["welcome.msg"] == "Hi"
        tagged = client.get(f"{API}/translations/export?locale=en&tags=web").json()
        assert tagged["translations"]["welcome.msg"] == "Hi"

        client.put(f"{API}/translations/{created['id']}", json={"value": "Hello"})
        assert client.get(f"{API}/translations/export?locale=en").json()["translations"]["welcome.msg"] == "Hello"
        assert client.get(f"{API}/translations/export?locale=en&tags=web").json()["translations"] == {
            "welcome.msg": "Hello"
        }

        client.delete(f"{API}/translations/{created['id']}")
        export = client.get(f"{API}/translations/export?locale=en").json()
        assert "welcome.msg" not in export["translations"]

    def test_locales_and_tags(self, client, seeded):
        assert client.get(f"{API}/translations/locales").json() == {"locales": ["de", "en", "fr"]}
        assert client.get(f"{API}/translations/tags").json() == {"tags": ["admin", "mobile", "web"]}


def test_liveness(client):
    response = client.get("/health/live")
    assert response.status_code == 200
    assert response.json() == {"status": "alive"}
