"""API tests for the pack publishing endpoints.

Run with: pytest tests/test_catalog_api.py -v
"""

import json

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from catalog import dependencies
from catalog import models as orm
from catalog.stores.django_store import DjangoCatalogStore
from conftest import PNG


@pytest.fixture
def payload(creator, category, genre):
    return {
        "name": "Warehouse Drums",
        "description": "Dusty kicks and hats",
        "creator_id": str(creator.id),
        "category_id": str(category.id),
        "genre_ids": [str(genre.id)],
        "tags": ["drums", " house ", "drums"],
        "status": "Published",
        "cover": "cover",
        "samples": [
            {"file": "s0", "bpm": 124, "key": "F#m"},
            {"file": "s1", "name": "Groove", "has_stems": True, "stem_files": ["s1-stem0", "s1-stem1"]},
        ],
    }


@pytest.fixture
def create_pack(admin_api_client, payload, wav_upload):
    def create(**overrides):
        body = {**payload, **overrides}
        files = {
            "cover": SimpleUploadedFile("cover.png", PNG, content_type="image/png"),
            "s0": wav_upload("Kick 01.wav"),
            "s1": wav_upload("groove.wav"),
            "s1-stem0": wav_upload("bass.wav"),
            "s1-stem1": wav_upload("drums.wav"),
        }
        return admin_api_client.post(
            "/api/packs", {"payload": json.dumps(body), **files}, format="multipart"
        )

    return create


@pytest.mark.django_db
class TestCreatePackEndpoint:
    """Tests for POST /api/packs."""

    def test_create_published_pack(self, create_pack):
        response = create_pack()

        assert response.status_code == 201
        body = response.json()
        assert body["pack"]["status"] == "Published"
        assert body["pack"]["tags"] == ["drums", "house"]
        assert body["pack"]["cover_url"].startswith("/media/covers/")
        assert [s["name"] for s in body["samples"]] == ["Kick 01", "Groove"]
        assert body["samples"][0]["key"] == "F#m"
        assert len(body["samples"][1]["stems"]) == 2
        assert body["progress"] == [20, 40, 60, 80, 100]

    def test_validation_error_payload(self, create_pack):
        response = create_pack(name="")

        assert response.status_code == 400
        assert response.json() == {
            "error": {
                "code": "VALIDATION_FAILED",
                "message": "Please enter a pack name",
                "details": {"field": "name"},
            }
        }
        assert orm.Pack.objects.count() == 0

    def test_repeated_genre_ids_collapse(self, create_pack, genre):
        response = create_pack(genre_ids=[str(genre.id), str(genre.id)])

        assert response.status_code == 201
        assert response.json()["pack"]["genre_ids"] == [str(genre.id)]

    def test_missing_file_part(self, create_pack):
        response = create_pack(samples=[{"file": "nope"}])
        assert response.status_code == 400
        assert response.json()["error"]["details"] == {"field": "nope"}

    def test_requires_admin(self, api_client, payload):
        response = api_client.post("/api/packs", {"payload": json.dumps(payload)}, format="multipart")
        assert response.status_code == 403


@pytest.mark.django_db
class TestPackEndpoints:
    """Tests for reading, editing and deleting packs."""

    def test_get_pack(self, admin_api_client, create_pack):
        pack_id = create_pack().json()["pack"]["id"]
        response = admin_api_client.get(f"/api/packs/{pack_id}")
        assert response.status_code == 200
        assert response.json()["pack"]["id"] == pack_id
        assert "progress" not in response.json()

    def test_get_pack_reads_through_configured_store(self, admin_api_client, create_pack, monkeypatch):
        pack_id = create_pack().json()["pack"]["id"]
        reads = []

        class RecordingStore(DjangoCatalogStore):
            def get_pack(self, pack_id):
                reads.append(pack_id)
                return super().get_pack(pack_id)

        monkeypatch.setattr(dependencies, "catalog_store", RecordingStore)

        assert admin_api_client.get(f"/api/packs/{pack_id}").status_code == 200
        assert [str(r) for r in reads] == [pack_id]

    def test_malformed_id(self, admin_api_client):
        response = admin_api_client.get("/api/packs/not-a-uuid")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_ID"

    def test_unknown_pack(self, admin_api_client):
        response = admin_api_client.get("/api/packs/00000000-0000-0000-0000-000000000000")
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Pack not found"

    def test_edit_soft_deletes_and_adds(self, admin_api_client, create_pack, payload, wav_upload):
        created = create_pack().json()
        kick, groove = created["samples"]
        body = {
            **payload,
            "cover": None,
            "removed_sample_ids": [kick["id"]],
            "sample_edits": [{"id": groove["id"], "name": "Groove", "type": "Loop", "bpm": 98}],
            "new_samples": [{"file": "n0", "type": "One-shot"}],
        }
        del body["samples"], body["status"]

        response = admin_api_client.put(
            f"/api/packs/{created['pack']['id']}",
            {"payload": json.dumps(body), "n0": wav_upload("clap.wav")},
            format="multipart",
        )

        assert response.status_code == 200
        samples = response.json()["samples"]
        assert [s["name"] for s in samples] == ["Groove", "clap"]
        assert samples[0]["bpm"] == 98
        assert samples[1]["type"] == "One-shot"
        assert orm.Sample.objects.get(id=kick["id"]).status == "Deleted"

    def test_delete_pack_without_downloads(self, admin_api_client, create_pack):
        pack_id = create_pack().json()["pack"]["id"]
        assert admin_api_client.delete(f"/api/packs/{pack_id}").status_code == 204
        assert not orm.Pack.objects.filter(id=pack_id).exists()

    def test_delete_pack_with_downloads(self, admin_api_client, create_pack):
        pack_id = create_pack().json()["pack"]["id"]
        orm.Pack.objects.filter(id=pack_id).update(download_count=12)

        response = admin_api_client.delete(f"/api/packs/{pack_id}")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "ENTITY_IN_USE"


@pytest.mark.django_db
class TestLifecycleEndpoints:
    """Tests for status changes and the public sample listing."""

    def test_disable_hides_public_samples(self, api_client, admin_api_client, create_pack):
        pack_id = create_pack().json()["pack"]["id"]
        public_url = f"/api/public/packs/{pack_id}/samples"
        assert len(api_client.get(public_url).json()) == 2

        response = admin_api_client.post(f"/api/packs/{pack_id}/status", {"status": "Disabled"}, format="json")

        assert response.status_code == 200
        assert response.json()["status"] == "Disabled"
        assert api_client.get(public_url).json() == []

    def test_invalid_transition_conflict(self, admin_api_client, create_pack):
        pack_id = create_pack().json()["pack"]["id"]
        response = admin_api_client.post(f"/api/packs/{pack_id}/status", {"status": "Draft"}, format="json")
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVALID_TRANSITION"

    def test_disable_single_sample(self, api_client, admin_api_client, create_pack):
        created = create_pack().json()
        sample_id = created["samples"][0]["id"]

        response = admin_api_client.post(f"/api/samples/{sample_id}/status", {"status": "Disabled"}, format="json")

        assert response.status_code == 200
        public = api_client.get(f"/api/public/packs/{created['pack']['id']}/samples").json()
        assert [s["name"] for s in public] == ["Groove"]


@pytest.mark.django_db
class TestTermEndpoints:
    """Tests for usage checks, guarded deletes and toggles."""

    def test_usage_of_referenced_category(self, admin_api_client, create_pack, category):
        create_pack()
        response = admin_api_client.get(f"/api/categories/{category.id}/usage")
        assert response.json() == {"usage": 1, "can_delete": False}

    def test_delete_referenced_genre_refused(self, admin_api_client, create_pack, genre):
        create_pack()
        response = admin_api_client.delete(f"/api/genres/{genre.id}")
        assert response.status_code == 409
        assert response.json()["error"]["message"] == (
            "Cannot delete genre: 1 pack(s) and sample(s) still reference it. Disable it instead."
        )

    def test_delete_unused_mood(self, admin_api_client, mood):
        assert admin_api_client.delete(f"/api/moods/{mood.id}").status_code == 204

    def test_toggle_creator(self, admin_api_client, creator):
        response = admin_api_client.post(f"/api/creators/{creator.id}/active", {"active": False}, format="json")
        assert response.status_code == 200
        creator.refresh_from_db()
        assert creator.is_active is False
