from __future__ import annotations

import json
from pathlib import Path

import pytest


@pytest.fixture
def write_tracks_file(settings):
    def _write(content) -> None:
        data_dir = Path(settings.data_dir)
        data_dir.mkdir(parents=True, exist_ok=True)
        text = content if isinstance(content, str) else json.dumps(content)
        (data_dir / "usa-tracks.json").write_text(text, encoding="utf-8")

    return _write


DATASET = {
    "tracks": [
        {
            "name": "Sonoma Raceway",
            "location": "Sonoma, CA",
            "state": "ca",
            "types": ["roadcourse", "drag"],
            "latitude": 38.16,
            "longitude": -122.45,
            "description": "Hilly 12-turn circuit",
        },
        {
            "name": "Bogus Park",
            "location": "Nowhere, NV",
            "state": "NV",
            "types": ["hillclimb"],
        },
    ]
}


def test_requires_admin_email(client, make_user, write_tracks_file):
    write_tracks_file(DATASET)
    user = make_user()

    response = client.post("/api/admin/sync-tracks", headers=user["headers"])

    assert response.status_code == 403
    assert response.json()["detail"] == "Admin access required"


def test_requires_auth(client):
    assert client.post("/api/admin/sync-tracks").status_code == 401


def test_missing_data_file(client, make_user):
    admin = make_user(email="admin@example.com")

    response = client.post("/api/admin/sync-tracks", headers=admin["headers"])

    assert response.status_code == 500
    assert response.json()["details"] == "Could not read tracks data file"


def test_invalid_json(client, make_user, write_tracks_file):
    write_tracks_file("{not json")
    admin = make_user(email="admin@example.com")

    response = client.post("/api/admin/sync-tracks", headers=admin["headers"])

    assert response.status_code == 500
    assert response.json()["details"] == "Invalid JSON in tracks data file"


def test_sync_creates_then_updates(client, make_user, write_tracks_file):
    write_tracks_file(DATASET)
    admin = make_user(email="track-admin@example.com")

    first = client.post("/api/admin/sync-tracks", headers=admin["headers"])

    assert first.status_code == 200
    body = first.json()
    assert body["status"] == "success"
    assert body["summary"] == {"total": 2, "created": 1, "updated": 0, "failed": 1}
    assert body["errors"] == ["Bogus Park: Invalid event type: hillclimb"]

    tracks = client.get("/api/tracks").json()
    assert len(tracks) == 1
    imported = tracks[0]
    assert imported["isImported"] is True
    assert imported["status"] == "APPROVED"
    assert imported["state"] == "CA"
    assert imported["uploadedBy"]["name"] == "Trackside System"
    assert sorted(e["eventType"] for e in imported["events"]) == ["DRAG", "ROADCOURSE"]

    updated_dataset = {"tracks": [dict(DATASET["tracks"][0], description="Resurfaced in 2024")]}
    write_tracks_file(updated_dataset)

    second = client.post("/api/admin/sync-tracks", headers=admin["headers"]).json()
    assert second["summary"] == {"total": 1, "created": 0, "updated": 1, "failed": 0}
    assert "errors" not in second

    detail = client.get(f"/api/tracks/{imported['id']}").json()
    assert detail["description"] == "Resurfaced in 2024"
    assert len(detail["events"]) == 2


def test_sync_marks_existing_user_track_as_imported(client, make_user, make_track, write_tracks_file):
    user = make_user()
    track = make_track(user, name="Sonoma Raceway", location="Sonoma, CA")
    write_tracks_file({"tracks": [DATASET["tracks"][0]]})
    admin = make_user(email="admin@example.com")

    body = client.post("/api/admin/sync-tracks", headers=admin["headers"]).json()

    assert body["summary"]["updated"] == 1
    detail = client.get(f"/api/tracks/{track['id']}").json()
    assert detail["isImported"] is True
    assert detail["uploadedById"] == user["id"]
