from __future__ import annotations

from functools import partial

import aiosqlite
import pytest

from tracks.repository import TrackRepository


def test_create_track_requires_event_types(client, make_user):
    user = make_user()

    none = client.post(
        "/api/tracks",
        json={"name": "Laguna Seca", "location": "Monterey, CA", "eventTypes": []},
        headers=user["headers"],
    )
    invalid = client.post(
        "/api/tracks",
        json={"name": "Laguna Seca", "location": "Monterey, CA", "eventTypes": ["RALLY"]},
        headers=user["headers"],
    )

    assert none.status_code == 400
    assert none.json()["detail"] == "Select at least one event type"
    assert invalid.status_code == 400
    assert invalid.json()["detail"] == "Invalid event type: RALLY"


def test_create_track_name_and_location_length(client, make_user):
    user = make_user()
    short_name = client.post(
        "/api/tracks",
        json={"name": "L", "location": "Monterey, CA", "eventTypes": ["DRIFT"]},
        headers=user["headers"],
    )
    short_location = client.post(
        "/api/tracks",
        json={"name": "Laguna Seca", "location": "M", "eventTypes": ["DRIFT"]},
        headers=user["headers"],
    )
    assert short_name.status_code == 400
    assert short_location.status_code == 400


def test_create_track_requires_auth(client):
    response = client.post(
        "/api/tracks",
        json={"name": "Laguna Seca", "location": "Monterey, CA", "eventTypes": ["ROADCOURSE"]},
    )
    assert response.status_code == 401


def test_create_track_defaults(client, make_user):
    user = make_user(name="Track Builder")

    response = client.post(
        "/api/tracks",
        json={
            "name": "Laguna Seca",
            "location": "Monterey, CA",
            "eventTypes": ["ROADCOURSE", "DRIFT", "ROADCOURSE"],
        },
        headers=user["headers"],
    )

    assert response.status_code == 201
    track = response.json()
    assert track["status"] == "APPROVED"
    assert track["isImported"] is False
    assert track["uploadedById"] == user["id"]
    assert track["uploadedBy"] == {"id": user["id"], "name": "Track Builder"}
    assert sorted(e["eventType"] for e in track["events"]) == ["DRIFT", "ROADCOURSE"]
    assert track["_count"] == {"reviews": 0, "zones": 0, "lapRecords": 0}
    assert track["avgRating"] == 0


def test_duplicate_track_conflicts(client, make_user, make_track):
    user = make_user()
    make_track(user, name="Thunderhill", location="Willows, CA")

    response = client.post(
        "/api/tracks",
        json={"name": "Thunderhill", "location": "Willows, CA", "eventTypes": ["ROADCOURSE"]},
        headers=user["headers"],
    )
    assert response.status_code == 409


def test_list_only_shows_approved_tracks(client, make_user, make_track, run_sql):
    user = make_user()
    visible = make_track(user)
    pending = make_track(user)
    rejected = make_track(user)
    run_sql('UPDATE "Track" SET status = ? WHERE id = ?', "PENDING", pending["id"])
    run_sql('UPDATE "Track" SET status = ? WHERE id = ?', "REJECTED", rejected["id"])

    response = client.get("/api/tracks")

    assert response.status_code == 200
    assert [t["id"] for t in response.json()] == [visible["id"]]


def test_list_filters(client, make_user, make_track, run_sql):
    user = make_user()
    laguna = make_track(user, name="Laguna Seca", location="Monterey, CA", eventTypes=["ROADCOURSE"])
    drift = make_track(user, name="Evergreen Speedway", location="Monroe, WA", eventTypes=["DRIFT"])
    run_sql('UPDATE "Track" SET state = ? WHERE id = ?', "CA", laguna["id"])
    run_sql('UPDATE "Track" SET state = ? WHERE id = ?', "WA", drift["id"])

    by_name = client.get("/api/tracks", params={"search": "Laguna"}).json()
    by_location = client.get("/api/tracks", params={"search": "Monroe"}).json()
    by_event = client.get("/api/tracks", params={"eventType": "DRIFT"}).json()
    by_state = client.get("/api/tracks", params={"state": "ca"}).json()

    assert [t["id"] for t in by_name] == [laguna["id"]]
    assert [t["id"] for t in by_location] == [drift["id"]]
    assert [t["id"] for t in by_event] == [drift["id"]]
    assert [t["id"] for t in by_state] == [laguna["id"]]


def test_list_is_newest_first_with_counts(client, make_user, make_track):
    user = make_user()
    older = make_track(user)
    newer = make_track(user)

    tracks = client.get("/api/tracks").json()

    assert [t["id"] for t in tracks] == [newer["id"], older["id"]]
    assert tracks[0]["_count"] == {"reviews": 0, "zones": 0, "lapRecords": 0}
    assert tracks[0]["uploadedBy"]["id"] == user["id"]
    assert len(tracks[0]["events"]) == 2


def test_average_rating(client, make_user, make_track):
    user = make_user()
    track = make_track(user)

    assert client.get(f"/api/tracks/{track['id']}").json()["avgRating"] == 0

    for rating in (5, 3):
        response = client.post(
            f"/api/tracks/{track['id']}/reviews",
            json={"rating": rating, "conditions": "DRY"},
            headers=user["headers"],
        )
        assert response.status_code == 201

    detail = client.get(f"/api/tracks/{track['id']}").json()
    listed = client.get("/api/tracks").json()[0]
    assert detail["avgRating"] == 4
    assert detail["_count"]["reviews"] == 2
    assert listed["avgRating"] == 4


def test_track_detail(client, make_user, make_track, make_car):
    user = make_user(name="Detail Owner")
    make_car(user, make="Toyota", model="GR86", year=2023)
    track = make_track(user, eventTypes=["AUTOCROSS", "DRIFT"])
    headers = user["headers"]

    client.post(
        f"/api/tracks/{track['id']}/zones",
        json={"name": "Turn 1", "posX": 10, "posY": 20, "eventType": "AUTOCROSS"},
        headers=headers,
    )
    drift_zone = client.post(
        f"/api/tracks/{track['id']}/zones",
        json={"name": "Clipping point", "posX": 50, "posY": 50, "eventType": "DRIFT"},
        headers=headers,
    ).json()
    client.post(
        f"/api/tracks/{track['id']}/zones/{drift_zone['id']}/tips",
        json={"content": "Initiate early", "conditions": "WET"},
        headers=headers,
    )
    client.post(
        f"/api/tracks/{track['id']}/reviews",
        json={"rating": 4, "conditions": "DRY", "content": "Great surface"},
        headers=headers,
    )

    response = client.get(f"/api/tracks/{track['id']}")

    assert response.status_code == 200
    detail = response.json()
    assert detail["uploadedBy"] == {"id": user["id"], "name": "Detail Owner", "experience": "BEGINNER"}
    assert {e["eventType"] for e in detail["events"]} == {"AUTOCROSS", "DRIFT"}
    assert len(detail["zones"]) == 2
    assert detail["_count"] == {"reviews": 1, "zones": 2, "lapRecords": 0}

    review = detail["reviews"][0]
    assert review["author"]["cars"] == [{"make": "Toyota", "model": "GR86", "year": 2023}]
    assert review["trackEvent"] is None

    filtered = client.get(f"/api/tracks/{track['id']}", params={"eventType": "DRIFT"}).json()
    assert [z["id"] for z in filtered["zones"]] == [drift_zone["id"]]
    tip = filtered["zones"][0]["tips"][0]
    assert tip["content"] == "Initiate early"
    assert tip["author"] == {"id": user["id"], "name": "Detail Owner"}


def test_track_detail_missing(client):
    response = client.get("/api/tracks/nope")
    assert response.status_code == 404
    assert response.json()["detail"] == "Track not found"


def test_update_track_partial(client, make_user, make_track):
    user = make_user()
    track = make_track(user, name="Old Name", location="Old Town, TX")

    response = client.patch(
        f"/api/tracks/{track['id']}",
        json={"name": "New Name", "imageUrl": "https://example.com/track.jpg"},
        headers=user["headers"],
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["name"] == "New Name"
    assert updated["location"] == "Old Town, TX"
    assert updated["imageUrl"] == "https://example.com/track.jpg"
    assert updated["description"] == track["description"]


def test_update_track_rules(client, make_user, make_track):
    owner = make_user()
    stranger = make_user()
    track = make_track(owner)

    forbidden = client.patch(f"/api/tracks/{track['id']}", json={"name": "Mine now"}, headers=stranger["headers"])
    missing = client.patch("/api/tracks/nope", json={"name": "Whatever"}, headers=owner["headers"])
    too_short = client.patch(f"/api/tracks/{track['id']}", json={"name": "X"}, headers=owner["headers"])

    assert forbidden.status_code == 403
    assert forbidden.json()["detail"] == "You can only edit your own tracks"
    assert missing.status_code == 404
    assert too_short.status_code == 400


def test_create_with_events_rolls_back_on_failure(client, make_user):
    user = make_user()
    tracks = TrackRepository(client.app.state.db)
    create = partial(
        tracks.create_with_events,
        name="Orphan Raceway",
        location="Nowhere, NV",
        description=None,
        image_url=None,
        event_types=["DRIFT", "DRIFT"],
        user_id=user["id"],
    )

    with pytest.raises(aiosqlite.IntegrityError):
        client.portal.call(create)

    leftover = client.portal.call(
        tracks.get_by_name_and_location, "Orphan Raceway", "Nowhere, NV"
    )
    assert leftover is None

    listing = client.get("/api/tracks")
    assert listing.status_code == 200
    assert listing.json() == []
