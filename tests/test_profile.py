from __future__ import annotations


def test_profile_includes_cars_and_counts(client, make_user, make_track, make_car):
    user = make_user(name="Profile Person")
    car = make_car(user)
    client.post(
        f"/api/cars/{car['id']}/mods",
        json={"name": "Brake pads", "category": "BRAKES"},
        headers=user["headers"],
    )
    track = make_track(user)
    client.post(
        f"/api/tracks/{track['id']}/reviews",
        json={"rating": 5, "conditions": "DRY"},
        headers=user["headers"],
    )
    zone = client.post(
        f"/api/tracks/{track['id']}/zones",
        json={"name": "Hairpin", "posX": 1, "posY": 2},
        headers=user["headers"],
    ).json()
    client.post(
        f"/api/tracks/{track['id']}/zones/{zone['id']}/tips",
        json={"content": "Patience"},
        headers=user["headers"],
    )
    client.post(
        "/api/lapbook",
        json={"lapTime": "59.9", "conditions": "DRY", "trackId": track["id"], "carId": car["id"]},
        headers=user["headers"],
    )

    response = client.get("/api/profile", headers=user["headers"])

    assert response.status_code == 200
    profile = response.json()
    assert profile["id"] == user["id"]
    assert profile["name"] == "Profile Person"
    assert profile["email"] == user["email"]
    assert profile["experience"] == "BEGINNER"
    assert "passwordHash" not in profile
    assert [c["id"] for c in profile["cars"]] == [car["id"]]
    assert profile["cars"][0]["mods"][0]["name"] == "Brake pads"
    assert profile["_count"] == {"trackReviews": 1, "lapRecords": 1, "tracks": 1, "zoneTips": 1}


def test_update_profile(client, make_user):
    user = make_user()

    short = client.put("/api/profile", json={"name": "X", "experience": "PRO"}, headers=user["headers"])
    bad_level = client.put("/api/profile", json={"name": "Valid Name", "experience": "LEGEND"}, headers=user["headers"])
    assert short.status_code == 400
    assert bad_level.status_code == 400
    assert bad_level.json()["detail"] == "Invalid experience level"

    response = client.put(
        "/api/profile",
        json={"name": "Renamed Driver", "experience": "ADVANCED"},
        headers=user["headers"],
    )
    assert response.status_code == 200
    assert response.json() == {
        "id": user["id"],
        "name": "Renamed Driver",
        "email": user["email"],
        "experience": "ADVANCED",
    }


def test_profile_requires_auth(client):
    assert client.get("/api/profile").status_code == 401
