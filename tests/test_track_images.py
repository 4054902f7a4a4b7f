from __future__ import annotations


def _add_image(client, track_id, user, url="https://cdn.example.com/t1.jpg", caption=None):
    return client.post(
        f"/api/tracks/{track_id}/images",
        json={"url": url, "caption": caption},
        headers=user["headers"],
    )


def test_images_are_public_and_newest_first(client, make_user, make_track):
    user = make_user(name="Photographer")
    track = make_track(user)
    first = _add_image(client, track["id"], user, url="/uploads/tracks/a.jpg").json()
    second = _add_image(client, track["id"], user, caption="Pit lane").json()

    response = client.get(f"/api/tracks/{track['id']}/images")

    assert response.status_code == 200
    images = response.json()
    assert [img["id"] for img in images] == [second["id"], first["id"]]
    assert images[0]["caption"] == "Pit lane"
    assert images[0]["uploadedBy"] == {"id": user["id"], "name": "Photographer"}


def test_create_image_validation(client, make_user, make_track):
    user = make_user()
    track = make_track(user)

    bad_url = _add_image(client, track["id"], user, url="not-a-url")
    no_track = _add_image(client, "missing-track", user)

    assert bad_url.status_code == 400
    assert bad_url.json()["detail"] == "Invalid image URL"
    assert no_track.status_code == 404


def test_create_image_requires_auth(client, make_user, make_track):
    track = make_track(make_user())
    response = client.post(f"/api/tracks/{track['id']}/images", json={"url": "https://example.com/x.png"})
    assert response.status_code == 401


def test_delete_permissions(client, make_user, make_track):
    track_owner = make_user()
    image_uploader = make_user()
    stranger = make_user()
    track = make_track(track_owner)

    by_uploader = _add_image(client, track["id"], image_uploader).json()
    by_owner_target = _add_image(client, track["id"], image_uploader).json()

    forbidden = client.delete(
        f"/api/tracks/{track['id']}/images",
        params={"imageId": by_uploader["id"]},
        headers=stranger["headers"],
    )
    assert forbidden.status_code == 403

    own = client.delete(
        f"/api/tracks/{track['id']}/images",
        params={"imageId": by_uploader["id"]},
        headers=image_uploader["headers"],
    )
    assert own.status_code == 200
    assert own.json() == {"success": True}

    as_track_owner = client.delete(
        f"/api/tracks/{track['id']}/images",
        params={"imageId": by_owner_target["id"]},
        headers=track_owner["headers"],
    )
    assert as_track_owner.status_code == 200
    assert client.get(f"/api/tracks/{track['id']}/images").json() == []


def test_delete_requires_image_id_and_matching_track(client, make_user, make_track):
    user = make_user()
    track = make_track(user)
    other_track = make_track(user)
    image = _add_image(client, track["id"], user).json()

    missing_id = client.delete(f"/api/tracks/{track['id']}/images", headers=user["headers"])
    wrong_track = client.delete(
        f"/api/tracks/{other_track['id']}/images",
        params={"imageId": image["id"]},
        headers=user["headers"],
    )
    unknown = client.delete(
        f"/api/tracks/{track['id']}/images",
        params={"imageId": "nope"},
        headers=user["headers"],
    )

    assert missing_id.status_code == 400
    assert wrong_track.status_code == 404
    assert unknown.status_code == 404
