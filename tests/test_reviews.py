from __future__ import annotations


def test_review_validation(client, make_user, make_track):
    user = make_user()
    track = make_track(user)
    url = f"/api/tracks/{track['id']}/reviews"

    for rating in (0, 6):
        response = client.post(url, json={"rating": rating, "conditions": "DRY"}, headers=user["headers"])
        assert response.status_code == 400
        assert response.json()["detail"] == "Rating must be between 1 and 5"

    bad_conditions = client.post(url, json={"rating": 3, "conditions": "ICY"}, headers=user["headers"])
    assert bad_conditions.status_code == 400
    assert bad_conditions.json()["detail"] == "Invalid conditions"

    missing_track = client.post(
        "/api/tracks/missing/reviews",
        json={"rating": 3, "conditions": "DRY"},
        headers=user["headers"],
    )
    assert missing_track.status_code == 404


def test_review_with_event(client, make_user, make_track, make_car):
    user = make_user(name="Reviewer")
    make_car(user, make="BMW", model="M3", year=2008)
    track = make_track(user, eventTypes=["DRAG"])
    event = track["events"][0]

    response = client.post(
        f"/api/tracks/{track['id']}/reviews",
        json={"rating": 5, "conditions": "WET", "content": "Grippy", "trackEventId": event["id"]},
        headers=user["headers"],
    )

    assert response.status_code == 201
    review = response.json()
    assert review["trackEvent"] == {"id": event["id"], "eventType": "DRAG", "trackId": track["id"]}
    assert review["author"]["name"] == "Reviewer"
    assert review["author"]["experience"] == "BEGINNER"
    assert review["author"]["cars"] == [{"make": "BMW", "model": "M3", "year": 2008}]


def test_review_event_must_belong_to_track(client, make_user, make_track):
    user = make_user()
    track = make_track(user)
    other = make_track(user)

    response = client.post(
        f"/api/tracks/{track['id']}/reviews",
        json={"rating": 4, "conditions": "DRY", "trackEventId": other["events"][0]["id"]},
        headers=user["headers"],
    )
    assert response.status_code == 400
