from conftest import auth_header


def test_create_movie_requires_admin(client, user_token):
    response = client.post(
        "/movies",
        json={"title": "Drive", "genres": ["Crime"], "durationMin": 100},
        headers=auth_header(user_token)
    )

    assert response.status_code == 403
    body = response.json()
    assert body["code"] == "INSUFFICIENT_PERMISSIONS"
    assert body["details"] == {"required": ["admin"], "current": "user"}


def test_create_movie_requires_token(client):
    response = client.post("/movies", json={"title": "Drive", "genres": ["Crime"], "durationMin": 100})

    assert response.status_code == 401


def test_create_movie_rejects_unknown_genre(client, admin_token):
    response = client.post(
        "/movies",
        json={"title": "Drive", "genres": ["Cyberpunk"], "durationMin": 100},
        headers=auth_header(admin_token)
    )

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "genres"


def test_get_movie(client, movie):
    response = client.get(f"/movies/{movie['id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "The Matrix"
    assert body["type"] == "movie"
    assert body["durationMin"] == 136
    assert body["genres"] == ["Action", "Sci-Fi"]


def test_get_missing_movie(client):
    response = client.get("/movies/999")

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_list_movies_with_filters(client, movie, admin_token):
    client.post(
        "/movies",
        json={"title": "Titanic", "genres": ["Drama", "Romance"], "durationMin": 195, "releaseDate": "1997-12-19"},
        headers=auth_header(admin_token)
    )

    everything = client.get("/movies").json()
    drama = client.get("/movies", params={"genre": "Drama"}).json()
    short = client.get("/movies", params={"maxDuration": 150}).json()

    assert everything["pagination"] == {"page": 1, "limit": 10, "total": 2, "pages": 1}
    assert [m["title"] for m in drama["data"]] == ["Titanic"]
    assert [m["title"] for m in short["data"]] == ["The Matrix"]


def test_list_movies_rejects_inverted_years(client):
    response = client.get("/movies", params={"minYear": 2010, "maxYear": 2000})

    assert response.status_code == 400


def test_update_and_delete_movie(client, movie, admin_token):
    updated = client.patch(
        f"/movies/{movie['id']}", json={"durationMin": 138}, headers=auth_header(admin_token)
    )
    assert updated.status_code == 200
    assert updated.json()["durationMin"] == 138
    assert updated.json()["title"] == "The Matrix"

    deleted = client.delete(f"/movies/{movie['id']}", headers=auth_header(admin_token))
    assert deleted.status_code == 200
    assert client.get(f"/movies/{movie['id']}").status_code == 404


def test_series_seasons_and_episodes(client, admin_token):
    headers = auth_header(admin_token)
    series = client.post(
        "/series", json={"title": "Dark", "genres": ["Drama", "Mystery"], "status": "finished"}, headers=headers
    ).json()
    season = client.post(f"/series/{series['id']}/seasons", json={"seasonNo": 1}, headers=headers)
    assert season.status_code == 201
    season = season.json()

    episode = client.post(
        "/episodes",
        json={"seasonId": season["id"], "epNo": 1, "title": "Secrets", "durationMin": 52},
        headers=headers
    )
    assert episode.status_code == 201
    assert episode.json()["seriesId"] == series["id"]

    duplicate = client.post(f"/series/{series['id']}/seasons", json={"seasonNo": 1}, headers=headers)
    assert duplicate.status_code == 409

    seasons = client.get(f"/series/{series['id']}/seasons").json()
    assert seasons[0]["episodeCount"] == 1

    episodes = client.get("/episodes", params={"seasonId": season["id"]}).json()
    assert episodes["pagination"]["total"] == 1
