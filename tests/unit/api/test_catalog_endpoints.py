"""
HTTP tests for the public catalog (/api/movies, /api/categories) and the
admin write surface (/api/admin/*).
"""

import logging

import pytest

from catalog_api import container

pytestmark = pytest.mark.unit


@pytest.fixture
def create_movie(client, admin_headers):
    def _create(title, **fields):
        res = client.post(
            "/api/admin/movies", json={"title": title, **fields}, headers=admin_headers
        )
        assert res.status_code == 201, res.text
        return res.json()

    return _create


@pytest.fixture
def create_category(client, admin_headers):
    def _create(name):
        res = client.post(
            "/api/admin/categories", json={"name": name}, headers=admin_headers
        )
        assert res.status_code == 201, res.text
        return res.json()

    return _create


class TestAdminGate:
    @pytest.mark.parametrize(
        "method,path",
        [
            ("post", "/api/admin/movies"),
            ("put", "/api/admin/movies/1"),
            ("delete", "/api/admin/movies/1"),
            ("post", "/api/admin/categories"),
            ("delete", "/api/admin/categories/1"),
            ("get", "/api/admin/users"),
            ("get", "/api/admin/users/1"),
        ],
    )
    def test_requires_bearer(self, client, method, path):
        res = getattr(client, method)(path)
        assert res.status_code == 401

    def test_regular_user_is_forbidden(self, client, user_headers):
        res = client.post(
            "/api/admin/movies", json={"title": "Alien"}, headers=user_headers
        )

        assert res.status_code == 403
        assert res.json()["error"] == "Admin access required"

    def test_promotion_applies_without_new_token(self, client, register_user):
        body = register_user(email="late@example.com")
        headers = {"Authorization": f"Bearer {body['token']}"}
        assert client.get("/api/admin/users", headers=headers).status_code == 403

        container.get_user_repository().set_admin(body["user_id"], True)

        assert client.get("/api/admin/users", headers=headers).status_code == 200


class TestMovies:
    def test_create_then_get(self, client, create_movie):
        created = create_movie("Alien", release_year=1979, rating=8.5, categories=["Horror"])

        res = client.get(f"/api/movies/{created['id']}")

        assert res.status_code == 200
        assert res.json()["title"] == "Alien"
        assert res.json()["categories"] == ["Horror"]

    def test_get_missing_movie_is_404(self, client):
        res = client.get("/api/movies/999")

        assert res.status_code == 404
        assert res.json()["error"] == "Movie not found"

    def test_non_numeric_id_is_400(self, client):
        assert client.get("/api/movies/abc").status_code == 400

    def test_duplicate_title_is_409(self, client, create_movie, admin_headers):
        create_movie("Alien")
        res = client.post(
            "/api/admin/movies", json={"title": "Alien"}, headers=admin_headers
        )
        assert res.status_code == 409

    def test_blank_title_is_400(self, client, admin_headers):
        res = client.post("/api/admin/movies", json={"title": " "}, headers=admin_headers)

        assert res.status_code == 400
        assert res.json()["error"] == "Title is required"

    def test_list_with_pagination_and_sort(self, client, create_movie):
        for i, rating in enumerate([3.0, 9.0, 6.0, 7.5, 1.0]):
            create_movie(f"Movie {i}", rating=rating)

        res = client.get(
            "/api/movies", params={"sort_by": "rating_desc", "page": 1, "page_size": 2}
        )

        body = res.json()
        assert res.status_code == 200
        assert body["total"] == 5
        assert body["total_pages"] == 3
        assert body["page_size"] == 2
        assert [m["rating"] for m in body["movies"]] == [9.0, 7.5]

    def test_list_defaults(self, client):
        body = client.get("/api/movies").json()
        assert body == {
            "movies": [],
            "total": 0,
            "page": 1,
            "page_size": 10,
            "total_pages": 0,
        }

    def test_list_filters(self, client, create_movie, create_category):
        drama = create_category("Drama")
        create_movie("Heat", release_year=1995, categories=["Drama", "Crime"])
        create_movie("Up", release_year=2009, categories=["Animation"])

        by_search = client.get("/api/movies", params={"search": "HEA"}).json()
        by_tags = client.get("/api/movies", params={"categories": "Crime,Animation"}).json()
        by_repeat = client.get(
            "/api/movies", params=[("categories", "Crime"), ("categories", "Animation")]
        ).json()
        by_year = client.get("/api/movies", params={"year": 2009}).json()
        by_category = client.get("/api/movies", params={"category_id": drama["id"]}).json()

        assert [m["title"] for m in by_search["movies"]] == ["Heat"]
        assert by_tags["total"] == by_repeat["total"] == 2
        assert [m["title"] for m in by_year["movies"]] == ["Up"]
        assert [m["title"] for m in by_category["movies"]] == ["Heat"]

    def test_partial_update(self, client, create_movie, admin_headers):
        movie = create_movie("Alien", release_year=1979, rating=8.0)

        res = client.put(
            f"/api/admin/movies/{movie['id']}", json={"rating": 8.4}, headers=admin_headers
        )

        assert res.status_code == 200
        assert res.json()["rating"] == 8.4
        assert res.json()["release_year"] == 1979

    @pytest.mark.parametrize(
        "method,message",
        [("put", "movie updated"), ("delete", "movie deleted")],
    )
    def test_admin_mutation_is_logged_once(
        self, client, create_movie, admin_headers, caplog, method, message
    ):
        movie = create_movie("Alien")
        admin_id = client.get("/api/users/profile", headers=admin_headers).json()["id"]
        kwargs = {"json": {"rating": 7.0}} if method == "put" else {}

        with caplog.at_level(logging.INFO, logger="catalog-api"):
            res = getattr(client, method)(
                f"/api/admin/movies/{movie['id']}", headers=admin_headers, **kwargs
            )

        assert res.status_code in (200, 204)
        logged = [r for r in caplog.records if r.getMessage() == message]
        assert len(logged) == 1
        assert logged[0].admin_id == admin_id

    def test_update_missing_movie_is_404(self, client, admin_headers):
        res = client.put("/api/admin/movies/999", json={"rating": 5}, headers=admin_headers)
        assert res.status_code == 404

    def test_delete_is_204_then_404(self, client, create_movie, admin_headers):
        movie = create_movie("Alien")

        first = client.delete(f"/api/admin/movies/{movie['id']}", headers=admin_headers)
        second = client.delete(f"/api/admin/movies/{movie['id']}", headers=admin_headers)

        assert first.status_code == 204
        assert first.content == b""
        assert second.status_code == 404
        assert client.get(f"/api/movies/{movie['id']}").status_code == 404

    def test_highlights(self, client, create_movie):
        base = create_movie("Heat", rating=8.3, categories=["Crime"])
        create_movie("Ronin", rating=7.2, categories=["Crime"])
        create_movie("Up", rating=8.9, categories=["Animation"])

        top = client.get("/api/movies/top-rated", params={"limit": 1}).json()
        recent = client.get("/api/movies/recently-added").json()
        related = client.get(f"/api/movies/{base['id']}/related").json()

        assert [m["title"] for m in top["movies"]] == ["Up"]
        assert [m["title"] for m in recent["movies"]] == ["Up", "Ronin", "Heat"]
        assert [m["title"] for m in related["movies"]] == ["Ronin"]

    def test_related_for_missing_movie_is_404(self, client):
        assert client.get("/api/movies/999/related").status_code == 404


class TestCategories:
    def test_create_and_list(self, client, create_category):
        create_category("Drama")
        create_category("Action")

        body = client.get("/api/categories").json()
        assert [c["name"] for c in body["categories"]] == ["Action", "Drama"]

    def test_get_category(self, client, create_category):
        drama = create_category("Drama")

        assert client.get(f"/api/categories/{drama['id']}").json()["name"] == "Drama"
        assert client.get("/api/categories/999").status_code == 404

    def test_duplicate_is_409(self, client, create_category, admin_headers):
        create_category("Drama")
        res = client.post(
            "/api/admin/categories", json={"name": "Drama"}, headers=admin_headers
        )
        assert res.status_code == 409

    def test_delete_in_use_is_409_and_category_survives(
        self, client, create_category, create_movie, admin_headers
    ):
        drama = create_category("Drama")
        create_movie("Heat", categories=["Drama"])

        res = client.delete(f"/api/admin/categories/{drama['id']}", headers=admin_headers)

        assert res.status_code == 409
        assert res.json()["error"] == "Category is being used by movies"
        assert client.get(f"/api/categories/{drama['id']}").status_code == 200

    def test_delete_unused_is_204(self, client, create_category, admin_headers):
        drama = create_category("Drama")

        res = client.delete(f"/api/admin/categories/{drama['id']}", headers=admin_headers)

        assert res.status_code == 204
        assert client.get(f"/api/categories/{drama['id']}").status_code == 404

    def test_delete_missing_is_404(self, client, admin_headers):
        res = client.delete("/api/admin/categories/999", headers=admin_headers)
        assert res.status_code == 404


class TestAdminUsers:
    def test_list_users_paginated(self, client, register_user, admin_headers):
        for i in range(3):
            register_user(email=f"u{i}@example.com")

        res = client.get(
            "/api/admin/users", params={"page": 1, "page_size": 2}, headers=admin_headers
        )

        body = res.json()
        assert res.status_code == 200
        assert body["total"] == 4
        assert body["total_pages"] == 2
        assert len(body["users"]) == 2
        assert all("password_hash" not in u for u in body["users"])

    def test_get_user_by_id(self, client, register_user, admin_headers):
        user = register_user(email="target@example.com")

        res = client.get(f"/api/admin/users/{user['user_id']}", headers=admin_headers)

        assert res.status_code == 200
        assert res.json()["email"] == "target@example.com"
        assert client.get("/api/admin/users/999", headers=admin_headers).status_code == 404
