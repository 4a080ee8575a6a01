"""API tests for /posts: ability gating, ownership, validation and not-found handling."""

from unittest.mock import patch

from postboard.models import Post
from tests.api_case import ApiTestCase


class TestPostsRequireToken(ApiTestCase):
    def test_every_route_requires_token(self) -> None:
        for method, path in (
            ("GET", "/api/posts"),
            ("POST", "/api/posts"),
            ("GET", "/api/posts/1"),
            ("PUT", "/api/posts/1"),
            ("DELETE", "/api/posts/1"),
        ):
            with self.subTest(method=method, path=path):
                resp = self.client.request(method, path, json={"title": "x"})
                self.assertEqual(resp.status_code, 401)
                self.assertEqual(resp.json()["message"], "Unauthenticated")


class TestCreateAndRead(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user, self.token = self.register()

    def test_create_post(self) -> None:
        resp = self.client.post(
            "/api/posts",
            json={"title": "Hello", "description": "First post", "user_id": 999},
            headers=self.auth(self.token),
        )
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertIs(body["status"], True)
        self.assertEqual(body["message"], "Post created successfully")
        post = body["data"]["post"]
        self.assertEqual(post["title"], "Hello")
        self.assertEqual(post["description"], "First post")
        self.assertEqual(post["user_id"], self.user["id"])
        self.assertEqual(post["user"]["id"], self.user["id"])

    def test_create_validation(self) -> None:
        resp = self.client.post(
            "/api/posts",
            json={"title": "t" * 256},
            headers=self.auth(self.token),
        )
        self.assertEqual(resp.status_code, 422)
        errors = resp.json()["errors"]
        self.assertEqual(set(errors), {"title", "description"})
        self.assertEqual(self.session().query(Post).count(), 0)

    def test_list_posts_with_owners(self) -> None:
        _, other_token = self.register(name="B", email="b@x.com")
        first = self.create_post(self.token, title="one")
        second = self.create_post(other_token, title="two")
        resp = self.client.get("/api/posts", headers=self.auth(self.token))
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["message"], "Posts retrieved successfully")
        posts = body["data"]["posts"]
        self.assertEqual([p["id"] for p in posts], [first["id"], second["id"]])
        self.assertEqual(posts[1]["user"]["email"], "b@x.com")

    def test_list_posts_empty(self) -> None:
        resp = self.client.get("/api/posts", headers=self.auth(self.token))
        self.assertEqual(resp.json()["data"], {"posts": []})

    def test_get_post_is_stable(self) -> None:
        post = self.create_post(self.token)
        first = self.client.get(f"/api/posts/{post['id']}", headers=self.auth(self.token))
        second = self.client.get(f"/api/posts/{post['id']}", headers=self.auth(self.token))
        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.json()["message"], "Post retrieved successfully")
        self.assertEqual(first.json()["data"]["post"], second.json()["data"]["post"])

    def test_any_user_can_read_others_post(self) -> None:
        post = self.create_post(self.token)
        _, other_token = self.register(name="B", email="b@x.com")
        resp = self.client.get(f"/api/posts/{post['id']}", headers=self.auth(other_token))
        self.assertEqual(resp.status_code, 200)

    def test_missing_post_is_404(self) -> None:
        for path in ("/api/posts/999", "/api/posts/abc"):
            with self.subTest(path=path):
                resp = self.client.get(path, headers=self.auth(self.token))
                self.assertEqual(resp.status_code, 404)
                self.assertIs(resp.json()["status"], False)


class TestUpdateAndDelete(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.owner, self.owner_token = self.register(name="Owner", email="owner@x.com")
        _, self.other_token = self.register(name="Other", email="other@x.com")
        self.post = self.create_post(self.owner_token, title="Original", description="Body")

    def _stored(self) -> Post | None:
        return self.session().get(Post, self.post["id"])

    def test_owner_updates_partially(self) -> None:
        resp = self.client.put(
            f"/api/posts/{self.post['id']}",
            json={"title": "Renamed"},
            headers=self.auth(self.owner_token),
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["message"], "Post updated successfully")
        self.assertEqual(body["data"]["post"]["title"], "Renamed")
        self.assertEqual(body["data"]["post"]["description"], "Body")
        self.assertEqual(self._stored().title, "Renamed")

    def test_owner_cannot_reassign_post(self) -> None:
        resp = self.client.put(
            f"/api/posts/{self.post['id']}",
            json={"user_id": 2, "description": "Changed"},
            headers=self.auth(self.owner_token),
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self._stored().user_id, self.owner["id"])

    def test_non_owner_update_forbidden(self) -> None:
        resp = self.client.put(
            f"/api/posts/{self.post['id']}",
            json={"title": "Hijacked"},
            headers=self.auth(self.other_token),
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(
            resp.json(), {"status": False, "message": "Unauthorized to update this post"}
        )
        self.assertEqual(self._stored().title, "Original")

    def test_admin_is_not_owner(self) -> None:
        admin_token = self.admin_token()
        resp = self.client.delete(f"/api/posts/{self.post['id']}", headers=self.auth(admin_token))
        self.assertEqual(resp.status_code, 403)
        self.assertIsNotNone(self._stored())

    def test_update_validation(self) -> None:
        resp = self.client.put(
            f"/api/posts/{self.post['id']}",
            json={"title": "t" * 300, "description": None},
            headers=self.auth(self.owner_token),
        )
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(set(resp.json()["errors"]), {"title", "description"})

    def test_update_missing_post_is_404(self) -> None:
        resp = self.client.put(
            "/api/posts/999",
            json={"title": "x"},
            headers=self.auth(self.owner_token),
        )
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Post not found")

    def test_non_owner_delete_forbidden(self) -> None:
        resp = self.client.delete(f"/api/posts/{self.post['id']}", headers=self.auth(self.other_token))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], "Unauthorized to delete this post")
        self.assertIsNotNone(self._stored())

    def test_owner_deletes(self) -> None:
        resp = self.client.delete(f"/api/posts/{self.post['id']}", headers=self.auth(self.owner_token))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json(), {"status": True, "message": "Post deleted successfully", "data": {}}
        )
        self.assertIsNone(self._stored())
        again = self.client.get(f"/api/posts/{self.post['id']}", headers=self.auth(self.owner_token))
        self.assertEqual(again.status_code, 404)

    def test_delete_missing_post_is_404_without_side_effects(self) -> None:
        resp = self.client.delete("/api/posts/999", headers=self.auth(self.owner_token))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(self.session().query(Post).count(), 1)


class TestServerError(ApiTestCase):
    def test_unexpected_error_is_generic_500(self) -> None:
        _, token = self.register()
        self.create_post(token)
        with patch(
            "postboard.api.posts.success",
            side_effect=RuntimeError("db password is hunter2"),
        ):
            resp = self.client.get("/api/posts", headers=self.auth(token))
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"status": False, "message": "Server error"})
        self.assertNotIn("hunter2", resp.text)
