"""Listing and pagination tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
import unittest

from fastapi.testclient import TestClient

from _support import SettingsEnvCase, auth_headers, register_user
from blogapi.domain.pagination import PageWindow, paginate, parse_page, total_pages
from blogapi.main import create_app
from blogapi.repositories.memory import InMemoryStore


class _TickingClock:
    def __init__(self, start: datetime, step: timedelta) -> None:
        self._now = start
        self._step = step

    def __call__(self) -> datetime:
        current = self._now
        self._now += self._step
        return current


class PaginationApiTests(SettingsEnvCase):
    def _seed(self, store: InMemoryStore, count: int, *, author_id: str) -> list[str]:
        return [
            store.create_post(author_id=author_id, title=f"Post {index}", content="Body").id
            for index in range(count)
        ]

    def test_twenty_one_posts_split_into_pages_of_nine(self) -> None:
        store = InMemoryStore(clock=_TickingClock(datetime(2026, 1, 1, tzinfo=UTC), timedelta(seconds=1)))
        app = create_app(store=store)
        client = TestClient(app)
        user = register_user(store, name="Ada", email="ada@example.com")
        created_ids = self._seed(store, 21, author_id=user.id)

        expected_sizes = {1: 9, 2: 9, 3: 3, 4: 0}
        for page, size in expected_sizes.items():
            with self.subTest(page=page):
                response = client.get("/api/v1/blogs", params={"page": page})
                self.assertEqual(response.status_code, 200)
                body = response.json()
                self.assertEqual(len(body["blogs"]), size)
                self.assertEqual(body["page"], page)
                self.assertEqual(body["total"], 21)
                self.assertEqual(body["pages"], 3)

        first_page = client.get("/api/v1/blogs").json()
        self.assertEqual([blog["id"] for blog in first_page["blogs"]], list(reversed(created_ids))[:9])
        self.assertEqual(first_page["blogs"][0]["author"]["name"], "Ada")

    def test_pages_cover_collection_without_gaps_or_duplicates_on_equal_timestamps(self) -> None:
        frozen = datetime(2026, 1, 1, tzinfo=UTC)
        store = InMemoryStore(clock=lambda: frozen)
        app = create_app(store=store)
        client = TestClient(app)
        created_ids = self._seed(store, 20, author_id="author-1")

        collected: list[str] = []
        body = client.get("/api/v1/blogs", params={"page": 1}).json()
        for page in range(1, body["pages"] + 1):
            collected.extend(blog["id"] for blog in client.get("/api/v1/blogs", params={"page": page}).json()["blogs"])

        self.assertEqual(len(collected), 20)
        self.assertEqual(len(set(collected)), 20)
        self.assertEqual(set(collected), set(created_ids))
        self.assertEqual(collected, sorted(created_ids, reverse=True))

    def test_page_below_one_is_clamped(self) -> None:
        app = create_app()
        client = TestClient(app)
        self._seed(app.state.store, 3, author_id="author-1")

        for page in (0, -4):
            with self.subTest(page=page):
                body = client.get("/api/v1/blogs", params={"page": page}).json()
                self.assertEqual(body["page"], 1)
                self.assertEqual(len(body["blogs"]), 3)

    def test_non_numeric_page_falls_back_to_first_page(self) -> None:
        app = create_app()
        client = TestClient(app)
        self._seed(app.state.store, 3, author_id="author-1")

        for raw in ("abc", "two", "2.5", ""):
            with self.subTest(page=raw):
                response = client.get("/api/v1/blogs", params={"page": raw})

                self.assertEqual(response.status_code, 200)
                self.assertEqual(response.json()["page"], 1)
                self.assertEqual(len(response.json()["blogs"]), 3)

    def test_client_limit_cannot_override_page_size(self) -> None:
        app = create_app()
        client = TestClient(app)
        self._seed(app.state.store, 15, author_id="author-1")

        body = client.get("/api/v1/blogs", params={"page": 1, "limit": 1000}).json()

        self.assertEqual(len(body["blogs"]), 9)
        self.assertEqual(body["pages"], 2)

    def test_empty_collection_has_zero_pages(self) -> None:
        app = create_app()
        client = TestClient(app)

        body = client.get("/api/v1/blogs").json()

        self.assertEqual(body, {"blogs": [], "page": 1, "pages": 0, "total": 0})

    def test_totals_are_recomputed_after_deletions(self) -> None:
        app = create_app()
        client = TestClient(app)
        store: InMemoryStore = app.state.store
        user = register_user(store, name="Ada", email="ada@example.com")
        ids = self._seed(store, 10, author_id=user.id)

        self.assertEqual(len(client.get("/api/v1/blogs", params={"page": 2}).json()["blogs"]), 1)

        client.delete(f"/api/v1/blogs/{ids[0]}", headers=auth_headers(user.id))
        body = client.get("/api/v1/blogs", params={"page": 2}).json()

        self.assertEqual(body["blogs"], [])
        self.assertEqual(body["total"], 9)
        self.assertEqual(body["pages"], 1)

    def test_author_filter_limits_listing(self) -> None:
        app = create_app()
        client = TestClient(app)
        store: InMemoryStore = app.state.store
        mine = self._seed(store, 4, author_id="author-1")
        self._seed(store, 6, author_id="author-2")

        body = client.get("/api/v1/blogs", params={"author": "author-1"}).json()

        self.assertEqual(body["total"], 4)
        self.assertEqual(body["pages"], 1)
        self.assertEqual({blog["id"] for blog in body["blogs"]}, set(mine))

    def test_persistence_failure_is_logged_and_masked(self) -> None:
        app = create_app()
        client = TestClient(app, raise_server_exceptions=False)
        app.state.store.list_failure_message = "connection reset by document store"

        with self.assertLogs("blogapi.main", level="ERROR") as logs:
            response = client.get("/api/v1/blogs")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"code": "INTERNAL_ERROR", "message": "Internal server error"})
        self.assertNotIn("connection reset", response.text)
        self.assertIn("request.failed", "\n".join(logs.output))


class PaginationUnitTests(unittest.TestCase):
    def test_window_skip_arithmetic(self) -> None:
        cases = [(None, 9, 1, 0), (1, 9, 1, 0), (3, 9, 3, 18), (0, 10, 1, 0), (-2, 10, 1, 0), (50, 10, 50, 490)]
        for requested, size, page, skip in cases:
            with self.subTest(requested=requested, size=size):
                window = PageWindow.for_request(requested, size)
                self.assertEqual(window.page, page)
                self.assertEqual(window.skip, skip)

    def test_total_pages_rounds_up(self) -> None:
        self.assertEqual(total_pages(0, 9), 0)
        self.assertEqual(total_pages(9, 9), 1)
        self.assertEqual(total_pages(10, 9), 2)
        self.assertEqual(total_pages(21, 9), 3)

    def test_parse_page_is_lenient(self) -> None:
        self.assertEqual(parse_page("3"), 3)
        self.assertEqual(parse_page(" 2 "), 2)
        self.assertEqual(parse_page("-4"), -4)
        self.assertIsNone(parse_page("abc"))
        self.assertIsNone(parse_page(""))
        self.assertIsNone(parse_page(None))
        self.assertEqual(PageWindow.for_request(parse_page("abc"), 9).page, 1)

    def test_non_positive_page_size_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            PageWindow.for_request(1, 0)

    def test_paginate_requests_one_bounded_slice(self) -> None:
        calls: list[tuple[int, int]] = []
        data = list(range(25))

        def fetch(skip: int, limit: int) -> tuple[list[int], int]:
            calls.append((skip, limit))
            return data[skip : skip + limit], len(data)

        page = paginate(fetch, requested_page=3, page_size=10)

        self.assertEqual(calls, [(20, 10)])
        self.assertEqual(page.items, [20, 21, 22, 23, 24])
        self.assertEqual((page.page, page.total_pages, page.total), (3, 3, 25))

    def test_page_past_end_is_empty_not_error(self) -> None:
        page = paginate(lambda skip, limit: ([], 5), requested_page=7, page_size=9)

        self.assertEqual(page.items, [])
        self.assertEqual((page.page, page.total_pages, page.total), (7, 1, 5))


if __name__ == "__main__":
    unittest.main()
